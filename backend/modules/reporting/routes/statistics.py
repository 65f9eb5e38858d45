"""Filadex: dashboard statistics."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.db import get_db
from core.dependencies import get_current_user
from core.errors import InternalError
from core.registry import registry
from modules.reporting.statistics import compute_statistics

log = logging.getLogger("filadex.api")

router = APIRouter(tags=["Statistics"])


@router.get("/statistics")
def get_statistics(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    """Aggregate figures over the caller's filaments."""
    provider = registry.get_provider("FilamentQueryProvider")
    if provider is None:
        raise InternalError("Filament inventory is not available")
    filaments = provider.list_for_user(db, current_user["id"])
    return compute_statistics(filaments).to_json()
