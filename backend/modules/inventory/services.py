"""Inventory services: filament queries shared with other modules, and CRUD helpers."""

import logging
from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from core.interfaces.filament_query import FilamentQueryProvider
from modules.inventory.models import Filament
from modules.inventory.schemas import FilamentCreate, FilamentUpdate

log = logging.getLogger("filadex.api")


class FilamentQueryService(FilamentQueryProvider):
    """FilamentQueryProvider backed by the filaments table."""

    def list_for_user(self, db: Session, user_id: int) -> list:
        return (
            db.query(Filament)
            .filter(Filament.user_id == user_id)
            .order_by(Filament.id)
            .all()
        )

    def is_referenced(self, db: Session, matches: dict[str, Any]) -> bool:
        conditions = [
            getattr(Filament, field) == value
            for field, value in matches.items()
            if value is not None
        ]
        if not conditions:
            return False
        return db.query(Filament.id).filter(or_(*conditions)).first() is not None


def get_filament_or_404(db: Session, filament_id: int) -> Filament:
    filament = db.query(Filament).filter(Filament.id == filament_id).first()
    if not filament:
        raise NotFoundError("Filament not found")
    return filament


def list_filaments(db: Session, user_id: int, ids: Optional[list[int]] = None) -> list[Filament]:
    query = db.query(Filament).filter(Filament.user_id == user_id)
    if ids:
        query = query.filter(Filament.id.in_(ids))
    return query.order_by(Filament.id).all()


def build_filament(user_id: int, data: FilamentCreate) -> Filament:
    return Filament(user_id=user_id, **data.model_dump())


def apply_update(filament: Filament, update: FilamentUpdate) -> Filament:
    """Write only the keys the client actually sent."""
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(filament, field, value)
    return filament


def replace_fields(filament: Filament, data: FilamentCreate) -> Filament:
    """Full update: every editable field takes the submitted (or default) value."""
    for field, value in data.model_dump().items():
        setattr(filament, field, value)
    return filament
