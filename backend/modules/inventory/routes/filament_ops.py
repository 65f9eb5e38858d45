"""Filament batch operations (delete / update several filaments at once)."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from core.db import get_db
from core.dependencies import client_ip, get_current_user, log_audit
from core.rbac import can_modify
from modules.inventory.models import Filament
from modules.inventory.schemas import BatchDeleteRequest, BatchUpdateRequest
from modules.inventory.services import apply_update

log = logging.getLogger("filadex.api")
router = APIRouter(prefix="/filaments", tags=["Filaments"])


def _modifiable(db: Session, ids: list[int], current_user: dict) -> list[Filament]:
    """Filaments among ids that the caller owns (all of them for admins)."""
    filaments = db.query(Filament).filter(Filament.id.in_(ids)).all()
    return [f for f in filaments if can_modify(current_user, f.user_id)]


@router.delete("/batch")
def batch_delete_filaments(
    body: BatchDeleteRequest,
    request: Request,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete several filaments; ids the caller may not modify are skipped."""
    targets = _modifiable(db, body.ids, current_user)
    for f in targets:
        db.delete(f)
    log_audit(db, "filament.batch_delete", "filament", details={"ids": [f.id for f in targets]},
              ip=client_ip(request), user_id=current_user["id"])
    db.commit()
    return {"deleted": len(targets)}


@router.patch("/batch")
def batch_update_filaments(
    body: BatchUpdateRequest,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Apply the same partial update to several filaments."""
    targets = _modifiable(db, body.ids, current_user)
    for f in targets:
        apply_update(f, body.updates)
    db.commit()
    return {"updated": len(targets)}
