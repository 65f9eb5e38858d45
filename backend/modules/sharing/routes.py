"""Sharing settings and the unauthenticated public inventory view."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from core.db import get_db
from core.dependencies import get_current_user
from core.errors import NotFoundError
from modules.inventory.schemas import FilamentResponse
from modules.organizations.models import User
from modules.sharing.schemas import PublicFilaments, PublicOwner, SharingResponse, SharingUpdate
from modules.sharing.services import list_settings, set_sharing, sharing_policy

log = logging.getLogger("filadex.api")

router = APIRouter(tags=["Sharing"])


@router.get("/user-sharing")
def get_user_sharing(current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    """The caller's sharing flags."""
    return [SharingResponse.model_validate(s).to_json() for s in list_settings(db, current_user["id"])]


@router.post("/user-sharing")
def update_user_sharing(
    body: SharingUpdate,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create (201) or update (200) one sharing flag of the caller."""
    setting, created = set_sharing(db, current_user["id"], body.material_id, body.is_public)
    return JSONResponse(
        content=SharingResponse.model_validate(setting).to_json(),
        status_code=201 if created else 200,
    )


@router.get("/public/filaments/{user_id}")
def get_public_filaments(user_id: int, db: Session = Depends(get_db)):
    """Read-only view of a user's shared filaments. No authentication."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    if not sharing_policy.has_public_flags(db, user_id):
        raise NotFoundError("No public filaments found")

    filaments = sharing_policy.public_filaments(db, user_id)
    return PublicFilaments(
        filaments=[FilamentResponse.model_validate(f) for f in filaments],
        user=PublicOwner(id=user.id, username=user.username),
    ).to_json()
