"""Pydantic schemas for sharing settings and the public view."""

from datetime import datetime
from typing import Optional

from pydantic import StrictBool

from core.schemas import CamelModel
from modules.inventory.schemas import FilamentResponse


class SharingUpdate(CamelModel):
    material_id: Optional[int] = None
    is_public: StrictBool


class SharingResponse(CamelModel):
    id: int
    user_id: int
    material_id: Optional[int] = None
    is_public: bool
    created_at: Optional[datetime] = None


class PublicOwner(CamelModel):
    id: int
    username: str


class PublicFilaments(CamelModel):
    filaments: list[FilamentResponse]
    user: PublicOwner
