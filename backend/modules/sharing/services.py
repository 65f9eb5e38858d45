"""
Sharing services.

A user either shares everything (the global flag, material_id NULL) or a set
of materials; enabling one kind of flag switches the other kind off. A
filament is publicly visible when the global flag is on, or when its material
name matches an actively shared material (case-insensitive).
"""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from core.interfaces.sharing_policy import SharingPolicyProvider
from modules.catalog.models import Material
from modules.inventory.models import Filament
from modules.sharing.models import SharingSetting

log = logging.getLogger("filadex.api")


def list_settings(db: Session, user_id: int) -> list[SharingSetting]:
    return (
        db.query(SharingSetting)
        .filter(SharingSetting.user_id == user_id)
        .order_by(SharingSetting.id)
        .all()
    )


def _find_setting(db: Session, user_id: int, material_id: Optional[int]) -> Optional[SharingSetting]:
    query = db.query(SharingSetting).filter(SharingSetting.user_id == user_id)
    if material_id is None:
        query = query.filter(SharingSetting.material_id.is_(None))
    else:
        query = query.filter(SharingSetting.material_id == material_id)
    return query.first()


def set_sharing(
    db: Session, user_id: int, material_id: Optional[int], is_public: bool
) -> tuple[SharingSetting, bool]:
    """Upsert the (user, material) flag. Returns (setting, created)."""
    if material_id is not None:
        if db.query(Material.id).filter(Material.id == material_id).first() is None:
            raise NotFoundError("Material not found")

    setting = _find_setting(db, user_id, material_id)
    created = setting is None
    if created:
        setting = SharingSetting(user_id=user_id, material_id=material_id, is_public=is_public)
        db.add(setting)
    else:
        setting.is_public = is_public

    if is_public:
        others = db.query(SharingSetting).filter(SharingSetting.user_id == user_id)
        if material_id is None:
            others = others.filter(SharingSetting.material_id.isnot(None))
        else:
            others = others.filter(SharingSetting.material_id.is_(None))
        others.update({SharingSetting.is_public: False}, synchronize_session="fetch")

    db.commit()
    db.refresh(setting)
    log.info(
        f"User {user_id} set sharing for "
        f"{'all materials' if material_id is None else f'material {material_id}'} to {is_public}"
    )
    return setting, created


class SharingPolicyService(SharingPolicyProvider):
    """SharingPolicyProvider backed by the user_sharing table."""

    def _visibility(self, db: Session, user_id: int) -> tuple[bool, bool, set[str]]:
        """(any flag active, global flag active, lowercased shared material names)."""
        active = (
            db.query(SharingSetting)
            .filter(SharingSetting.user_id == user_id, SharingSetting.is_public.is_(True))
            .all()
        )
        share_all = any(s.material_id is None for s in active)
        material_ids = [s.material_id for s in active if s.material_id is not None]
        names: set[str] = set()
        if material_ids:
            rows = db.query(func.lower(Material.name)).filter(Material.id.in_(material_ids)).all()
            names = {name for (name,) in rows}
        return bool(active), share_all, names

    def has_public_flags(self, db: Session, user_id: int) -> bool:
        return self._visibility(db, user_id)[0]

    def is_publicly_visible(self, db: Session, filament) -> bool:
        _, share_all, names = self._visibility(db, filament.user_id)
        return share_all or (filament.material or "").lower() in names

    def public_filaments(self, db: Session, user_id: int) -> list:
        any_active, share_all, names = self._visibility(db, user_id)
        if not any_active:
            return []
        filaments = (
            db.query(Filament)
            .filter(Filament.user_id == user_id)
            .order_by(Filament.id)
            .all()
        )
        if share_all:
            return filaments
        return [f for f in filaments if (f.material or "").lower() in names]


sharing_policy = SharingPolicyService()
