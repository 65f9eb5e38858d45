"""Organizations services: user lookups and first-boot seeding."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.auth import hash_password
from core.config import settings
from modules.organizations.models import User

log = logging.getLogger("filadex.api")


def find_user_by_username(db: Session, username: str):
    """Case-insensitive username lookup."""
    return db.query(User).filter(func.lower(User.username) == username.lower()).first()


def admin_count(db: Session) -> int:
    return db.query(User).filter(User.is_admin.is_(True)).count()


def seed_default_admin(db: Session) -> None:
    """Create the initial admin account when the users table is empty.

    The account must change its password on first login.
    """
    if db.query(User).count() > 0:
        return
    db.add(User(
        username=settings.admin_username,
        password_hash=hash_password(settings.admin_password),
        is_admin=True,
        force_change_password=True,
    ))
    db.commit()
    if settings.admin_password == "admin":
        log.warning(
            f"Seeded default admin '{settings.admin_username}' with the default password. "
            "Set ADMIN_PASSWORD for production use."
        )
    else:
        log.info(f"Seeded default admin '{settings.admin_username}'")
