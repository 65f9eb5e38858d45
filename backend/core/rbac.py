"""
Filadex: Role and ownership checks.

Provides the require_admin FastAPI dependency and the ownership helpers used
by filament routes.
"""

from fastapi import Depends

from core.dependencies import get_current_user
from core.errors import ForbiddenError


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """FastAPI dependency: authenticated caller with the admin flag."""
    if not current_user.get("is_admin"):
        raise ForbiddenError("Admin access required")
    return current_user


def can_modify(current_user: dict, owner_id: int) -> bool:
    """Whether the caller may update or delete a resource owned by owner_id.

    Rules:
    - Admins: always True
    - Owner: True
    - Otherwise: False
    """
    if not current_user:
        return False
    if current_user.get("is_admin"):
        return True
    return current_user.get("id") == owner_id


def check_can_modify(current_user: dict, owner_id: int) -> None:
    if not can_modify(current_user, owner_id):
        raise ForbiddenError("You do not have permission to modify this filament")
