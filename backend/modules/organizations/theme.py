"""
Per-user theme preference.

The theme (variant, primary color, appearance, corner radius) lives on the
user row, so every signed-in user gets their own. Users without a stored
theme get DEFAULT_THEME.
"""

from fastapi import APIRouter, Depends
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.db import get_db
from core.dependencies import get_current_user
from core.errors import NotFoundError
from modules.organizations.models import User
from modules.organizations.schemas import DEFAULT_THEME, ThemeConfig

router = APIRouter(tags=["Theme"])


def theme_for(user: User) -> ThemeConfig:
    """Stored theme, or the default when missing or no longer valid."""
    if not user.theme:
        return DEFAULT_THEME
    try:
        return ThemeConfig.model_validate(user.theme)
    except PydanticValidationError:
        return DEFAULT_THEME


def _load_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("/theme", response_model=ThemeConfig)
def get_theme(current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    return theme_for(_load_user(db, current_user["id"]))


@router.post("/theme", response_model=ThemeConfig)
def update_theme(
    body: ThemeConfig,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = _load_user(db, current_user["id"])
    user.theme = body.to_json()
    db.commit()
    return body
