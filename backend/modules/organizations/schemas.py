"""
modules/organizations/schemas.py: Pydantic schemas for auth, users and theme.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from core.base import Language
from core.schemas import CamelModel

MIN_PASSWORD_LENGTH = 6


def _clean_username(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("username must not be empty")
    return value


# ============== Auth ==============

class LoginRequest(CamelModel):
    username: str
    password: str


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)


# ============== Users ==============

class UserResponse(CamelModel):
    id: int
    username: str
    is_admin: bool
    force_change_password: bool
    language: Optional[Language] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None


class LoginResponse(CamelModel):
    user: UserResponse
    force_change_password: bool


class UserCreate(CamelModel):
    username: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    is_admin: bool = False
    force_change_password: bool = False

    @field_validator("username")
    @classmethod
    def _username(cls, v):
        return _clean_username(v)


class UserUpdate(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    is_admin: Optional[bool] = None
    force_change_password: Optional[bool] = None

    @field_validator("username")
    @classmethod
    def _username(cls, v):
        return None if v is None else _clean_username(v)


class LanguageUpdate(CamelModel):
    language: Language


# ============== Theme ==============

class ThemeConfig(CamelModel):
    variant: Literal["professional", "tint", "vibrant"]
    primary: str = Field(pattern=r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
    appearance: Literal["light", "dark", "system"]
    radius: float = Field(ge=0)


DEFAULT_THEME = ThemeConfig(variant="professional", primary="#E11D48", appearance="light", radius=0.5)
