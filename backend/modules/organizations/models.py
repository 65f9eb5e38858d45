"""
modules/organizations/models.py: ORM models for users and their preferences.

Owns tables: users
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.sql import func

from core.base import Base, Language, _ENUM_VALUES


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    force_change_password = Column(Boolean, default=False, nullable=False)
    last_login = Column(DateTime, nullable=True)
    language = Column(SQLEnum(Language, values_callable=_ENUM_VALUES), default=Language.EN)

    # Per-user theme preference: {variant, primary, appearance, radius}
    theme = Column(JSON, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
