"""
core/base.py: Declarative Base and shared enums.

All ORM models import Base from here.
All shared enums (used across multiple domain modules) live here
to avoid circular imports between domain modules.
"""

from enum import Enum
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# SQLAlchemy 2.x defaults to using enum member NAMES as DB values.
# We want member VALUES (lowercase strings) instead.
_ENUM_VALUES = lambda x: [e.value for e in x]


class FilamentStatus(str, Enum):
    SEALED = "sealed"
    OPENED = "opened"


class SpoolType(str, Enum):
    SPOOLED = "spooled"
    SPOOLLESS = "spoolless"


class Language(str, Enum):
    EN = "en"
    DE = "de"
