"""
modules/inventory/models.py: ORM models for the inventory domain.

Owns tables: filaments

Manufacturer, material, color and storage location are kept as display
strings copied from the reference lists, not foreign keys; the catalog module
refuses to delete a list item while a filament still carries its name.
"""

from sqlalchemy import (
    Column, Integer, String, Float, Date, DateTime, ForeignKey, Enum as SQLEnum,
    CheckConstraint,
)
from sqlalchemy.sql import func

from core.base import Base, FilamentStatus, SpoolType, _ENUM_VALUES


class Filament(Base):
    """One spool (or spoolless refill) of printing material owned by a user."""
    __tablename__ = "filaments"
    __table_args__ = (
        CheckConstraint("remaining_percentage >= 0 AND remaining_percentage <= 100",
                        name="ck_filaments_remaining_percentage"),
        CheckConstraint("dryer_count >= 0", name="ck_filaments_dryer_count"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    manufacturer = Column(String(200))
    material = Column(String(100), nullable=False)
    color_name = Column(String(200), nullable=False)
    color_code = Column(String(9))
    diameter = Column(Float)              # mm
    print_temp = Column(String(50))       # e.g. "200-220"

    # Weight tracking
    total_weight = Column(Float, nullable=False)                  # kg
    remaining_percentage = Column(Integer, nullable=False, default=100)

    # Purchase info
    purchase_date = Column(Date)
    purchase_price = Column(Float)        # EUR

    status = Column(SQLEnum(FilamentStatus, values_callable=_ENUM_VALUES), nullable=True)
    spool_type = Column(SQLEnum(SpoolType, values_callable=_ENUM_VALUES), nullable=True)

    # Drying
    dryer_count = Column(Integer, nullable=False, default=0)
    last_drying_date = Column(Date)

    storage_location = Column(String(200))

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
