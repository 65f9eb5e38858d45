"""
modules/sharing/models.py: public visibility flags for a user's inventory.

Owns tables: user_sharing
"""

from sqlalchemy import Column, Integer, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from core.base import Base


class SharingSetting(Base):
    """One visibility flag. material_id NULL is the "share everything" flag."""
    __tablename__ = "user_sharing"
    __table_args__ = (
        UniqueConstraint("user_id", "material_id", name="uq_user_sharing_user_material"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    material_id = Column(Integer, ForeignKey("materials.id", ondelete="CASCADE"), nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
