"""
core/models.py: Core ORM models.

Owns tables: audit_logs
"""

from sqlalchemy import Column, String, DateTime, Integer, JSON
from sqlalchemy.sql import func

from core.base import Base


class AuditLog(Base):
    """Audit log for tracking user actions."""
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime, server_default=func.now())
    user_id = Column(Integer, nullable=True)
    action = Column(String(50), nullable=False)  # e.g. "auth.login", "filament.delete"
    entity_type = Column(String(50))  # e.g. "user", "filament", "material"
    entity_id = Column(Integer)
    details = Column(JSON)
    ip_address = Column(String(45))  # IPv4 or IPv6
