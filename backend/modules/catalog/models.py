"""
modules/catalog/models.py: global reference lists offered as choices when
editing filaments.

Owns tables: manufacturers, materials, colors, diameters, storage_locations
"""

from sqlalchemy import Column, Integer, String, DateTime, Float
from sqlalchemy.sql import func

from core.base import Base

DEFAULT_SORT_ORDER = 999


class Manufacturer(Base):
    __tablename__ = "manufacturers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    sort_order = Column(Integer, default=DEFAULT_SORT_ORDER, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Material(Base):
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    sort_order = Column(Integer, default=DEFAULT_SORT_ORDER, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Color(Base):
    __tablename__ = "colors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    code = Column(String(9), nullable=False)  # #RRGGBB
    created_at = Column(DateTime, server_default=func.now())


class Diameter(Base):
    __tablename__ = "diameters"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(Float, unique=True, nullable=False)  # mm
    created_at = Column(DateTime, server_default=func.now())


class StorageLocation(Base):
    __tablename__ = "storage_locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    sort_order = Column(Integer, default=DEFAULT_SORT_ORDER, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
