"""
modules/inventory/schemas.py: Pydantic schemas for the inventory domain.

Clients send numeric fields either as numbers or as strings ("1.75", "1,75",
"80"); blank strings on optional fields mean "not set". Everything is
normalized here so routes and the database only see floats, ints and dates.
"""

import math
from datetime import date, datetime
from typing import Any, Optional, Union

from dateutil.parser import isoparse
from pydantic import Field, field_validator

from core.base import FilamentStatus, SpoolType
from core.schemas import CamelModel


def coerce_decimal(value: Any) -> Any:
    """'1,75' / ' 1.75 ' -> 1.75; '' -> None; non-numeric strings raise ValueError."""
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
        value = float(value)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


def coerce_int(value: Any) -> Any:
    """Decimal coercion followed by half-up rounding to an integer."""
    value = coerce_decimal(value)
    if isinstance(value, float):
        return int(math.floor(value + 0.5))
    return value


def coerce_date(value: Any) -> Any:
    """Accept dates, datetimes and ISO strings with or without a time part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if "T" in value or " " in value:
            return isoparse(value).date()
    return value


# ============== Filament Schemas ==============

_TEXT_FIELDS = (
    "name", "manufacturer", "material", "color_name", "color_code",
    "print_temp", "storage_location",
)
_REQUIRED_FIELDS = (
    "name", "material", "color_name", "total_weight", "remaining_percentage", "dryer_count",
)


class FilamentUpdate(CamelModel):
    """Partial update: only the keys present in the request are written."""
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    material: Optional[str] = None
    color_name: Optional[str] = None
    color_code: Optional[str] = None
    diameter: Optional[float] = Field(default=None, gt=0)
    print_temp: Optional[str] = None
    total_weight: Optional[float] = Field(default=None, gt=0)
    remaining_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    status: Optional[FilamentStatus] = None
    spool_type: Optional[SpoolType] = None
    dryer_count: Optional[int] = Field(default=None, ge=0)
    last_drying_date: Optional[date] = None
    storage_location: Optional[str] = None

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _strip_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("diameter", "total_weight", "purchase_price", mode="before")
    @classmethod
    def _decimal(cls, v):
        return coerce_decimal(v)

    @field_validator("remaining_percentage", "dryer_count", mode="before")
    @classmethod
    def _integer(cls, v):
        return coerce_int(v)

    @field_validator("purchase_date", "last_drying_date", mode="before")
    @classmethod
    def _date(cls, v):
        return coerce_date(v)

    @field_validator("status", "spool_type", mode="before")
    @classmethod
    def _enum(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator(*_REQUIRED_FIELDS)
    @classmethod
    def _not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} is required")
        return v


class FilamentCreate(FilamentUpdate):
    name: str
    material: str
    color_name: str
    total_weight: float = Field(gt=0)
    remaining_percentage: int = Field(default=100, ge=0, le=100)
    dryer_count: int = Field(default=0, ge=0)


class FilamentResponse(CamelModel):
    id: int
    user_id: int
    name: str
    manufacturer: Optional[str] = None
    material: str
    color_name: str
    color_code: Optional[str] = None
    diameter: Optional[float] = None
    print_temp: Optional[str] = None
    total_weight: float
    remaining_percentage: int
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = None
    status: Optional[FilamentStatus] = None
    spool_type: Optional[SpoolType] = None
    dryer_count: int = 0
    last_drying_date: Optional[date] = None
    storage_location: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============== Batch / import ==============

class BatchDeleteRequest(CamelModel):
    ids: list[int] = Field(min_length=1)


class BatchUpdateRequest(CamelModel):
    ids: list[int] = Field(min_length=1)
    updates: FilamentUpdate


class JsonImportRequest(CamelModel):
    # Either the raw JSON text or an already-decoded array
    json_data: Union[str, list]
