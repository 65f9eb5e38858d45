"""Pydantic schemas for the reference lists."""

import re
from datetime import datetime
from typing import Optional

from pydantic import StrictInt, field_validator

from core.schemas import CamelModel
from modules.inventory.schemas import coerce_decimal

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def normalize_color_code(code: str) -> str:
    code = code.strip()
    if code and not code.startswith("#"):
        code = "#" + code
    return code


class NamedItemCreate(CamelModel):
    name: str

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v


class ColorCreate(NamedItemCreate):
    code: str

    @field_validator("code", mode="before")
    @classmethod
    def _normalize_code(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("code must not be empty")
        code = normalize_color_code(v)
        if not _HEX_RE.match(code):
            raise ValueError("code must be a hex color such as #1A2B3C")
        return code


class DiameterCreate(CamelModel):
    value: float

    @field_validator("value", mode="before")
    @classmethod
    def _decimal(cls, v):
        v = coerce_decimal(v)
        if v is None:
            raise ValueError("value must not be empty")
        return v

    @field_validator("value")
    @classmethod
    def _positive(cls, v):
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v


class OrderUpdate(CamelModel):
    new_order: StrictInt


class NamedItemResponse(CamelModel):
    id: int
    name: str
    sort_order: int
    created_at: Optional[datetime] = None


class ColorResponse(CamelModel):
    id: int
    name: str
    code: str
    created_at: Optional[datetime] = None


class DiameterResponse(CamelModel):
    id: int
    value: float
    created_at: Optional[datetime] = None
