"""Pydantic schemas for the statistics dashboard."""

from typing import Optional

from core.schemas import CamelModel


class MaterialShare(CamelModel):
    name: str
    percentage: int


class AgedFilament(CamelModel):
    name: str
    days: int


class StatsReport(CamelModel):
    total_spools: int = 0
    total_weight: float = 0.0  # kg, 2 decimals
    remaining_weight: float = 0.0  # kg, 2 decimals
    average_remaining: int = 0  # percent, weighted by spool weight
    low_stock_count: int = 0
    material_distribution: list[MaterialShare] = []
    top_materials: list[str] = []
    top_colors: list[str] = []
    estimated_value: int = 0  # EUR
    total_purchase_value: int = 0  # EUR
    average_age: int = 0  # days
    oldest_filament: Optional[AgedFilament] = None
    newest_filament: Optional[AgedFilament] = None
