"""
Dashboard statistics over a user's filaments.

compute_statistics() is a pure function of the filament rows and the current
time. Bad data never aborts it: a weight or percentage that is not a finite
number counts as zero, an unparsable purchase price falls back to the
material estimate and an unparsable purchase date is left out of the age
figures.
"""

import math
from collections import Counter
from datetime import date, datetime, time, timezone
from typing import Any, Iterable, Optional

from dateutil.parser import isoparse

from modules.reporting.schemas import AgedFilament, MaterialShare, StatsReport

# Estimated street price per kg (EUR) by lowercased material name
MATERIAL_VALUES = {
    "pla": 25,
    "petg": 30,
    "abs": 30,
    "tpu": 40,
    "asa": 40,
    "pa": 60,
    "pc": 60,
    "pva": 65,
    "hips": 30,
    "pla-cf": 50,
    "pa-cf": 75,
    "petg-cf": 55,
    "pet-cf": 55,
    "pla-hf": 35,
    "pp": 40,
    "petg-hf": 40,
    "pps": 80,
    "peek": 150,
    "pei": 100,
}
DEFAULT_MATERIAL_VALUE = 30

LOW_STOCK_THRESHOLD = 25  # percent
MIN_MATERIAL_SHARE = 5  # percent, inclusive
MAX_MATERIAL_ENTRIES = 5
TOP_N = 3
UNKNOWN_COLOR = "Unknown"
OTHER_MATERIAL = "other"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a cash register: 2.5 -> 3, 0.125 -> 0.13 (at 2 digits)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _number(value: Any) -> Optional[float]:
    """Finite float or None. Accepts numbers and numeric strings ("1,5" too)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _purchase_datetime(value: Any) -> Optional[datetime]:
    """Naive UTC datetime for a purchase date, or None when it cannot be read."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return None


def material_value(material: str) -> float:
    return MATERIAL_VALUES.get(material, DEFAULT_MATERIAL_VALUE)


def compute_statistics(filaments: Iterable[Any], now: Optional[datetime] = None) -> StatsReport:
    """Aggregate inventory figures for the statistics dashboard.

    ``filaments`` are objects exposing the Filament attributes (ORM rows in
    production). ``now`` defaults to the current UTC time.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)

    total_spools = 0
    total_weight = 0.0
    remaining_weight = 0.0
    low_stock = 0
    estimated_value = 0.0
    purchase_value = 0.0
    materials: Counter = Counter()
    colors: Counter = Counter()
    oldest: Optional[AgedFilament] = None
    newest: Optional[AgedFilament] = None
    ages: list[int] = []

    for f in filaments:
        total_spools += 1

        weight = _number(getattr(f, "total_weight", None)) or 0.0
        weight = max(weight, 0.0)
        percentage = _number(getattr(f, "remaining_percentage", None))
        if percentage is not None:
            percentage = min(max(percentage, 0.0), 100.0)
            if percentage < LOW_STOCK_THRESHOLD:
                low_stock += 1
        remaining = weight * (percentage or 0.0) / 100
        total_weight += weight
        remaining_weight += remaining

        material = (getattr(f, "material", None) or "").strip().lower() or OTHER_MATERIAL
        materials[material] += 1
        colors[getattr(f, "color_name", None) or UNKNOWN_COLOR] += 1

        unit_value = material_value(material)
        estimated_value += remaining * unit_value
        price = _number(getattr(f, "purchase_price", None))
        purchase_value += price if price is not None else weight * unit_value

        purchased = _purchase_datetime(getattr(f, "purchase_date", None))
        if purchased is not None:
            days = math.floor((now - purchased).total_seconds() / 86400)
            ages.append(days)
            name = getattr(f, "name", None) or ""
            if oldest is None or days > oldest.days:
                oldest = AgedFilament(name=name, days=days)
            if newest is None or days < newest.days:
                newest = AgedFilament(name=name, days=days)

    distribution = []
    if total_spools:
        for material, count in materials.items():
            share = int(round_half_up(count / total_spools * 100))
            if share >= MIN_MATERIAL_SHARE:
                distribution.append(MaterialShare(name=material.upper(), percentage=share))
    # sorted() is stable: first-seen material wins ties
    distribution = sorted(distribution, key=lambda m: m.percentage, reverse=True)[:MAX_MATERIAL_ENTRIES]

    average_remaining = 0
    if total_weight > 0:
        average_remaining = int(round_half_up(remaining_weight / total_weight * 100))

    return StatsReport(
        total_spools=total_spools,
        total_weight=round_half_up(total_weight, 2),
        remaining_weight=round_half_up(remaining_weight, 2),
        average_remaining=average_remaining,
        low_stock_count=low_stock,
        material_distribution=distribution,
        top_materials=[m.name for m in distribution[:TOP_N]],
        top_colors=[color for color, _ in colors.most_common(TOP_N)],
        estimated_value=int(round_half_up(estimated_value)),
        total_purchase_value=int(round_half_up(purchase_value)),
        average_age=int(round_half_up(sum(ages) / len(ages))) if ages else 0,
        oldest_filament=oldest,
        newest_filament=newest,
    )
