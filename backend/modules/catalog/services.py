"""
Catalog services: create, delete, reorder and bulk-import the reference lists.

Every list is described by a ReferenceKind so the five lists share one code
path. Names compare case-insensitively; diameters compare numerically.
"""

import csv
import io
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.csv_import import RowOutcome, body_lines, find_column, import_lines
from core.errors import DuplicateError, InUseError, NotFoundError, ValidationError
from core.registry import registry
from core.schemas import CamelModel, ImportResult
from modules.catalog.models import Color, Diameter, Manufacturer, Material, StorageLocation
from modules.catalog.schemas import (
    ColorCreate, ColorResponse, DiameterCreate, DiameterResponse, NamedItemCreate,
    NamedItemResponse,
)

log = logging.getLogger("filadex.api")


@dataclass(frozen=True)
class ReferenceKind:
    """How one reference list is stored, validated, exported and checked for use."""
    path: str
    label: str
    model: Any
    create_schema: type[CamelModel]
    response_schema: type[CamelModel]
    header_keywords: tuple[str, ...]
    export_columns: tuple[str, ...] = ("name",)
    orderable: bool = False
    # (filament attribute, item attribute) pairs checked before a delete
    usage: tuple[tuple[str, str], ...] = ()

    @property
    def key_field(self) -> str:
        return "value" if self.model is Diameter else "name"

    def order_by(self):
        if self.orderable:
            return (self.model.sort_order, self.model.name)
        return (getattr(self.model, self.key_field),)


MANUFACTURERS = ReferenceKind(
    path="manufacturers", label="Manufacturer", model=Manufacturer,
    create_schema=NamedItemCreate, response_schema=NamedItemResponse,
    header_keywords=("name", "hersteller", "vendor"),
    orderable=True, usage=(("manufacturer", "name"),),
)
MATERIALS = ReferenceKind(
    path="materials", label="Material", model=Material,
    create_schema=NamedItemCreate, response_schema=NamedItemResponse,
    header_keywords=("name", "material", "type"),
    orderable=True, usage=(("material", "name"),),
)
COLORS = ReferenceKind(
    path="colors", label="Color", model=Color,
    create_schema=ColorCreate, response_schema=ColorResponse,
    header_keywords=("name", "brand"),
    export_columns=("name", "code"),
    usage=(("color_name", "name"), ("color_code", "code")),
)
DIAMETERS = ReferenceKind(
    path="diameters", label="Diameter", model=Diameter,
    create_schema=DiameterCreate, response_schema=DiameterResponse,
    header_keywords=("value", "diameter"),
    export_columns=("value",),
    usage=(("diameter", "value"),),
)
STORAGE_LOCATIONS = ReferenceKind(
    path="storage-locations", label="Storage location", model=StorageLocation,
    create_schema=NamedItemCreate, response_schema=NamedItemResponse,
    header_keywords=("name", "location", "lagerort"),
    orderable=True, usage=(("storage_location", "name"),),
)

REFERENCE_KINDS = (MANUFACTURERS, MATERIALS, COLORS, DIAMETERS, STORAGE_LOCATIONS)


# ====================================================================
# Queries
# ====================================================================

def list_items(db: Session, kind: ReferenceKind) -> list:
    return db.query(kind.model).order_by(*kind.order_by()).all()


def get_item_or_404(db: Session, kind: ReferenceKind, item_id: int):
    item = db.query(kind.model).filter(kind.model.id == item_id).first()
    if not item:
        raise NotFoundError(f"{kind.label} not found")
    return item


def find_existing(db: Session, kind: ReferenceKind, key: Any):
    """The item whose name (case-insensitive) or diameter value equals key."""
    if kind.model is Diameter:
        return db.query(Diameter).filter(Diameter.value == key).first()
    return db.query(kind.model).filter(func.lower(kind.model.name) == key.lower()).first()


def _dedup_key(kind: ReferenceKind, key: Any) -> Any:
    return key if kind.model is Diameter else key.lower()


def items_to_csv(kind: ReferenceKind, items: list) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(kind.export_columns)
    for item in items:
        writer.writerow([getattr(item, col) for col in kind.export_columns])
    return output.getvalue()


# ====================================================================
# Mutations
# ====================================================================

def create_item(db: Session, kind: ReferenceKind, data: CamelModel):
    key = getattr(data, kind.key_field)
    if find_existing(db, kind, key) is not None:
        raise DuplicateError(f"{kind.label} '{key}' already exists")

    item = kind.model(**data.model_dump())
    db.add(item)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"{kind.label} '{key}' already exists")
    db.refresh(item)
    return item


def is_in_use(db: Session, kind: ReferenceKind, item) -> bool:
    """Whether any filament of any user references the item."""
    provider = registry.get_provider("FilamentQueryProvider")
    if provider is None:
        return False
    matches = {filament_attr: getattr(item, attr) for filament_attr, attr in kind.usage}
    return provider.is_referenced(db, matches)


def delete_item(db: Session, kind: ReferenceKind, item_id: int) -> None:
    item = get_item_or_404(db, kind, item_id)
    if is_in_use(db, kind, item):
        raise InUseError(f"Cannot delete {kind.label.lower()} that is in use by filaments")
    db.delete(item)
    db.commit()


def update_order(db: Session, kind: ReferenceKind, item_id: int, new_order: int):
    if not kind.orderable:
        raise ValidationError(f"{kind.label} entries have no sort order")
    item = get_item_or_404(db, kind, item_id)
    item.sort_order = new_order
    db.commit()
    db.refresh(item)
    return item


# ====================================================================
# CSV import
# ====================================================================

def _color_record(cells: list[str]) -> Optional[dict[str, str]]:
    """'Name,Code' or 'Brand,ColorName,HexCode' -> {name, code}."""
    if len(cells) < 2:
        raise ValueError("expected Name,Code or Brand,ColorName,HexCode")
    if len(cells) == 2:
        name, code = cells
    else:
        brand, color_name, code = cells[0], cells[1], cells[2]
        name = f"{color_name} ({brand})" if brand else color_name
    if not name or not code:
        raise ValueError("name and code are required")
    return {"name": name, "code": code}


def _single_column_record(
    kind: ReferenceKind, column: int, whole_line: bool = False
) -> Callable[[list[str]], Optional[dict]]:
    def extract(cells: list[str]) -> Optional[dict]:
        if whole_line:
            # "1,75" is one decimal value, not two cells
            value = ",".join(cells).strip()
        else:
            # A missing column raises IndexError and counts as a line error
            value = cells[0] if len(cells) == 1 else cells[column]
        if not value:
            return None
        return {kind.key_field: value}
    return extract


def import_csv(db: Session, kind: ReferenceKind, csv_text: str) -> ImportResult:
    """Bulk-create items from CSV text, one line at a time.

    Existing items are loaded once; names created earlier in the same import
    also count as duplicates.
    """
    header, lines = body_lines(csv_text, kind.header_keywords)
    if kind.model is Color:
        extract = _color_record
    else:
        # Diameters take the whole line unless the header names several columns
        whole_line = kind.model is Diameter and (header is None or len(header) <= 1)
        extract = _single_column_record(kind, find_column(header, kind.header_keywords), whole_line)

    seen = {_dedup_key(kind, getattr(item, kind.key_field)) for item in db.query(kind.model).all()}

    def handle_row(cells: list[str]) -> RowOutcome:
        record = extract(cells)
        if record is None:
            return RowOutcome.SKIPPED
        data = kind.create_schema.model_validate(record)
        key = _dedup_key(kind, getattr(data, kind.key_field))
        if key in seen:
            return RowOutcome.DUPLICATE

        db.add(kind.model(**data.model_dump()))
        try:
            db.commit()
        except IntegrityError:
            # Created concurrently by another import
            db.rollback()
            seen.add(key)
            return RowOutcome.DUPLICATE
        except SQLAlchemyError:
            db.rollback()
            raise
        seen.add(key)
        return RowOutcome.CREATED

    return import_lines(lines, handle_row, db=db, label=kind.label)


# ====================================================================
# Seeding
# ====================================================================

STARTER_DATA = {
    MANUFACTURERS: [{"name": n} for n in ("Bambu Lab", "Prusament", "Filamentworld", "Ninjatek")],
    MATERIALS: [{"name": n} for n in ("PLA", "PETG", "ABS", "TPU")],
    COLORS: [
        {"name": "Black", "code": "#000000"},
        {"name": "White", "code": "#FFFFFF"},
        {"name": "Red", "code": "#FF0000"},
        {"name": "Blue", "code": "#0000FF"},
        {"name": "Green", "code": "#00FF00"},
        {"name": "Grey", "code": "#808080"},
    ],
    DIAMETERS: [{"value": 1.75}, {"value": 2.85}],
    STORAGE_LOCATIONS: [{"name": "Keller"}],
}


def seed_reference_data(db: Session) -> None:
    """Fill empty reference lists with a starter catalog."""
    for kind, records in STARTER_DATA.items():
        if db.query(kind.model).first() is not None:
            continue
        for record in records:
            db.add(kind.model(**kind.create_schema.model_validate(record).model_dump()))
        db.commit()
        log.info(f"Seeded {len(records)} {kind.path}")
