"""
Filament CSV/JSON export and import.

The CSV layout uses the camelCase column names of the JSON API. On import, a
first line containing any known column name is treated as a header and
columns are matched by name; without a header, the export column order is
assumed.
"""

import csv
import io
import json
import logging
from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.csv_import import RowOutcome, body_lines, import_lines
from core.errors import ValidationError
from core.schemas import ImportResult
from modules.inventory.models import Filament
from modules.inventory.schemas import FilamentCreate, FilamentResponse

log = logging.getLogger("filadex.api")

EXPORT_COLUMNS = [
    "name", "manufacturer", "material", "colorName", "colorCode", "diameter",
    "printTemp", "totalWeight", "remainingPercentage", "purchaseDate",
    "purchasePrice", "status", "spoolType", "dryerCount", "lastDryingDate",
    "storageLocation",
]
_HEADER_KEYWORDS = [c.lower() for c in EXPORT_COLUMNS]


# ====================================================================
# Export
# ====================================================================

def _export_row(filament: Filament) -> dict[str, Any]:
    data = FilamentResponse.model_validate(filament).to_json()
    return {col: data.get(col) for col in EXPORT_COLUMNS}


def filaments_to_csv(filaments: Iterable[Filament]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_COLUMNS)
    for f in filaments:
        row = _export_row(f)
        writer.writerow(["" if row[col] is None else row[col] for col in EXPORT_COLUMNS])
    return output.getvalue()


def filaments_to_json(filaments: Iterable[Filament]) -> str:
    return json.dumps([_export_row(f) for f in filaments], indent=2, ensure_ascii=False)


# ====================================================================
# Import
# ====================================================================

class _FilamentImporter:
    """Creates filaments for one user, skipping names the user already has."""

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id
        rows = db.query(Filament.name).filter(Filament.user_id == user_id).all()
        self.seen = {name.lower() for (name,) in rows}

    def create(self, record: dict[str, Any]) -> RowOutcome:
        record = {k: v for k, v in record.items() if v not in (None, "")}
        record.setdefault("totalWeight", "1")
        record.setdefault("remainingPercentage", "100")
        record.setdefault("dryerCount", 0)

        # name, material and colorName are required by FilamentCreate
        data = FilamentCreate.model_validate(record)
        if data.name.lower() in self.seen:
            return RowOutcome.DUPLICATE

        self.db.add(Filament(user_id=self.user_id, **data.model_dump()))
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.seen.add(data.name.lower())
        return RowOutcome.CREATED


def import_filaments_csv(db: Session, user_id: int, csv_text: str) -> ImportResult:
    header, lines = body_lines(csv_text, _HEADER_KEYWORDS)

    column_map: dict[str, int] = {}
    if header is not None:
        for col in EXPORT_COLUMNS:
            if col.lower() in header:
                column_map[col] = header.index(col.lower())
    else:
        column_map = {col: idx for idx, col in enumerate(EXPORT_COLUMNS)}

    importer = _FilamentImporter(db, user_id)

    def handle_row(cells: list[str]) -> RowOutcome:
        record = {
            col: cells[idx]
            for col, idx in column_map.items()
            if idx < len(cells)
        }
        return importer.create(record)

    return import_lines(lines, handle_row, db=db, label="Filament")


def import_filaments_json(db: Session, user_id: int, payload: Any) -> ImportResult:
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON: {exc.msg}")
    if not isinstance(payload, list):
        raise ValidationError("Invalid JSON format. Expected an array of filaments.")

    importer = _FilamentImporter(db, user_id)
    result = ImportResult()
    for idx, item in enumerate(payload, start=1):
        try:
            if not isinstance(item, dict):
                raise ValueError("entry is not an object")
            outcome = importer.create(dict(item))
        except Exception as exc:
            # Any failure rejects this entry only
            log.warning(f"Filament JSON import: entry {idx} rejected: {exc!r}")
            result.errors += 1
            continue
        if outcome is RowOutcome.CREATED:
            result.created += 1
        else:
            result.duplicates += 1
    log.info(
        f"Filament JSON import finished: {result.created} created, "
        f"{result.duplicates} duplicates, {result.errors} errors"
    )
    return result


def parse_id_list(raw: Optional[str]) -> Optional[list[int]]:
    """'1,2, 3' -> [1, 2, 3]; None or blank -> None."""
    if raw is None or not raw.strip():
        return None
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise ValidationError("ids must be a comma-separated list of integers")
