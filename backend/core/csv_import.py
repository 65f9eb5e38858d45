"""
core/csv_import.py: Line-at-a-time CSV import shared by the catalog and
inventory modules.

An import never aborts on a bad line: each line either creates a row, is
counted as a duplicate, or is counted as an error, and the loop moves on.
"""

import csv
import logging
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.schemas import ImportResult

log = logging.getLogger("filadex.api")


class RowOutcome(str, Enum):
    CREATED = "created"
    DUPLICATE = "duplicate"
    SKIPPED = "skipped"


def clean_cell(value: str) -> str:
    """Trim whitespace and stray quotes around a cell."""
    return value.strip().replace('"', "").strip()


def parse_line(line: str) -> list[str]:
    """Split one CSV line into cleaned cells, honoring quoted commas."""
    row = next(csv.reader([line]), [])
    return [clean_cell(cell) for cell in row]


def split_lines(text: str) -> list[str]:
    return (text or "").splitlines()


def detect_header(first_line: str, keywords: Sequence[str]) -> Optional[list[str]]:
    """Return the lowercased header cells when the first line looks like a header."""
    lowered = first_line.lower()
    if any(k in lowered for k in keywords):
        return [cell.lower() for cell in parse_line(first_line)]
    return None


def find_column(header: Optional[list[str]], keywords: Sequence[str], default: int = 0) -> int:
    """Index of the first header cell containing any keyword."""
    if header:
        for idx, cell in enumerate(header):
            if any(k in cell for k in keywords):
                return idx
    return default


def import_lines(
    lines: Iterable[tuple[int, str]],
    handle_row: Callable[[list[str]], RowOutcome],
    *,
    db: Optional[Session] = None,
    label: str = "CSV",
) -> ImportResult:
    """Feed each non-blank (line_number, line) to handle_row and tally outcomes."""
    result = ImportResult()
    for line_no, line in lines:
        if not line.strip():
            continue
        try:
            outcome = handle_row(parse_line(line))
        except Exception as exc:
            # Any failure rejects this line only
            if db is not None and isinstance(exc, SQLAlchemyError):
                db.rollback()
            log.warning(f"{label} import: line {line_no} rejected: {exc!r}")
            result.errors += 1
            continue
        if outcome is RowOutcome.CREATED:
            result.created += 1
        elif outcome is RowOutcome.DUPLICATE:
            result.duplicates += 1

    log.info(
        f"{label} import finished: {result.created} created, "
        f"{result.duplicates} duplicates, {result.errors} errors"
    )
    return result


def body_lines(text: str, header_keywords: Sequence[str]) -> tuple[Optional[list[str]], list[tuple[int, str]]]:
    """Split an import payload into (header cells or None, numbered data lines)."""
    lines = split_lines(text)
    if not lines:
        return None, []
    header = detect_header(lines[0], header_keywords)
    start = 1 if header is not None else 0
    return header, [(i + 1, line) for i, line in enumerate(lines) if i >= start]
