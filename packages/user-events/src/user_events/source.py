"""CSV bootstrap source for user records."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from .exceptions import MalformedRecordError, SourceError
from .models import UserRecord

FIELDS = ("id", "name", "email")

SEED_RECORDS = (
    UserRecord(id="1", name="John Doe", email="johndoe@example.com"),
    UserRecord(id="2", name="Jane Smith", email="janesmith@example.com"),
    UserRecord(id="3", name="Bob Johnson", email="bobjohnson@example.com"),
)


def is_missing(path: str | Path) -> bool:
    """True when the source does not exist or holds no data."""
    path = Path(path)
    return not path.is_file() or path.stat().st_size == 0


def write_seed(path: str | Path) -> list[UserRecord]:
    """Create the source with a header and the fixed sample users."""
    path = Path(path)
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(FIELDS)
            for record in SEED_RECORDS:
                writer.writerow([record.id, record.name, record.email])
    except OSError as e:
        raise SourceError(str(path), f"cannot write seed data: {e}") from e
    return list(SEED_RECORDS)


def read_records(path: str | Path) -> Iterator[tuple[int, UserRecord]]:
    """Yield `(line_number, record)` for every data row.

    Blank lines are skipped. The first non-blank row is skipped when it is
    the header. A leading byte order mark is ignored.
    """
    path = Path(path)
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f)
            header_checked = False
            for row in reader:
                if not row or all(not cell.strip() for cell in row):
                    continue
                if not header_checked:
                    header_checked = True
                    if tuple(cell.strip() for cell in row) == FIELDS:
                        continue
                yield reader.line_num, _parse_row(str(path), reader.line_num, row)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(str(path), f"cannot read records: {e}") from e


def _parse_row(source: str, lineno: int, row: list[str]) -> UserRecord:
    if len(row) < len(FIELDS):
        raise MalformedRecordError(
            source, lineno, f"expected {len(FIELDS)} fields, got {len(row)}"
        )
    try:
        return UserRecord(**dict(zip(FIELDS, (cell.strip() for cell in row))))
    except ValidationError as e:
        reason = "; ".join(err["msg"] for err in e.errors())
        raise MalformedRecordError(source, lineno, reason) from e
