"""Loading contact records from CSV or Excel sources, and writing them back to CSV.

Malformed input is rejected here with ``RecordLoadError`` so the matching code can
assume well-formed records.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from contact_dedupe.datasets.profiles import CONTACT_COLUMNS, CONTACT_SCHEMA
from contact_dedupe.errors import RecordLoadError
from contact_dedupe.models import ContactRecord
from contact_dedupe.schema import FieldTag, RecordSchema

logger = logging.getLogger(__name__)

_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def read_contacts(path: Path, schema: RecordSchema = CONTACT_SCHEMA, positional: bool = False) -> list[ContactRecord]:
    """Load contacts, picking the reader from the file suffix."""
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return read_contacts_csv(path, schema=schema)
    if suffix in _EXCEL_SUFFIXES:
        return read_contacts_xlsx(path, schema=schema, positional=positional)
    raise RecordLoadError(path, f"unsupported file type {path.suffix or '(none)'!r}; expected .csv or .xlsx")


def read_contacts_csv(path: Path, schema: RecordSchema = CONTACT_SCHEMA) -> list[ContactRecord]:
    _require_file(path)
    with path.open("r", newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        headers = list(reader.fieldnames or [])
        resolved = _resolve_schema(path, schema, headers)
        # Row 1 is the header.
        rows = ((line, row) for line, row in enumerate(reader, start=2))
        return _build_records(path, resolved, rows)


def read_contacts_xlsx(
    path: Path,
    schema: RecordSchema = CONTACT_SCHEMA,
    positional: bool = False,
) -> list[ContactRecord]:
    """Load contacts from the first sheet of a workbook.

    The first row is a header. With ``positional`` the header text is ignored and
    columns are read in ``CONTACT_COLUMNS`` order.
    """
    _require_file(path)
    try:
        from openpyxl import load_workbook
    except ImportError as exc:
        raise ImportError(
            "Excel input requires openpyxl. "
            "Install with: pip install 'contact-dedupe[excel]'"
        ) from exc

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except Exception as exc:
        raise RecordLoadError(path, f"cannot open workbook: {exc}") from exc

    try:
        sheet = workbook.worksheets[0]
        row_iter = sheet.iter_rows(values_only=True)
        header_row = next(row_iter, None)
        if header_row is None:
            return []

        if positional:
            headers = list(CONTACT_COLUMNS)
            resolved = CONTACT_SCHEMA
        else:
            headers = [_cell_text(cell) or "" for cell in header_row]
            resolved = _resolve_schema(path, schema, headers)

        rows = (
            (line, {header: _cell_text(cell) for header, cell in zip(headers, values) if header})
            for line, values in enumerate(row_iter, start=2)
        )
        return _build_records(path, resolved, rows)
    finally:
        workbook.close()


def write_contacts_csv(path: Path, records: Sequence[ContactRecord]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=CONTACT_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow({column: _column_value(record, column) for column in CONTACT_COLUMNS})


def _build_records(
    path: Path,
    schema: RecordSchema,
    rows: Iterable[tuple[int, dict[str, object]]],
) -> list[ContactRecord]:
    records: list[ContactRecord] = []
    seen: dict[int, int] = {}

    for line, row in rows:
        if not any(_cell_text(value) for value in row.values()):
            continue

        record_id = _parse_id(path, line, schema.joined_value(row, FieldTag.CONTACT_ID))
        if record_id in seen:
            raise RecordLoadError(path, f"duplicate contact id {record_id} (first seen on row {seen[record_id]})", row=line)
        seen[record_id] = line

        records.append(
            ContactRecord(
                record_id=record_id,
                name=schema.optional_value(row, FieldTag.NAME),
                alt_name=schema.optional_value(row, FieldTag.ALT_NAME),
                email=schema.optional_value(row, FieldTag.EMAIL),
                postal_code=schema.optional_value(row, FieldTag.POSTAL_CODE),
                address=schema.optional_value(row, FieldTag.ADDRESS),
            )
        )

    logger.info("Loaded %d contacts from %s", len(records), path)
    return records


def _require_file(path: Path) -> None:
    if not path.is_file():
        raise RecordLoadError(path, "file not found")


def _resolve_schema(path: Path, schema: RecordSchema, headers: Sequence[str]) -> RecordSchema:
    resolved = schema.resolve(headers)
    if not resolved.columns_for(FieldTag.CONTACT_ID):
        expected = ", ".join(schema.columns_for(FieldTag.CONTACT_ID)) or FieldTag.CONTACT_ID.value
        raise RecordLoadError(path, f"missing id column (expected one of: {expected})", row=1)
    return resolved


def _parse_id(path: Path, line: int, raw: str) -> int:
    if not raw:
        raise RecordLoadError(path, "missing contact id", row=line)
    try:
        value = float(raw) if "." in raw else int(raw)
    except ValueError:
        raise RecordLoadError(path, f"contact id {raw!r} is not an integer", row=line) from None
    if isinstance(value, float):
        if not value.is_integer():
            raise RecordLoadError(path, f"contact id {raw!r} is not an integer", row=line)
        value = int(value)
    if value < 0:
        raise RecordLoadError(path, f"contact id {value} is negative", row=line)
    return value


def _cell_text(value: object) -> str | None:
    """Cell value as trimmed text; numbers lose a trailing ``.0``, blanks become ``None``."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def _column_value(record: ContactRecord, column: str) -> object:
    for tag in FieldTag:
        if column in CONTACT_SCHEMA.columns_for(tag):
            value = tag.value_of(record)
            return "" if value is None else value
    return ""
