"""
Text codecs for bulk import/export and result rendering.

- :func:`parse_records` turns CSV or JSON text into flat records.
- :func:`serialize_records` turns rows back into CSV or JSON text.
- :func:`render_table` renders a :class:`QueryResult` as the pipe-separated
  text block returned by ``run-readonly-query``.
- :func:`jsonable` makes driver values (``Decimal``, ``datetime``, ``bytes``)
  safe for a JSON envelope.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable, Sequence
from typing import Any

from sqlbridge.core.errors import ValidationError
from sqlbridge.core.models import QueryResult

NO_RESULTS = "No results."


def _scalar(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


def jsonable(rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Rows with every non-JSON scalar rendered via ``str()``."""
    return [{k: _scalar(v) for k, v in row.items()} for row in rows]


# ------------------------------------------------------------------ #
# Parsing
# ------------------------------------------------------------------ #


def _parse_json(text: str, columns: Sequence[str] | None) -> list[dict[str, Any]]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON data: {e}", field="data") from e
    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list) or not all(isinstance(r, dict) for r in payload):
        raise ValidationError("JSON data must be an object or an array of objects", field="data")
    if columns:
        return [{c: record.get(c) for c in columns} for record in payload]
    return payload


def _parse_csv(text: str, columns: Sequence[str] | None) -> list[dict[str, Any]]:
    rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if not rows:
        return []
    header = [h.strip() for h in rows[0]]
    names = list(columns) if columns else header
    if not all(names):
        raise ValidationError("CSV header contains an empty column name", field="data")
    records = []
    for row in rows[1:]:
        values = [cell.strip() or None for cell in row]
        records.append({name: values[i] if i < len(values) else None for i, name in enumerate(names)})
    return records


def parse_records(
    text: str,
    fmt: str,
    columns: Sequence[str] | None = None,
) -> list[dict[str, Any]]:
    """Parse bulk input text into ordered flat records.

    CSV: the first non-blank row is the header.  When ``columns`` is given
    the header row is still skipped and values map positionally onto
    ``columns``; short rows are padded with ``None``.  Empty cells read as
    ``None``, matching how :func:`serialize_records` writes NULL.

    JSON: an array of objects (a single object is accepted).  When
    ``columns`` is given only those keys are kept.
    """
    match fmt:
        case "json":
            return _parse_json(text, columns)
        case "csv":
            return _parse_csv(text, columns)
        case _:
            raise ValidationError(f"Unsupported format: {fmt!r}", field="format")


# ------------------------------------------------------------------ #
# Serialisation
# ------------------------------------------------------------------ #


def serialize_records(
    rows: Sequence[dict[str, Any]],
    fmt: str,
    columns: Sequence[str] | None = None,
) -> str:
    """Serialise rows as pretty JSON (indent 2) or CSV with a header row."""
    match fmt:
        case "json":
            return json.dumps(jsonable(rows), indent=2, ensure_ascii=False)
        case "csv":
            fieldnames = list(columns) if columns else (list(rows[0].keys()) if rows else [])
            if not fieldnames:
                return ""
            buffer = io.StringIO()
            writer = csv.DictWriter(buffer, fieldnames=fieldnames, extrasaction="ignore", lineterminator="\n")
            writer.writeheader()
            for row in jsonable(rows):
                writer.writerow({k: "" if v is None else v for k, v in row.items()})
            return buffer.getvalue()
        case _:
            raise ValidationError(f"Unsupported format: {fmt!r}", field="format")


def _cell(value: Any) -> str:
    return "NULL" if value is None else str(value)


def render_table(result: QueryResult) -> str:
    """Header joined by `` | ``, a dash rule as wide as the header, then rows."""
    if not result.rows:
        return NO_RESULTS
    columns = list(result.columns) or list(result.rows[0].keys())
    header = " | ".join(columns)
    lines = [header, "-" * len(header)]
    lines.extend(" | ".join(_cell(row.get(c)) for c in columns) for row in result.rows)
    return "\n".join(lines)


__all__ = [
    "NO_RESULTS",
    "jsonable",
    "parse_records",
    "serialize_records",
    "render_table",
]
