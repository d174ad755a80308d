"""Canonical value types shared by the introspection, statement and ops layers.

All of them are immutable.  ``TableSchema`` values are produced fresh on every
introspection call and never cached: the schema may change between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    """One column as reported by the engine catalog."""

    name: str
    declared_type: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "declared_type": self.declared_type}


@dataclass(frozen=True, slots=True)
class TableSchema:
    """A table and its columns in ordinal order."""

    name: str
    columns: tuple[ColumnDescriptor, ...] = ()

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "columns": [c.to_dict() for c in self.columns]}


@dataclass(frozen=True, slots=True)
class ParameterizedStatement:
    """SQL text plus the values bound to its placeholders, in order.

    DDL statements carry no values.
    """

    text: str
    values: tuple[Any, ...] = ()

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Rows returned by a statement, keyed by column name.

    ``columns`` preserves the engine's column order even when ``rows`` is empty.
    """

    columns: tuple[str, ...] = ()
    rows: tuple[dict[str, Any], ...] = field(default=())

    @property
    def row_count(self) -> int:
        return len(self.rows)


class CrudAction(str, Enum):
    """Actions accepted by the generic CRUD operation."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


__all__ = [
    "ColumnDescriptor",
    "TableSchema",
    "ParameterizedStatement",
    "QueryResult",
    "CrudAction",
]
