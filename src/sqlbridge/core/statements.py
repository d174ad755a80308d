"""Statement builder: operation arguments → parameterized SQL.

Manifesto:
    Data values never enter statement text.  Every value is bound through a
    placeholder generated by the dialect, and identifiers are quoted by the
    dialect.  The builder is stateless; one instance per dialect is shared
    by all concurrent operations.

Placeholder offsets:
    UPDATE binds two value groups into one vector: the SET values first,
    then the WHERE values.  On PostgreSQL the WHERE placeholders continue
    the numbering (``SET "a" = $1, "b" = $2 WHERE "id" = $3``) instead of
    restarting at ``$1``.

Trust boundary:
    DDL fragments (column types, ``ON DELETE`` / ``ON UPDATE`` actions) are
    inserted verbatim.  They are schema-definition text from a trusted
    caller, not user data.  Identifiers are quoted but not escaped, so names
    containing the dialect's quote character are rejected here.

Empty filters:
    ``select`` with no filter reads every row.  ``update`` and ``delete``
    with no filter are refused with ``ValidationError``; they are never
    widened into an unfiltered statement.

Single statements:
    aiomysql connections always accept multi-statement text, so free-form
    query text is checked with :func:`is_single_statement` before it runs
    on either engine.

Tags:
    sql, statement-builder, parameterized, ddl, dml, sqlbridge
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlbridge.core.dialect import Dialect
from sqlbridge.core.errors import ValidationError
from sqlbridge.core.models import ColumnDescriptor, ParameterizedStatement

# A statement separator with anything but whitespace after it
STATEMENT_SEPARATOR = re.compile(r";\s*\S")
MULTIPLE_STATEMENTS = "Only one statement per query is allowed."


def is_single_statement(text: str) -> bool:
    """Whether ``text`` holds at most one statement (a trailing ``;`` is allowed).

    The check is lexical: a ``;`` inside a string literal or comment also
    counts as a separator.
    """
    return STATEMENT_SEPARATOR.search(text) is None


class StatementBuilder:
    """Composes DML and DDL for one dialect."""

    def __init__(self, dialect: Dialect):
        self._dialect = dialect

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    # =====================================================================
    # Identifiers
    # =====================================================================

    def identifier(self, name: str, field: str = "identifier") -> str:
        """Quote ``name``, rejecting empty names and embedded quote characters."""
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"{field} must be a non-empty name", field=field)
        if self._dialect.quote_char in name:
            raise ValidationError(
                f"{field} {name!r} contains the identifier quote character {self._dialect.quote_char!r}",
                field=field,
            )
        return self._dialect.quote_identifier(name)

    def _identifiers(self, names: Iterable[str], field: str) -> str:
        quoted = [self.identifier(n, field) for n in names]
        if not quoted:
            raise ValidationError(f"{field} must contain at least one name", field=field)
        return ", ".join(quoted)

    def _conditions(
        self,
        criteria: Mapping[str, Any],
        offset: int,
        joiner: str,
        field: str,
    ) -> tuple[str, list[Any]]:
        """``"col" = $n`` pairs for ``criteria``, numbered from ``offset + 1``."""
        columns = list(criteria.keys())
        tokens = self._dialect.placeholders(len(columns), offset)
        parts = [f"{self.identifier(col, field)} = {tok}" for col, tok in zip(columns, tokens)]
        return joiner.join(parts), [criteria[c] for c in columns]

    @staticmethod
    def _fragment(text: str | None, field: str) -> str:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f"{field} must be a non-empty SQL fragment", field=field)
        return text.strip()

    # =====================================================================
    # DML
    # =====================================================================

    def insert(self, table: str, record: Mapping[str, Any]) -> ParameterizedStatement:
        """``INSERT`` with columns and values taken in the record's iteration order."""
        if not record:
            raise ValidationError("data must contain at least one column", field="data")
        columns = list(record.keys())
        column_list = self._identifiers(columns, "column")
        placeholders = ", ".join(self._dialect.placeholders(len(columns)))
        text = f"INSERT INTO {self.identifier(table, 'table')} ({column_list}) VALUES ({placeholders})"
        return ParameterizedStatement(text, tuple(record[c] for c in columns))

    def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        criteria: Mapping[str, Any] | None = None,
    ) -> ParameterizedStatement:
        """``SELECT``; an empty ``criteria`` omits the WHERE clause (full scan)."""
        projection = self._identifiers(columns, "column") if columns else "*"
        text = f"SELECT {projection} FROM {self.identifier(table, 'table')}"
        if not criteria:
            return ParameterizedStatement(text)
        where, values = self._conditions(criteria, 0, " AND ", "filter")
        return ParameterizedStatement(f"{text} WHERE {where}", tuple(values))

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        criteria: Mapping[str, Any],
    ) -> ParameterizedStatement:
        """``UPDATE``; SET values first, WHERE values numbered after them."""
        if not data:
            raise ValidationError("data must contain at least one column to update", field="data")
        if not criteria:
            raise ValidationError("A non-empty filter is required to update rows", field="filter")
        assignments, set_values = self._conditions(data, 0, ", ", "data")
        where, where_values = self._conditions(criteria, len(set_values), " AND ", "filter")
        text = f"UPDATE {self.identifier(table, 'table')} SET {assignments} WHERE {where}"
        return ParameterizedStatement(text, tuple(set_values + where_values))

    def delete(self, table: str, criteria: Mapping[str, Any]) -> ParameterizedStatement:
        if not criteria:
            raise ValidationError("A non-empty filter is required to delete rows", field="filter")
        where, values = self._conditions(criteria, 0, " AND ", "filter")
        return ParameterizedStatement(
            f"DELETE FROM {self.identifier(table, 'table')} WHERE {where}",
            tuple(values),
        )

    # =====================================================================
    # DDL (no bound values)
    # =====================================================================

    def _alter(self, table: str, clause: str) -> ParameterizedStatement:
        return ParameterizedStatement(f"ALTER TABLE {self.identifier(table, 'table')} {clause}")

    def create_table(self, table: str, columns: Sequence[ColumnDescriptor]) -> ParameterizedStatement:
        if not columns:
            raise ValidationError("At least one column definition is required", field="columns")
        definitions = ",\n".join(
            f"  {self.identifier(c.name, 'column')} {self._fragment(c.declared_type, 'type')}"
            for c in columns
        )
        return ParameterizedStatement(f"CREATE TABLE {self.identifier(table, 'table')} (\n{definitions}\n)")

    def drop_table(self, table: str) -> ParameterizedStatement:
        return ParameterizedStatement(f"DROP TABLE IF EXISTS {self.identifier(table, 'table')}")

    def rename_table(self, table: str, new_name: str) -> ParameterizedStatement:
        self.identifier(new_name, "new_name")
        return self._alter(table, self._dialect.rename_table_clause(new_name))

    def add_column(self, table: str, column: str, column_type: str) -> ParameterizedStatement:
        return self._alter(
            table,
            f"ADD COLUMN {self.identifier(column, 'column')} {self._fragment(column_type, 'type')}",
        )

    def drop_column(self, table: str, column: str) -> ParameterizedStatement:
        return self._alter(table, f"DROP COLUMN {self.identifier(column, 'column')}")

    def rename_column(
        self,
        table: str,
        column: str,
        new_name: str,
        column_type: str,
    ) -> ParameterizedStatement:
        self.identifier(column, "column")
        self.identifier(new_name, "new_name")
        clause = self._dialect.rename_column_clause(column, new_name, self._fragment(column_type, "type"))
        return self._alter(table, clause)

    def change_column_type(self, table: str, column: str, new_type: str) -> ParameterizedStatement:
        self.identifier(column, "column")
        return self._alter(
            table,
            self._dialect.alter_column_type_clause(column, self._fragment(new_type, "new_type")),
        )

    def add_unique(
        self,
        table: str,
        columns: Sequence[str],
        name: str | None = None,
    ) -> ParameterizedStatement:
        """``ADD [CONSTRAINT name] UNIQUE (cols)``; unnamed constraints are named by the engine."""
        constraint = f"CONSTRAINT {self.identifier(name, 'name')} " if name else ""
        return self._alter(table, f"ADD {constraint}UNIQUE ({self._identifiers(columns, 'columns')})")

    def drop_unique(self, table: str, name: str) -> ParameterizedStatement:
        self.identifier(name, "name")
        return self._alter(table, self._dialect.drop_constraint_clause(name))

    def add_foreign_key(
        self,
        table: str,
        columns: Sequence[str],
        ref_table: str,
        ref_columns: Sequence[str],
        name: str | None = None,
        on_delete: str | None = None,
        on_update: str | None = None,
    ) -> ParameterizedStatement:
        if len(columns) != len(ref_columns):
            raise ValidationError(
                f"Foreign key has {len(columns)} local column(s) but {len(ref_columns)} referenced column(s)",
                field="ref_columns",
            )
        constraint = f"CONSTRAINT {self.identifier(name, 'name')} " if name else ""
        clause = (
            f"ADD {constraint}FOREIGN KEY ({self._identifiers(columns, 'columns')}) "
            f"REFERENCES {self.identifier(ref_table, 'ref_table')} ({self._identifiers(ref_columns, 'ref_columns')})"
        )
        if on_delete:
            clause += f" ON DELETE {self._fragment(on_delete, 'on_delete')}"
        if on_update:
            clause += f" ON UPDATE {self._fragment(on_update, 'on_update')}"
        return self._alter(table, clause)

    def drop_foreign_key(self, table: str, name: str) -> ParameterizedStatement:
        self.identifier(name, "name")
        return self._alter(table, self._dialect.drop_foreign_key_clause(name))


__all__ = ["MULTIPLE_STATEMENTS", "STATEMENT_SEPARATOR", "StatementBuilder", "is_single_statement"]
