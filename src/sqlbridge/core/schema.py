"""Schema introspection through the engine catalogs.

``SchemaIntrospector`` asks the dialect for its catalog queries, runs them
through the adapter and normalizes the rows into :class:`TableSchema` /
:class:`ColumnDescriptor` values.  Nothing is cached: every call reads the
catalog again because the schema may change between calls.

``list_tables()`` issues one query for the table names and then one column
query per table (N+1).  This is an administrative path, not a hot one; the
per-table queries run concurrently, each on its own pooled connection.

``list_columns()`` never raises.  Callers use it as an existence probe
(``create-table`` checks it before issuing DDL), so a missing table and a
failed catalog read both come back as an empty list.
"""

from __future__ import annotations

import asyncio
from typing import Any

from sqlbridge.core.adapters.base import DatabaseAdapter
from sqlbridge.core.errors import NotFoundError, SqlBridgeError
from sqlbridge.core.logging import get_logger
from sqlbridge.core.models import ColumnDescriptor, ParameterizedStatement, TableSchema

logger = get_logger(__name__)


def _pick(row: dict[str, Any], key: str) -> Any:
    # Catalog column labels come back upper-cased on some MySQL builds
    if key in row:
        return row[key]
    return row.get(key.upper())


class SchemaIntrospector:
    """Catalog reader bound to one adapter (and therefore one dialect)."""

    def __init__(self, adapter: DatabaseAdapter):
        self._adapter = adapter
        self._dialect = adapter.dialect

    async def table_names(self) -> list[str]:
        result = await self._adapter.fetch(ParameterizedStatement(self._dialect.list_tables_query()))
        return [str(_pick(row, "table_name")) for row in result.rows]

    async def describe_columns(self, table: str) -> list[ColumnDescriptor]:
        """Columns of ``table`` in ordinal order; empty when the table is absent.

        Raises:
            ExecutionError: the catalog query itself failed.
        """
        statement = ParameterizedStatement(self._dialect.list_columns_query(), (table,))
        result = await self._adapter.fetch(statement)
        return [
            ColumnDescriptor(
                name=str(_pick(row, "column_name")),
                declared_type=str(_pick(row, "data_type")),
            )
            for row in result.rows
        ]

    async def list_tables(self) -> list[TableSchema]:
        """Every base table in the current schema, each with its columns."""
        names = await self.table_names()
        columns = await asyncio.gather(*(self.describe_columns(name) for name in names))
        return [TableSchema(name=name, columns=tuple(cols)) for name, cols in zip(names, columns)]

    async def list_columns(self, table: str) -> list[str]:
        """Column names of ``table``; ``[]`` if it does not exist or cannot be read."""
        try:
            columns = await self.describe_columns(table)
        except SqlBridgeError as e:
            logger.warning("list_columns_degraded", table=table, error=e.message)
            return []
        return [c.name for c in columns]

    async def table_exists(self, table: str) -> bool:
        return bool(await self.list_columns(table))

    async def describe_table(self, table: str) -> TableSchema:
        """Full schema of one table.

        Raises:
            NotFoundError: the table has no columns in the catalog.
        """
        columns = await self.describe_columns(table)
        if not columns:
            raise NotFoundError(f"Table '{table}' does not exist").with_context(table=table)
        return TableSchema(name=table, columns=tuple(columns))


__all__ = ["SchemaIntrospector"]
