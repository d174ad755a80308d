"""
In-memory adapter double for operation tests.

``FakeAdapter`` is a real :class:`DatabaseAdapter` subclass over a real
dialect, so statement text, placeholder numbering and the pool lifecycle
behave exactly as in production.  Only the driver hooks are replaced:

- catalog queries are answered from ``tables``
- every other ``fetch`` pops the next queued :class:`QueryResult`
- ``execute`` records the statement and returns ``rowcount``

Usage::

    adapter = FakeAdapter("postgresql", tables={"users": [("id", "integer")]})
    adapter.queue(QueryResult(columns=("id",), rows=({"id": 1},)))
    dispatcher = Dispatcher(adapter)
"""

from __future__ import annotations

from typing import Any

from sqlbridge.core.adapters.base import DatabaseAdapter
from sqlbridge.core.adapters.types import DatabaseConfig, DatabaseType
from sqlbridge.core.models import ParameterizedStatement, QueryResult


class FakeAdapter(DatabaseAdapter):
    """Adapter whose "database" is a dict of table name → (column, type) pairs."""

    def __init__(
        self,
        engine: str = "postgresql",
        *,
        tables: dict[str, list[tuple[str, str]]] | None = None,
        rowcount: int = 1,
    ):
        db_type = DatabaseType.from_name(engine)
        super().__init__(
            DatabaseConfig(
                db_type=db_type,
                host="db.test",
                port=3306 if db_type is DatabaseType.MYSQL else 5432,
                database="app",
                username="tester",
                password="secret",
            )
        )
        self.tables = dict(tables or {})
        self.rowcount = rowcount
        self.fetched: list[ParameterizedStatement] = []
        self.executed: list[ParameterizedStatement] = []
        self.pools_created = 0
        self.pools_closed = 0
        self.probe_error: Exception | None = None
        self.catalog_error: Exception | None = None
        self.fail_on_execute: int | None = None
        self._queued: list[QueryResult] = []

    def queue(self, *results: QueryResult) -> None:
        """Queue results for the next non-catalog ``fetch`` calls."""
        self._queued.extend(results)

    @property
    def statements(self) -> list[ParameterizedStatement]:
        """Every statement that reached the driver, catalog reads excluded."""
        catalog = {self.dialect.list_tables_query(), self.dialect.list_columns_query()}
        return [s for s in self.fetched if s.text not in catalog] + self.executed

    # -- Driver hooks ------------------------------------------------------

    async def _create_pool(self) -> Any:
        self.pools_created += 1
        return object()

    async def _close_pool(self, pool: Any) -> None:
        self.pools_closed += 1

    async def _probe(self, pool: Any) -> None:
        if self.probe_error is not None:
            raise self.probe_error

    async def _fetch(self, pool: Any, statement: ParameterizedStatement) -> QueryResult:
        self.fetched.append(statement)
        if statement.text == self.dialect.list_tables_query():
            if self.catalog_error is not None:
                raise self.catalog_error
            return QueryResult(
                columns=("table_name",),
                rows=tuple({"table_name": name} for name in sorted(self.tables)),
            )
        if statement.text == self.dialect.list_columns_query():
            if self.catalog_error is not None:
                raise self.catalog_error
            columns = self.tables.get(statement.values[0], [])
            return QueryResult(
                columns=("column_name", "data_type"),
                rows=tuple({"column_name": c, "data_type": t} for c, t in columns),
            )
        if self._queued:
            return self._queued.pop(0)
        return QueryResult()

    async def _execute(self, pool: Any, statement: ParameterizedStatement) -> int:
        if self.fail_on_execute is not None and len(self.executed) + 1 == self.fail_on_execute:
            raise RuntimeError("duplicate key value violates unique constraint")
        self.executed.append(statement)
        return self.rowcount
