"""MySQL / MariaDB database adapter (aiomysql)."""

from __future__ import annotations

from typing import Any

from sqlbridge.core.errors import ConfigError, UnsafeQueryError
from sqlbridge.core.models import ParameterizedStatement, QueryResult
from sqlbridge.core.statements import MULTIPLE_STATEMENTS, is_single_statement

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class MySQLAdapter(DatabaseAdapter):
    """
    MySQL / MariaDB database adapter.

    Uses an ``aiomysql`` pool in autocommit mode: every statement is its own
    atomic unit, there are no multi-statement transactions.
    """

    def __init__(self, config: DatabaseConfig):
        if config.db_type is not DatabaseType.MYSQL:
            raise ConfigError(f"MySQLAdapter cannot serve {config.db_type.value}")
        super().__init__(config)

    @staticmethod
    def _driver() -> Any:
        try:
            import aiomysql
        except ImportError:
            raise ConfigError(
                "aiomysql is required for MySQL. Install with: pip install aiomysql"
            ) from None
        return aiomysql

    async def _create_pool(self) -> Any:
        aiomysql = self._driver()
        return await aiomysql.create_pool(
            host=self._config.host,
            port=self._config.port,
            user=self._config.username or "",
            password=self._config.password or "",
            db=self._config.database or None,
            minsize=self._config.pool_min_size,
            maxsize=self._config.pool_max_size,
            connect_timeout=self._config.connect_timeout,
            autocommit=True,
            **self._config.options,
        )

    async def _close_pool(self, pool: Any) -> None:
        pool.close()
        await pool.wait_closed()

    async def _probe(self, pool: Any) -> None:
        async with pool.acquire() as conn:
            await conn.ping()

    async def _fetch(self, pool: Any, statement: ParameterizedStatement) -> QueryResult:
        # aiomysql sets CLIENT.MULTI_STATEMENTS on every connection
        if not is_single_statement(statement.text):
            raise UnsafeQueryError(MULTIPLE_STATEMENTS).with_context(engine=self.db_type.value)
        aiomysql = self._driver()
        # No args means no %-interpolation, so literal % in query text survives
        args = statement.values or None
        async with pool.acquire() as conn:
            async with conn.cursor(aiomysql.DictCursor) as cur:
                await cur.execute(statement.text, args)
                columns = tuple(d[0] for d in cur.description or ())
                rows = await cur.fetchall()
        return QueryResult(columns=columns, rows=tuple(dict(r) for r in rows))

    async def _execute(self, pool: Any, statement: ParameterizedStatement) -> int:
        args = statement.values or None
        async with pool.acquire() as conn:
            async with conn.cursor() as cur:
                affected = await cur.execute(statement.text, args)
        return int(affected or 0)


__all__ = [
    "MySQLAdapter",
]
