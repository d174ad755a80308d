"""Database adapter base class.

Manifesto:
    Both engines share one pooled-connection lifecycle: lazy pool creation,
    one statement per acquired connection, liveness probe, idempotent
    shutdown.  The abstract base owns that lifecycle and the error mapping;
    engine adapters only implement the driver calls.

Features:
    - ``fetch()`` for row-returning statements, ``execute()`` for the rest
    - Lazy pool creation guarded by an ``asyncio.Lock``
    - ``test_connection()`` liveness probe raising ``ConnectivityError``
    - ``close()`` idempotent; later calls raise ``PoolClosedError``
    - Driver exceptions become ``ExecutionError`` / ``ConnectivityError``

Tags:
    sqlbridge, database, abstract-base, adapter-pattern, connection-pool

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from sqlbridge.core.dialect import Dialect, get_dialect
from sqlbridge.core.errors import (
    ConnectivityError,
    ExecutionError,
    PoolClosedError,
    SqlBridgeError,
)
from sqlbridge.core.logging import get_logger
from sqlbridge.core.models import ParameterizedStatement, QueryResult

from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)


def as_statement(
    statement: ParameterizedStatement | str,
    values: Sequence[Any] | None = None,
) -> ParameterizedStatement:
    """Accept either a built statement or raw SQL text plus values."""
    if isinstance(statement, ParameterizedStatement):
        if values is not None:
            return ParameterizedStatement(statement.text, tuple(values))
        return statement
    return ParameterizedStatement(statement, tuple(values or ()))


class DatabaseAdapter(ABC):
    """
    Abstract base class for pooled database adapters.

    The adapter exclusively owns the driver pool.  Every statement acquires
    one connection, runs, and releases it whether or not it failed.
    """

    def __init__(self, config: DatabaseConfig):
        self._config = config
        self._dialect: Dialect = get_dialect(config.db_type.value)
        self._pool: Any = None
        self._closed = False
        self._lock = asyncio.Lock()

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's database type."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        """Database type."""
        return self._config.db_type

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        """Whether the pool has been created and not yet closed."""
        return self._pool is not None and not self._closed

    @property
    def is_closed(self) -> bool:
        return self._closed

    # -- Lifecycle ---------------------------------------------------------

    async def connect(self) -> None:
        """Create the driver pool if it does not exist yet."""
        await self._ensure_pool()

    async def _ensure_pool(self) -> Any:
        if self._closed:
            raise PoolClosedError()
        if self._pool is not None:
            return self._pool
        async with self._lock:
            if self._closed:
                raise PoolClosedError()
            if self._pool is None:
                try:
                    self._pool = await self._create_pool()
                except SqlBridgeError:
                    raise
                except Exception as e:
                    raise ConnectivityError(
                        f"Failed to connect to {self.db_type.value}: {e}",
                        cause=e,
                    ).with_context(engine=self.db_type.value) from e
                logger.info(
                    "pool_created",
                    engine=self.db_type.value,
                    target=self._config.to_connection_string(),
                    min_size=self._config.pool_min_size,
                    max_size=self._config.pool_max_size,
                )
        return self._pool

    async def test_connection(self) -> None:
        """Liveness probe: acquire one connection and run a trivial query.

        Raises:
            ConnectivityError: pool creation or the probe failed.
        """
        try:
            pool = await self._ensure_pool()
            await self._probe(pool)
        except PoolClosedError:
            raise
        except ConnectivityError as e:
            logger.error("connection_test_failed", engine=self.db_type.value, error=e.message)
            raise
        except Exception as e:
            logger.error("connection_test_failed", engine=self.db_type.value, error=str(e))
            raise ConnectivityError(
                f"Connection test failed: {e}",
                cause=e,
            ).with_context(engine=self.db_type.value) from e

    async def close(self) -> None:
        """Shut the pool down. A second call is a no-op."""
        async with self._lock:
            if self._closed:
                return
            self._closed = True
            pool, self._pool = self._pool, None
        if pool is not None:
            await self._close_pool(pool)
        logger.info("pool_closed", engine=self.db_type.value)

    # -- Execution ---------------------------------------------------------

    async def fetch(
        self,
        statement: ParameterizedStatement | str,
        values: Sequence[Any] | None = None,
    ) -> QueryResult:
        """Run a row-returning statement on one pooled connection."""
        stmt = as_statement(statement, values)
        pool = await self._ensure_pool()
        try:
            return await self._fetch(pool, stmt)
        except SqlBridgeError:
            raise
        except Exception as e:
            raise ExecutionError(str(e), cause=e).with_context(engine=self.db_type.value) from e

    async def execute(
        self,
        statement: ParameterizedStatement | str,
        values: Sequence[Any] | None = None,
    ) -> int:
        """Run a statement that returns no rows; returns the affected-row count."""
        stmt = as_statement(statement, values)
        pool = await self._ensure_pool()
        try:
            return await self._execute(pool, stmt)
        except SqlBridgeError:
            raise
        except Exception as e:
            raise ExecutionError(str(e), cause=e).with_context(engine=self.db_type.value) from e

    # -- Driver hooks ------------------------------------------------------

    @abstractmethod
    async def _create_pool(self) -> Any:
        """Create the driver pool."""
        ...

    @abstractmethod
    async def _close_pool(self, pool: Any) -> None:
        """Close the driver pool, releasing idle and returned connections."""
        ...

    @abstractmethod
    async def _probe(self, pool: Any) -> None:
        ...

    @abstractmethod
    async def _fetch(self, pool: Any, statement: ParameterizedStatement) -> QueryResult:
        ...

    @abstractmethod
    async def _execute(self, pool: Any, statement: ParameterizedStatement) -> int:
        ...

    async def __aenter__(self) -> DatabaseAdapter:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = [
    "DatabaseAdapter",
    "as_statement",
]
