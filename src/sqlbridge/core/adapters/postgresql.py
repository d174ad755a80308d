"""PostgreSQL database adapter (asyncpg)."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from sqlbridge.core.errors import ConfigError, ExecutionError
from sqlbridge.core.models import ParameterizedStatement, QueryResult

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType

_TRUE = frozenset({"t", "true", "y", "yes", "on", "1"})
_FALSE = frozenset({"f", "false", "n", "no", "off", "0"})


def _parse_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"not a boolean: {text!r}")


# Parameter type name -> parser for text input
_TEXT_PARSERS: dict[str, Callable[[str], Any]] = {
    "int2": int,
    "int4": int,
    "int8": int,
    "oid": int,
    "float4": float,
    "float8": float,
    "numeric": Decimal,
    "bool": _parse_bool,
    "date": date.fromisoformat,
    "time": time.fromisoformat,
    "timetz": time.fromisoformat,
    "timestamp": datetime.fromisoformat,
    "timestamptz": datetime.fromisoformat,
    "uuid": uuid.UUID,
    "bytea": bytes.fromhex,
}


def _coerce_parameters(types: Sequence[Any], values: Sequence[Any]) -> tuple[Any, ...]:
    """Convert ``str`` values to the Python type asyncpg encodes for each parameter.

    asyncpg binds parameters in binary and refuses text for typed columns,
    while CSV input and JSON exports carry numbers, dates and booleans as
    text.  Empty text bound to a non-text parameter becomes NULL.  Values of
    any other Python type, and parameters of unlisted types (text, varchar,
    json, enums), are passed through.

    Raises:
        ExecutionError: a text value does not parse as its parameter type.
    """
    if len(types) != len(values):
        return tuple(values)
    coerced = []
    for index, (pg_type, value) in enumerate(zip(types, values), start=1):
        parse = _TEXT_PARSERS.get(pg_type.name) if isinstance(value, str) else None
        if parse is None:
            coerced.append(value)
            continue
        text = value.strip()
        if not text:
            coerced.append(None)
            continue
        try:
            coerced.append(parse(text))
        except (ValueError, ArithmeticError) as e:
            raise ExecutionError(
                f"invalid input for query argument ${index}: {value!r} is not a valid {pg_type.name}",
                cause=e,
            ).with_context(engine=DatabaseType.POSTGRESQL.value) from e
    return tuple(coerced)


def _affected_rows(status: str | None) -> int:
    """Parse the row count from a command tag such as ``UPDATE 3`` or ``INSERT 0 1``."""
    if not status:
        return 0
    last = status.rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


class PostgreSQLAdapter(DatabaseAdapter):
    """
    PostgreSQL database adapter.

    Uses an ``asyncpg`` pool.  Statements with values are prepared first:
    the prepared statement reports the column list (kept even when the
    result set is empty) and the parameter types used to coerce text
    values.  Statements without values (DDL) run through ``execute``.
    """

    def __init__(self, config: DatabaseConfig):
        if config.db_type is not DatabaseType.POSTGRESQL:
            raise ConfigError(f"PostgreSQLAdapter cannot serve {config.db_type.value}")
        super().__init__(config)

    async def _create_pool(self) -> Any:
        try:
            import asyncpg
        except ImportError:
            raise ConfigError(
                "asyncpg is required for PostgreSQL. Install with: pip install asyncpg"
            ) from None

        return await asyncpg.create_pool(
            host=self._config.host,
            port=self._config.port,
            user=self._config.username,
            password=self._config.password,
            database=self._config.database or None,
            min_size=self._config.pool_min_size,
            max_size=self._config.pool_max_size,
            timeout=self._config.connect_timeout,
            **self._config.options,
        )

    async def _close_pool(self, pool: Any) -> None:
        await pool.close()

    async def _probe(self, pool: Any) -> None:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")

    async def _fetch(self, pool: Any, statement: ParameterizedStatement) -> QueryResult:
        async with pool.acquire() as conn:
            prepared = await conn.prepare(statement.text)
            columns = tuple(attr.name for attr in prepared.get_attributes())
            values = _coerce_parameters(prepared.get_parameters(), statement.values) if statement.values else ()
            records = await prepared.fetch(*values)
        return QueryResult(columns=columns, rows=tuple(dict(r) for r in records))

    async def _execute(self, pool: Any, statement: ParameterizedStatement) -> int:
        async with pool.acquire() as conn:
            if not statement.values:
                status = await conn.execute(statement.text)
            else:
                prepared = await conn.prepare(statement.text)
                await prepared.fetch(*_coerce_parameters(prepared.get_parameters(), statement.values))
                status = prepared.get_statusmsg()
        return _affected_rows(status)


__all__ = [
    "PostgreSQLAdapter",
]
