"""
Shared pytest fixtures for sqlbridge tests.

No database is needed: operations run against ``FakeAdapter``, and the
driver adapters are tested against mocked ``asyncpg`` / ``aiomysql`` pools.
"""

from __future__ import annotations

import pytest
import structlog

from sqlbridge.core.logging import clear_context
from sqlbridge.ops.dispatcher import Dispatcher
from tests._support.fake_adapter import FakeAdapter

DB_ENV_VARS = (
    "DB_TYPE",
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_DATABASE",
    "DB_POOL_MIN_SIZE",
    "DB_POOL_MAX_SIZE",
    "DB_CONNECT_TIMEOUT",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Run every test without DB_* variables and away from any .env file."""
    for var in DB_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    clear_context()
    structlog.reset_defaults()


@pytest.fixture
def users_table() -> dict[str, list[tuple[str, str]]]:
    return {
        "users": [("id", "integer"), ("name", "character varying"), ("email", "character varying")],
        "orders": [("id", "integer"), ("user_id", "integer")],
    }


@pytest.fixture(params=["postgresql", "mysql"])
def engine(request: pytest.FixtureRequest) -> str:
    """Parametric fixture: run a test against both engines."""
    return request.param


@pytest.fixture
def pg_adapter(users_table) -> FakeAdapter:
    return FakeAdapter("postgresql", tables=users_table)


@pytest.fixture
def mysql_adapter(users_table) -> FakeAdapter:
    return FakeAdapter("mysql", tables=users_table)


@pytest.fixture
def pg_dispatcher(pg_adapter) -> Dispatcher:
    return Dispatcher(pg_adapter)


@pytest.fixture
def mysql_dispatcher(mysql_adapter) -> Dispatcher:
    return Dispatcher(mysql_adapter)
