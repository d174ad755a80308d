"""Shared MCP application state: server instance, lifespan, dispatch helper.

Tags: mcp, server, internal
Doc-Types: TECHNICAL_DESIGN
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from sqlbridge.core.adapters import get_adapter
from sqlbridge.core.errors import ConnectivityError
from sqlbridge.core.logging import configure_logging, get_logger
from sqlbridge.core.settings import DatabaseSettings, load_settings
from sqlbridge.core.transports.mcp import create_mcp
from sqlbridge.ops.dispatcher import Dispatcher

logger = get_logger("sqlbridge.mcp")


@dataclass
class AppContext:
    """Application context yielded by the lifespan.

    The dispatcher (and through it the adapter and its pool) lives exactly
    as long as the server.
    """

    dispatcher: Dispatcher
    settings: DatabaseSettings
    connected: bool = False


@asynccontextmanager
async def lifespan(server: Any = None) -> AsyncIterator[AppContext]:
    """Build the pool-backed dispatcher, probe the database, close the pool on exit.

    Configuration errors propagate and stop the server.  A failed probe is
    logged and the server keeps running so the operator can diagnose it.
    """
    settings = load_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    config = settings.to_config()
    dispatcher = Dispatcher(get_adapter(config), caller="mcp")
    ctx = AppContext(dispatcher=dispatcher, settings=settings)

    try:
        await dispatcher.adapter.test_connection()
        ctx.connected = True
        logger.info("database_ready", engine=config.db_type.value, target=config.to_connection_string())
    except ConnectivityError as e:
        logger.error("database_unavailable", engine=config.db_type.value, error=e.message)

    try:
        yield ctx
    finally:
        await dispatcher.close()


# Create MCP server instance
mcp = create_mcp(
    name="sqlbridge",
    instructions="""
Relational database tools for one MySQL or PostgreSQL database.

Capabilities:
- List tables and columns, describe a table
- Run read-only SELECT queries
- Create, alter and drop tables, columns and constraints
- Create, read, update and delete rows; bulk import/export as CSV or JSON

Destructive tools (drop-table, drop-column, drop-unique, drop-foreign-key,
change-column-type, generic-crud delete) need a `confirmation` argument that
exactly matches the phrase given in the tool description.  Ask the user to
type it; never fill it in yourself.
""",
    lifespan=lifespan,
)


def get_app_context(ctx: Any) -> AppContext:
    """The lifespan's ``AppContext`` from a FastMCP request ``Context``."""
    return ctx.request_context.lifespan_context


async def dispatch(ctx: Any, operation: str, **arguments: Any) -> dict[str, Any]:
    """Run a catalog operation; arguments left as ``None`` are omitted."""
    app = get_app_context(ctx)
    args = {k: v for k, v in arguments.items() if v is not None}
    result = await app.dispatcher.dispatch(operation, args)
    return result.to_dict()
