"""sqlbridge MCP server.

The implementation lives in ``sqlbridge.mcp._app`` (server instance,
lifespan) and ``sqlbridge.mcp.tools.*`` (tool functions).  Importing this
module registers every tool.

Tags: mcp, server, ai-tools, database, protocol
Doc-Types: API_REFERENCE, TECHNICAL_DESIGN
"""

from __future__ import annotations

from sqlbridge.core.logging import configure_logging
from sqlbridge.core.settings import load_settings
from sqlbridge.core.transports.mcp import run_mcp
from sqlbridge.mcp._app import AppContext, lifespan, mcp  # noqa: F401

# Import tools to trigger @mcp.tool() registration
from sqlbridge.mcp.tools.constraints import (  # noqa: F401
    add_foreign_key,
    add_unique,
    drop_foreign_key,
    drop_unique,
)
from sqlbridge.mcp.tools.data import (  # noqa: F401
    export_table,
    generic_crud,
    import_table,
    insert_rows,
)
from sqlbridge.mcp.tools.query import (  # noqa: F401
    describe_table,
    list_columns,
    list_tables,
    run_readonly_query,
)
from sqlbridge.mcp.tools.schema import (  # noqa: F401
    add_column,
    change_column_type,
    create_table,
    drop_column,
    drop_table,
    rename_column,
    rename_table,
)

DEFAULT_HTTP_PORT = 8120


def run(transport: str | None = None, port: int | None = None) -> None:
    """Entry point: validate settings up front, then serve."""
    settings = load_settings()
    settings.to_config()
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    run_mcp(mcp, default_port=DEFAULT_HTTP_PORT, transport=transport, port=port)


if __name__ == "__main__":
    run()
