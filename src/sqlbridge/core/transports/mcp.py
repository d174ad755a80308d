"""MCP server scaffold.

The server module only needs to:

1. Define a lifespan that yields its ``AppContext``
2. Register tools on the returned ``FastMCP`` instance
3. Call ``run_mcp()`` from its console-script entry point

Usage::

    from sqlbridge.core.transports.mcp import create_mcp, run_mcp

    mcp = create_mcp(
        name="sqlbridge",
        instructions="Relational database tools ...",
        lifespan=app_lifespan,
    )

    @mcp.tool()
    async def list_tables(ctx: Context) -> dict[str, Any]: ...

    def run():
        run_mcp(mcp, default_port=8120)
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from sqlbridge.core.logging import get_logger

logger = get_logger(__name__)


def create_mcp(
    name: str,
    instructions: str,
    lifespan: Callable[..., Any],
) -> FastMCP:
    """Create a FastMCP server instance.

    Parameters
    ----------
    name : str
        MCP server name.
    instructions : str
        Natural language description of the server's capabilities.
    lifespan : async context manager
        Lifespan factory that yields an AppContext dataclass.

    Returns
    -------
    FastMCP
        Configured server instance; register tools on it.
    """
    return FastMCP(
        name,
        instructions=instructions,
        lifespan=lifespan,
    )


def parse_transport_args(args: Sequence[str], default_port: int) -> tuple[str, int]:
    """Extract ``--transport`` / ``--port`` from an argv tail."""
    transport = "stdio"
    port = default_port

    i = 0
    while i < len(args):
        if args[i] in ("--transport", "-t") and i + 1 < len(args):
            transport = args[i + 1]
            i += 2
        elif args[i] in ("--port", "-p") and i + 1 < len(args):
            port = int(args[i + 1])
            i += 2
        else:
            i += 1
    return transport, port


def run_mcp(
    mcp: FastMCP,
    *,
    default_port: int = 8000,
    transport: str | None = None,
    port: int | None = None,
) -> None:
    """Start the server in stdio (default) or streamable-http mode.

    ``transport`` and ``port`` fall back to ``--transport`` / ``--port`` in
    ``sys.argv``.  Stdout belongs to the protocol under stdio; all startup
    messages go through the stderr logger.
    """
    argv_transport, argv_port = parse_transport_args(sys.argv[1:], default_port)
    transport = transport or argv_transport
    port = port or argv_port

    if transport in ("http", "streamable-http"):
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        logger.info("server_starting", server=mcp.name, transport="streamable-http", port=port)
        mcp.run(transport="streamable-http")
    else:
        logger.info("server_starting", server=mcp.name, transport="stdio")
        mcp.run(transport="stdio")


__all__ = ["create_mcp", "parse_transport_args", "run_mcp"]
