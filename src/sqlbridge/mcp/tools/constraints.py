"""Constraint MCP tools."""

from typing import Any

from mcp.server.fastmcp import Context

from sqlbridge.mcp import _app

mcp = _app.mcp


@mcp.tool(name="add-unique")
async def add_unique(
    table: str,
    columns: list[str],
    ctx: Context,
    name: str | None = None,
) -> dict[str, Any]:
    """Add a UNIQUE constraint.

    Args:
        table: Table name
        columns: Columns that must be unique together
        name: Constraint name (optional; the engine picks one when omitted)
    """
    return await _app.dispatch(ctx, "add-unique", table=table, columns=columns, name=name)


@mcp.tool(name="drop-unique")
async def drop_unique(table: str, name: str, confirmation: str, ctx: Context) -> dict[str, Any]:
    """Drop a UNIQUE constraint. DESTRUCTIVE.

    The user must type exactly: "Confirm deletion of constraint <name> from table <table>".

    Args:
        table: Table name
        name: Constraint name
        confirmation: The user's confirmation phrase, verbatim
    """
    return await _app.dispatch(ctx, "drop-unique", table=table, name=name, confirmation=confirmation)


@mcp.tool(name="add-foreign-key")
async def add_foreign_key(
    table: str,
    columns: list[str],
    ref_table: str,
    ref_columns: list[str],
    ctx: Context,
    name: str | None = None,
    on_delete: str | None = None,
    on_update: str | None = None,
) -> dict[str, Any]:
    """Add a FOREIGN KEY constraint.

    Args:
        table: Table that gets the foreign key
        columns: Local columns
        ref_table: Referenced table
        ref_columns: Referenced columns (same count as columns)
        name: Constraint name (optional)
        on_delete: ON DELETE action, e.g. CASCADE or SET NULL (optional)
        on_update: ON UPDATE action (optional)
    """
    return await _app.dispatch(
        ctx,
        "add-foreign-key",
        table=table,
        columns=columns,
        ref_table=ref_table,
        ref_columns=ref_columns,
        name=name,
        on_delete=on_delete,
        on_update=on_update,
    )


@mcp.tool(name="drop-foreign-key")
async def drop_foreign_key(table: str, name: str, confirmation: str, ctx: Context) -> dict[str, Any]:
    """Drop a FOREIGN KEY constraint. DESTRUCTIVE.

    The user must type exactly: "Confirm deletion of foreign key <name> from table <table>".

    Args:
        table: Table name
        name: Foreign key name
        confirmation: The user's confirmation phrase, verbatim
    """
    return await _app.dispatch(ctx, "drop-foreign-key", table=table, name=name, confirmation=confirmation)
