"""Table and column structure MCP tools."""

from typing import Any

from mcp.server.fastmcp import Context

from sqlbridge.mcp import _app
from sqlbridge.ops.requests import ColumnDefinition

mcp = _app.mcp


@mcp.tool(name="create-table")
async def create_table(table: str, columns: list[ColumnDefinition], ctx: Context) -> dict[str, Any]:
    """Create a table. If the table already exists nothing is executed.

    Args:
        table: New table name
        columns: Column definitions, e.g. [{"name": "id", "type": "INT PRIMARY KEY"}]

    Returns:
        Envelope whose 'data.created' tells whether DDL ran
    """
    return await _app.dispatch(
        ctx, "create-table", table=table, columns=[c.model_dump() for c in columns]
    )


@mcp.tool(name="drop-table")
async def drop_table(table: str, confirmation: str, ctx: Context) -> dict[str, Any]:
    """Drop a table. DESTRUCTIVE.

    The user must type exactly: "Confirm deletion of table <table>".

    Args:
        table: Table to drop
        confirmation: The user's confirmation phrase, verbatim
    """
    return await _app.dispatch(ctx, "drop-table", table=table, confirmation=confirmation)


@mcp.tool(name="rename-table")
async def rename_table(table: str, new_name: str, ctx: Context) -> dict[str, Any]:
    """Rename a table.

    Args:
        table: Current table name
        new_name: New table name
    """
    return await _app.dispatch(ctx, "rename-table", table=table, new_name=new_name)


@mcp.tool(name="add-column")
async def add_column(table: str, column: str, type: str, ctx: Context) -> dict[str, Any]:
    """Add a column to a table. Names may only use letters, digits and underscores.

    Args:
        table: Table to modify
        column: New column name
        type: Column definition, e.g. "VARCHAR(255) NOT NULL"
    """
    return await _app.dispatch(ctx, "add-column", table=table, column=column, type=type)


@mcp.tool(name="drop-column")
async def drop_column(table: str, column: str, confirmation: str, ctx: Context) -> dict[str, Any]:
    """Drop a column. DESTRUCTIVE.

    The user must type exactly: "Confirm deletion of column <column> from table <table>".

    Args:
        table: Table name
        column: Column to drop
        confirmation: The user's confirmation phrase, verbatim
    """
    return await _app.dispatch(
        ctx, "drop-column", table=table, column=column, confirmation=confirmation
    )


@mcp.tool(name="rename-column")
async def rename_column(table: str, column: str, new_name: str, type: str, ctx: Context) -> dict[str, Any]:
    """Rename a column.

    Args:
        table: Table name
        column: Current column name
        new_name: New column name
        type: Full column type (MySQL restates it when renaming)
    """
    return await _app.dispatch(
        ctx, "rename-column", table=table, column=column, new_name=new_name, type=type
    )


@mcp.tool(name="change-column-type")
async def change_column_type(
    table: str,
    column: str,
    new_type: str,
    confirmation: str,
    ctx: Context,
) -> dict[str, Any]:
    """Change a column's data type. May lose data.

    The user must type exactly: "Confirm type change for column <column> to <new_type>".

    Args:
        table: Table name
        column: Column to modify
        new_type: New type, e.g. "DATE" or "VARCHAR(255)"
        confirmation: The user's confirmation phrase, verbatim
    """
    return await _app.dispatch(
        ctx,
        "change-column-type",
        table=table,
        column=column,
        new_type=new_type,
        confirmation=confirmation,
    )
