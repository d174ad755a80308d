"""Row-level MCP tools: CRUD, inserts, bulk import/export."""

from typing import Any, Literal

from mcp.server.fastmcp import Context

from sqlbridge.mcp import _app

mcp = _app.mcp


@mcp.tool(name="generic-crud")
async def generic_crud(
    table: str,
    action: Literal["create", "read", "update", "delete"],
    ctx: Context,
    data: dict[str, Any] | None = None,
    filter: dict[str, Any] | None = None,
    confirmation: str | None = None,
) -> dict[str, Any]:
    """Create, read, update or delete rows. Never changes table structure.

    - create: requires data
    - read: filter optional (no filter returns every row)
    - update: requires data and a non-empty filter
    - delete: requires a non-empty filter and the user typing exactly
      "Confirm deletion of filtered records in table <table>"

    Args:
        table: Table name
        action: create, read, update or delete
        data: Column values to insert or set
        filter: Column equality conditions, joined with AND
        confirmation: The user's confirmation phrase, verbatim (delete only)
    """
    return await _app.dispatch(
        ctx,
        "generic-crud",
        table=table,
        action=action,
        data=data,
        filter=filter,
        confirmation=confirmation,
    )


@mcp.tool(name="insert-rows")
async def insert_rows(table: str, rows: list[dict[str, Any]], ctx: Context) -> dict[str, Any]:
    """Insert records into a table, one INSERT per record.

    Args:
        table: Table name
        rows: Records to insert, e.g. [{"name": "Ana", "age": 30}]
    """
    return await _app.dispatch(ctx, "insert-rows", table=table, rows=rows)


@mcp.tool(name="import-table")
async def import_table(
    table: str,
    data: str,
    format: Literal["csv", "json"],
    ctx: Context,
    columns: list[str] | None = None,
) -> dict[str, Any]:
    """Import CSV or JSON text into a table.

    Args:
        table: Destination table
        data: CSV (with header row) or JSON array of objects
        format: csv or json
        columns: Columns to import; for CSV, values map onto these positionally
    """
    return await _app.dispatch(
        ctx, "import-table", table=table, data=data, format=format, columns=columns
    )


@mcp.tool(name="export-table")
async def export_table(
    table: str,
    format: Literal["csv", "json"],
    ctx: Context,
    columns: list[str] | None = None,
) -> dict[str, Any]:
    """Export a table's rows as CSV or JSON.

    Args:
        table: Table to export
        format: csv or json
        columns: Columns to export (default: all)

    Returns:
        Envelope with the serialized rows in 'text'
    """
    return await _app.dispatch(ctx, "export-table", table=table, format=format, columns=columns)
