"""Introspection and read-only query MCP tools."""

from typing import Any

from mcp.server.fastmcp import Context

from sqlbridge.mcp import _app

mcp = _app.mcp


@mcp.tool(name="list-tables")
async def list_tables(ctx: Context, include_columns: bool = False) -> dict[str, Any]:
    """List the tables in the database.

    Args:
        include_columns: Also return each table's columns and types

    Returns:
        Envelope whose 'data' is the list of table names (or table schemas)
    """
    return await _app.dispatch(ctx, "list-tables", include_columns=include_columns)


@mcp.tool(name="list-columns")
async def list_columns(table: str, ctx: Context) -> dict[str, Any]:
    """List the column names of a table. Returns an empty list if the table does not exist.

    Args:
        table: Table name

    Returns:
        Envelope whose 'data' is the list of column names
    """
    return await _app.dispatch(ctx, "list-columns", table=table)


@mcp.tool(name="describe-table")
async def describe_table(table: str, ctx: Context) -> dict[str, Any]:
    """Describe a table: column names with their declared types.

    Args:
        table: Table name

    Returns:
        Envelope whose 'data' is {'name', 'columns': [{'name', 'declared_type'}]}
    """
    return await _app.dispatch(ctx, "describe-table", table=table)


@mcp.tool(name="run-readonly-query")
async def run_readonly_query(query: str, ctx: Context) -> dict[str, Any]:
    """Run a SQL query. Only statements starting with SELECT are accepted;
    anything else (INSERT, UPDATE, DELETE, DROP ...) is rejected without
    reaching the database.

    Args:
        query: SELECT statement

    Returns:
        Envelope with a pipe-separated table in 'text' and rows in 'data'
    """
    return await _app.dispatch(ctx, "run-readonly-query", query=query)
