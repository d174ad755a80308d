"""
Table and column operations.

Introspection (list-tables, list-columns, describe-table) and structural
changes (create/drop/rename table, add/drop/rename column, change column
type).  Functions raise :class:`SqlBridgeError` subclasses; the dispatcher
turns them into failed envelopes.

Guard functions (``confirm_*``) run before the operation body and need no
database.
"""

from __future__ import annotations

from sqlbridge.core.logging import get_logger
from sqlbridge.ops import guards
from sqlbridge.ops.context import OperationContext
from sqlbridge.ops.requests import (
    AddColumnRequest,
    ChangeColumnTypeRequest,
    CreateTableRequest,
    DescribeTableRequest,
    DropColumnRequest,
    DropTableRequest,
    ListColumnsRequest,
    ListTablesRequest,
    RenameColumnRequest,
    RenameTableRequest,
)
from sqlbridge.ops.result import OperationResult

logger = get_logger(__name__)


# ------------------------------------------------------------------ #
# Introspection
# ------------------------------------------------------------------ #


async def list_tables(ctx: OperationContext, request: ListTablesRequest) -> OperationResult:
    """Table names, or full schemas when ``include_columns`` is set."""
    if request.include_columns:
        schemas = await ctx.introspector.list_tables()
        names = [s.name for s in schemas]
        data: list = [s.to_dict() for s in schemas]
    else:
        names = await ctx.introspector.table_names()
        data = names
    text = "Tables:\n" + "\n".join(f"- {n}" for n in names) if names else "No tables found."
    return OperationResult.ok(data, text=text)


async def list_columns(ctx: OperationContext, request: ListColumnsRequest) -> OperationResult[list[str]]:
    """Column names; an absent table yields an empty list, not an error."""
    columns = await ctx.introspector.list_columns(request.table)
    if not columns:
        return OperationResult.ok([], text=f"Table '{request.table}' has no columns.")
    text = f"Columns of table '{request.table}':\n" + "\n".join(f"- {c}" for c in columns)
    return OperationResult.ok(columns, text=text)


async def describe_table(ctx: OperationContext, request: DescribeTableRequest) -> OperationResult[dict]:
    schema = await ctx.introspector.describe_table(request.table)
    lines = [f"- {c.name}: {c.declared_type}" for c in schema.columns]
    return OperationResult.ok(schema.to_dict(), text=f"Table '{schema.name}':\n" + "\n".join(lines))


# ------------------------------------------------------------------ #
# Tables
# ------------------------------------------------------------------ #


async def create_table(ctx: OperationContext, request: CreateTableRequest) -> OperationResult[dict]:
    """Create a table unless the catalog already lists columns for it."""
    statement = ctx.builder.create_table(
        request.table,
        [c.to_descriptor() for c in request.columns],
    )
    if await ctx.introspector.table_exists(request.table):
        logger.info("create_table_skipped", table=request.table)
        return OperationResult.ok(
            {"table": request.table, "created": False},
            text=f"Table '{request.table}' already exists. Nothing to create.",
        )
    await ctx.adapter.execute(statement)
    return OperationResult.ok(
        {"table": request.table, "created": True},
        text=f"Table '{request.table}' created.",
    )


def confirm_drop_table(request: DropTableRequest) -> None:
    guards.require_confirmation(guards.DROP_TABLE, request.confirmation, table=request.table)


async def drop_table(ctx: OperationContext, request: DropTableRequest) -> OperationResult[dict]:
    await ctx.adapter.execute(ctx.builder.drop_table(request.table))
    return OperationResult.ok({"table": request.table}, text=f"Table '{request.table}' dropped.")


async def rename_table(ctx: OperationContext, request: RenameTableRequest) -> OperationResult[dict]:
    await ctx.adapter.execute(ctx.builder.rename_table(request.table, request.new_name))
    return OperationResult.ok(
        {"table": request.new_name, "previous": request.table},
        text=f"Table '{request.table}' renamed to '{request.new_name}'.",
    )


# ------------------------------------------------------------------ #
# Columns
# ------------------------------------------------------------------ #


async def add_column(ctx: OperationContext, request: AddColumnRequest) -> OperationResult[dict]:
    await ctx.adapter.execute(ctx.builder.add_column(request.table, request.column, request.type))
    return OperationResult.ok(
        {"table": request.table, "column": request.column},
        text=f"Column '{request.column}' added to table '{request.table}'.",
    )


def confirm_drop_column(request: DropColumnRequest) -> None:
    guards.require_confirmation(
        guards.DROP_COLUMN,
        request.confirmation,
        column=request.column,
        table=request.table,
    )


async def drop_column(ctx: OperationContext, request: DropColumnRequest) -> OperationResult[dict]:
    await ctx.adapter.execute(ctx.builder.drop_column(request.table, request.column))
    return OperationResult.ok(
        {"table": request.table, "column": request.column},
        text=f"Column '{request.column}' dropped from table '{request.table}'.",
    )


async def rename_column(ctx: OperationContext, request: RenameColumnRequest) -> OperationResult[dict]:
    statement = ctx.builder.rename_column(request.table, request.column, request.new_name, request.type)
    await ctx.adapter.execute(statement)
    return OperationResult.ok(
        {"table": request.table, "column": request.new_name, "previous": request.column},
        text=f"Column '{request.column}' renamed to '{request.new_name}'.",
    )


def confirm_change_column_type(request: ChangeColumnTypeRequest) -> None:
    guards.require_confirmation(
        guards.CHANGE_COLUMN_TYPE,
        request.confirmation,
        column=request.column,
        new_type=request.new_type,
    )


async def change_column_type(ctx: OperationContext, request: ChangeColumnTypeRequest) -> OperationResult[dict]:
    statement = ctx.builder.change_column_type(request.table, request.column, request.new_type)
    await ctx.adapter.execute(statement)
    return OperationResult.ok(
        {"table": request.table, "column": request.column, "type": request.new_type},
        text=f"Column '{request.column}' type changed to '{request.new_type}'.",
    )
