"""UNIQUE and FOREIGN KEY constraint operations."""

from __future__ import annotations

from sqlbridge.ops import guards
from sqlbridge.ops.context import OperationContext
from sqlbridge.ops.requests import (
    AddForeignKeyRequest,
    AddUniqueRequest,
    DropForeignKeyRequest,
    DropUniqueRequest,
)
from sqlbridge.ops.result import OperationResult


async def add_unique(ctx: OperationContext, request: AddUniqueRequest) -> OperationResult[dict]:
    await ctx.adapter.execute(ctx.builder.add_unique(request.table, request.columns, request.name))
    return OperationResult.ok(
        {"table": request.table, "columns": list(request.columns), "name": request.name},
        text=f"UNIQUE constraint added to table '{request.table}'.",
    )


def confirm_drop_unique(request: DropUniqueRequest) -> None:
    guards.require_confirmation(guards.DROP_UNIQUE, request.confirmation, name=request.name, table=request.table)


async def drop_unique(ctx: OperationContext, request: DropUniqueRequest) -> OperationResult[dict]:
    await ctx.adapter.execute(ctx.builder.drop_unique(request.table, request.name))
    return OperationResult.ok(
        {"table": request.table, "name": request.name},
        text=f"UNIQUE constraint '{request.name}' dropped from table '{request.table}'.",
    )


async def add_foreign_key(ctx: OperationContext, request: AddForeignKeyRequest) -> OperationResult[dict]:
    statement = ctx.builder.add_foreign_key(
        request.table,
        request.columns,
        request.ref_table,
        request.ref_columns,
        name=request.name,
        on_delete=request.on_delete,
        on_update=request.on_update,
    )
    await ctx.adapter.execute(statement)
    return OperationResult.ok(
        {"table": request.table, "ref_table": request.ref_table, "name": request.name},
        text=f"Foreign key added to table '{request.table}' referencing '{request.ref_table}'.",
    )


def confirm_drop_foreign_key(request: DropForeignKeyRequest) -> None:
    guards.require_confirmation(guards.DROP_FOREIGN_KEY, request.confirmation, name=request.name, table=request.table)


async def drop_foreign_key(ctx: OperationContext, request: DropForeignKeyRequest) -> OperationResult[dict]:
    await ctx.adapter.execute(ctx.builder.drop_foreign_key(request.table, request.name))
    return OperationResult.ok(
        {"table": request.table, "name": request.name},
        text=f"Foreign key '{request.name}' dropped from table '{request.table}'.",
    )
