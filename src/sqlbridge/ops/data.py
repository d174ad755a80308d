"""
Data operations: read-only query, generic CRUD, row inserts, bulk
import and export.

Every value reaches the engine through a placeholder.  There is no
multi-statement transaction: bulk inserts run one INSERT per record, and a
failure part-way leaves the earlier records in place (the error message
says how many).
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from sqlbridge.core.errors import ExecutionError
from sqlbridge.core.logging import get_logger
from sqlbridge.core.models import CrudAction
from sqlbridge.ops import codecs, guards
from sqlbridge.ops.context import OperationContext
from sqlbridge.ops.requests import (
    ExportTableRequest,
    GenericCrudRequest,
    ImportTableRequest,
    InsertRowsRequest,
    ReadOnlyQueryRequest,
)
from sqlbridge.ops.result import OperationResult

logger = get_logger(__name__)


# ------------------------------------------------------------------ #
# Read-only query
# ------------------------------------------------------------------ #


def guard_readonly_query(request: ReadOnlyQueryRequest) -> None:
    guards.require_read_only(request.query)


async def run_readonly_query(ctx: OperationContext, request: ReadOnlyQueryRequest) -> OperationResult[dict]:
    result = await ctx.adapter.fetch(request.query)
    return OperationResult.ok(
        {"columns": list(result.columns), "rows": codecs.jsonable(result.rows)},
        text=codecs.render_table(result),
        metadata={"row_count": result.row_count},
    )


# ------------------------------------------------------------------ #
# Generic CRUD
# ------------------------------------------------------------------ #


def guard_generic_crud(request: GenericCrudRequest) -> None:
    if request.action is CrudAction.DELETE:
        guards.require_confirmation(guards.DELETE_ROWS, request.confirmation, table=request.table)


async def generic_crud(ctx: OperationContext, request: GenericCrudRequest) -> OperationResult:
    builder = ctx.builder
    match request.action:
        case CrudAction.CREATE:
            await ctx.adapter.execute(builder.insert(request.table, request.data or {}))
            return OperationResult.ok({"inserted": 1}, text="Record created.")
        case CrudAction.READ:
            result = await ctx.adapter.fetch(builder.select(request.table, criteria=request.filter))
            rows = codecs.jsonable(result.rows)
            return OperationResult.ok(
                rows,
                text=json.dumps(rows, indent=2, ensure_ascii=False),
                metadata={"row_count": result.row_count},
            )
        case CrudAction.UPDATE:
            affected = await ctx.adapter.execute(builder.update(request.table, request.data or {}, request.filter or {}))
            return OperationResult.ok({"affected": affected}, text=f"Rows updated: {affected}")
        case CrudAction.DELETE:
            affected = await ctx.adapter.execute(builder.delete(request.table, request.filter or {}))
            return OperationResult.ok({"affected": affected}, text=f"Rows deleted: {affected}")


# ------------------------------------------------------------------ #
# Inserts
# ------------------------------------------------------------------ #


async def _insert_all(ctx: OperationContext, table: str, records: Sequence[dict[str, Any]]) -> int:
    """One INSERT per record, in order; returns the number inserted."""
    # Build everything first so a malformed record fails before any write
    statements = [ctx.builder.insert(table, record) for record in records]
    inserted = 0
    for statement in statements:
        try:
            await ctx.adapter.execute(statement)
        except ExecutionError as e:
            logger.warning("bulk_insert_interrupted", table=table, inserted=inserted, total=len(statements))
            raise ExecutionError(
                f"Insert into table '{table}' failed after {inserted} of {len(statements)} record(s): {e.message}",
                cause=e,
            ).with_context(table=table, inserted=inserted) from e
        inserted += 1
    return inserted


async def insert_rows(ctx: OperationContext, request: InsertRowsRequest) -> OperationResult[dict]:
    inserted = await _insert_all(ctx, request.table, request.rows)
    return OperationResult.ok(
        {"inserted": inserted},
        text=f"Inserted {inserted} record(s) into table '{request.table}'.",
    )


# ------------------------------------------------------------------ #
# Bulk import / export
# ------------------------------------------------------------------ #


async def import_table(ctx: OperationContext, request: ImportTableRequest) -> OperationResult[dict]:
    records = codecs.parse_records(request.data, request.format, request.columns)
    inserted = await _insert_all(ctx, request.table, records) if records else 0
    return OperationResult.ok(
        {"inserted": inserted},
        text=f"Imported {inserted} record(s) into table '{request.table}'.",
    )


async def export_table(ctx: OperationContext, request: ExportTableRequest) -> OperationResult[dict]:
    result = await ctx.adapter.fetch(ctx.builder.select(request.table, columns=request.columns))
    columns = list(result.columns) or request.columns
    text = codecs.serialize_records(result.rows, request.format, columns)
    return OperationResult.ok(
        {"format": request.format, "row_count": result.row_count},
        text=text,
    )
