"""
Operation dispatcher: the named-operation catalog.

Each invocation runs the same stateless pipeline::

    Validate ──► Guard ──► Build ──► Execute ──► Normalize
    (pydantic)   (read-only /   (StatementBuilder)  (adapter)   (OperationResult)
                  confirmation)

Validation and guards never touch the database.  Every failure, whatever
stage it comes from, is converted into ``OperationResult.fail`` carrying
only message text; no exception leaves :meth:`Dispatcher.dispatch`.

Structural changes are not serialized against each other here.  Two
concurrent DDL operations on the same table race inside the engine.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import pydantic

from sqlbridge.core.adapters.base import DatabaseAdapter
from sqlbridge.core.errors import (
    ConfirmationRequiredError,
    ConnectivityError,
    ErrorCategory,
    ExecutionError,
    NotFoundError,
    PoolClosedError,
    SqlBridgeError,
    UnsafeQueryError,
    ValidationError,
)
from sqlbridge.core.logging import LogContext, get_logger
from sqlbridge.core.schema import SchemaIntrospector
from sqlbridge.core.statements import StatementBuilder
from sqlbridge.ops import constraints, data, tables
from sqlbridge.ops import guards as _guards
from sqlbridge.ops import requests as rq
from sqlbridge.ops.context import OperationContext
from sqlbridge.ops.result import OperationResult, start_timer

logger = get_logger(__name__)

Handler = Callable[[OperationContext, Any], Awaitable[OperationResult]]
Guard = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class OperationSpec:
    """One entry of the operation catalog.

    Attributes:
        name: Catalog name (``drop-table``).
        request_type: Pydantic model validating the argument mapping.
        handler: Coroutine doing Build → Execute → Normalize.
        description: One-line summary for transports and ``--help``.
        guard: Pure precondition run after validation, before the handler.
        confirmation: Confirmation template, for destructive operations.
    """

    name: str
    request_type: type[pydantic.BaseModel]
    handler: Handler
    description: str
    guard: Guard | None = None
    confirmation: str | None = None


OPERATIONS: dict[str, OperationSpec] = {
    spec.name: spec
    for spec in (
        OperationSpec("list-tables", rq.ListTablesRequest, tables.list_tables,
                      "List the tables of the current database"),
        OperationSpec("list-columns", rq.ListColumnsRequest, tables.list_columns,
                      "List the column names of a table (empty if absent)"),
        OperationSpec("describe-table", rq.DescribeTableRequest, tables.describe_table,
                      "Columns and declared types of a table"),
        OperationSpec("run-readonly-query", rq.ReadOnlyQueryRequest, data.run_readonly_query,
                      "Run a SELECT query", guard=data.guard_readonly_query),
        OperationSpec("export-table", rq.ExportTableRequest, data.export_table,
                      "Export table rows as CSV or JSON"),
        OperationSpec("import-table", rq.ImportTableRequest, data.import_table,
                      "Import CSV or JSON rows into a table"),
        OperationSpec("insert-rows", rq.InsertRowsRequest, data.insert_rows,
                      "Insert a list of records into a table"),
        OperationSpec("create-table", rq.CreateTableRequest, tables.create_table,
                      "Create a table unless it already exists"),
        OperationSpec("drop-table", rq.DropTableRequest, tables.drop_table,
                      "Drop a table", guard=tables.confirm_drop_table,
                      confirmation=_guards.DROP_TABLE),
        OperationSpec("rename-table", rq.RenameTableRequest, tables.rename_table,
                      "Rename a table"),
        OperationSpec("add-column", rq.AddColumnRequest, tables.add_column,
                      "Add a column to a table"),
        OperationSpec("drop-column", rq.DropColumnRequest, tables.drop_column,
                      "Drop a column from a table", guard=tables.confirm_drop_column,
                      confirmation=_guards.DROP_COLUMN),
        OperationSpec("rename-column", rq.RenameColumnRequest, tables.rename_column,
                      "Rename a column"),
        OperationSpec("change-column-type", rq.ChangeColumnTypeRequest, tables.change_column_type,
                      "Change a column's type", guard=tables.confirm_change_column_type,
                      confirmation=_guards.CHANGE_COLUMN_TYPE),
        OperationSpec("add-unique", rq.AddUniqueRequest, constraints.add_unique,
                      "Add a UNIQUE constraint"),
        OperationSpec("drop-unique", rq.DropUniqueRequest, constraints.drop_unique,
                      "Drop a UNIQUE constraint", guard=constraints.confirm_drop_unique,
                      confirmation=_guards.DROP_UNIQUE),
        OperationSpec("add-foreign-key", rq.AddForeignKeyRequest, constraints.add_foreign_key,
                      "Add a FOREIGN KEY constraint"),
        OperationSpec("drop-foreign-key", rq.DropForeignKeyRequest, constraints.drop_foreign_key,
                      "Drop a FOREIGN KEY constraint", guard=constraints.confirm_drop_foreign_key,
                      confirmation=_guards.DROP_FOREIGN_KEY),
        OperationSpec("generic-crud", rq.GenericCrudRequest, data.generic_crud,
                      "Create, read, update or delete rows", guard=data.guard_generic_crud,
                      confirmation=_guards.DELETE_ROWS),
    )
}


# ------------------------------------------------------------------ #
# Error normalization
# ------------------------------------------------------------------ #


def error_code(exc: SqlBridgeError) -> str:
    """Envelope code for a typed error (most specific class first)."""
    match exc:
        case ConfirmationRequiredError():
            return "CONFIRMATION_REQUIRED"
        case UnsafeQueryError():
            return "UNSAFE_QUERY"
        case ValidationError():
            return "VALIDATION_FAILED"
        case NotFoundError():
            return "NOT_FOUND"
        case PoolClosedError():
            return "POOL_CLOSED"
        case ConnectivityError():
            return "CONNECTIVITY"
        case ExecutionError():
            return "EXECUTION_FAILED"
        case _:
            return "INTERNAL"


def _error_details(exc: SqlBridgeError) -> dict[str, Any]:
    details = exc.context.to_dict()
    if isinstance(exc, ConfirmationRequiredError):
        details["expected_phrase"] = exc.expected_phrase
    if isinstance(exc, ValidationError) and exc.field:
        details["field"] = exc.field
    return details


def _validation_error(exc: pydantic.ValidationError) -> ValidationError:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err["msg"].removeprefix("Value error, ")
        problems.append(f"{loc}: {msg}" if loc else msg)
    first = exc.errors()[0] if exc.errors() else {}
    field = str(first["loc"][0]) if first.get("loc") else None
    return ValidationError("Invalid arguments: " + "; ".join(problems), field=field, cause=exc)


# ------------------------------------------------------------------ #
# Dispatcher
# ------------------------------------------------------------------ #


class Dispatcher:
    """Runs catalog operations against one adapter.

    The adapter is passed in and owned by the caller (the server lifespan or
    the CLI command); :meth:`close` is a convenience that shuts it down.
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        *,
        caller: str = "sdk",
        operations: Mapping[str, OperationSpec] | None = None,
    ):
        self._adapter = adapter
        self._introspector = SchemaIntrospector(adapter)
        self._builder = StatementBuilder(adapter.dialect)
        self._caller = caller
        self._operations = dict(operations if operations is not None else OPERATIONS)

    @property
    def adapter(self) -> DatabaseAdapter:
        return self._adapter

    @property
    def introspector(self) -> SchemaIntrospector:
        return self._introspector

    @property
    def builder(self) -> StatementBuilder:
        return self._builder

    @property
    def operations(self) -> Mapping[str, OperationSpec]:
        return self._operations

    def context(self) -> OperationContext:
        """Fresh per-invocation context sharing the adapter, introspector and builder."""
        return OperationContext(
            adapter=self._adapter,
            introspector=self._introspector,
            builder=self._builder,
            caller=self._caller,
        )

    async def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        """Validate, guard and run one named operation; never raises."""
        timer = start_timer()
        spec = self._operations.get(name)
        if spec is None:
            logger.warning("operation_unknown", operation=name)
            return OperationResult.fail(
                "UNKNOWN_OPERATION",
                f"Unknown operation '{name}'. Available: {', '.join(sorted(self._operations))}",
                category=ErrorCategory.VALIDATION,
                elapsed_ms=timer.elapsed_ms,
            )

        ctx = self.context()
        with LogContext(operation=name, request_id=ctx.request_id, caller=ctx.caller):
            logger.debug("operation_started")
            try:
                result = await self._run(spec, ctx, arguments or {})
            except SqlBridgeError as exc:
                exc.with_context(operation=name)
                self._log_failure(exc)
                result = OperationResult.fail(
                    error_code(exc),
                    exc.message,
                    category=exc.category,
                    details=_error_details(exc),
                )
            except Exception as exc:
                logger.exception("operation_failed", error=str(exc))
                result = OperationResult.fail("INTERNAL", str(exc) or type(exc).__name__)

            result.elapsed_ms = timer.elapsed_ms
            result.metadata.setdefault("operation", name)
            if result.success:
                logger.info("operation_completed", elapsed_ms=round(result.elapsed_ms, 2))
        return result

    async def _run(self, spec: OperationSpec, ctx: OperationContext, arguments: Mapping[str, Any]) -> OperationResult:
        try:
            request = spec.request_type.model_validate(dict(arguments))
        except pydantic.ValidationError as exc:
            raise _validation_error(exc) from exc
        if spec.guard is not None:
            spec.guard(request)
        return await spec.handler(ctx, request)

    @staticmethod
    def _log_failure(exc: SqlBridgeError) -> None:
        if exc.category in (ErrorCategory.VALIDATION, ErrorCategory.SAFETY, ErrorCategory.NOT_FOUND):
            logger.warning("operation_failed", **exc.to_dict())
        else:
            logger.error("operation_failed", **exc.to_dict())

    async def close(self) -> None:
        await self._adapter.close()


__all__ = ["Dispatcher", "OPERATIONS", "OperationSpec", "error_code"]
