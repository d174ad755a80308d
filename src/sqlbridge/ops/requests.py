"""
Typed request objects for operations.

Each model is the *input* contract for one catalog operation.  The
dispatcher validates the raw argument mapping against it before anything
else runs; transports hand over plain dicts and never construct SQL.

Destructive operations carry a ``confirmation`` string.  It defaults to
empty so a missing phrase reaches the confirmation guard (and its
``CONFIRMATION_REQUIRED`` answer naming the expected phrase) instead of
failing as a generic validation error.
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sqlbridge.core.models import ColumnDescriptor, CrudAction

SIMPLE_NAME = re.compile(r"[A-Za-z0-9_]+")

DataFormat = Literal["csv", "json"]


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class _TableRequest(_Request):
    table: str = Field(..., min_length=1, description="Target table name")


# ------------------------------------------------------------------ #
# Introspection / query
# ------------------------------------------------------------------ #


class ListTablesRequest(_Request):
    """Request for ``list-tables``."""

    include_columns: bool = Field(default=False, description="Also return each table's columns")


class ListColumnsRequest(_TableRequest):
    """Request for ``list-columns``."""


class DescribeTableRequest(_TableRequest):
    """Request for ``describe-table``."""


class ReadOnlyQueryRequest(_Request):
    """Request for ``run-readonly-query``."""

    query: str = Field(..., min_length=1, description="SELECT statement")


# ------------------------------------------------------------------ #
# Bulk import / export
# ------------------------------------------------------------------ #


class ExportTableRequest(_TableRequest):
    """Request for ``export-table``."""

    format: DataFormat = "json"
    columns: list[str] | None = Field(default=None, description="Columns to export (default: all)")


class ImportTableRequest(_TableRequest):
    """Request for ``import-table``.

    Attributes:
        data: CSV or JSON text.
        columns: JSON: only these keys are inserted.  CSV: values are mapped
            positionally onto these names and the header row is skipped.
    """

    data: str = Field(..., min_length=1)
    format: DataFormat = "json"
    columns: list[str] | None = None


class InsertRowsRequest(_TableRequest):
    """Request for ``insert-rows``."""

    rows: list[dict[str, Any]] = Field(..., min_length=1)

    @field_validator("rows")
    @classmethod
    def rows_not_empty(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        for i, row in enumerate(v):
            if not row:
                raise ValueError(f"row {i} has no columns")
        return v


# ------------------------------------------------------------------ #
# Tables and columns
# ------------------------------------------------------------------ #


class ColumnDefinition(_Request):
    """Column name plus its DDL type text (``INT PRIMARY KEY``, ``VARCHAR(100)``)."""

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)

    def to_descriptor(self) -> ColumnDescriptor:
        return ColumnDescriptor(name=self.name, declared_type=self.type)


class CreateTableRequest(_TableRequest):
    """Request for ``create-table``."""

    columns: list[ColumnDefinition] = Field(..., min_length=1)


class DropTableRequest(_TableRequest):
    """Request for ``drop-table``."""

    confirmation: str = ""


class RenameTableRequest(_TableRequest):
    """Request for ``rename-table``."""

    new_name: str = Field(..., min_length=1)


class AddColumnRequest(_TableRequest):
    """Request for ``add-column``; names are restricted to ``[A-Za-z0-9_]``."""

    column: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)

    @field_validator("table", "column")
    @classmethod
    def simple_name(cls, v: str) -> str:
        if not SIMPLE_NAME.fullmatch(v):
            raise ValueError("use only letters, digits and underscores")
        return v


class DropColumnRequest(_TableRequest):
    """Request for ``drop-column``."""

    column: str = Field(..., min_length=1)
    confirmation: str = ""


class RenameColumnRequest(_TableRequest):
    """Request for ``rename-column``.

    ``type`` is required on every engine; MySQL restates it in ``CHANGE``.
    """

    column: str = Field(..., min_length=1)
    new_name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)


class ChangeColumnTypeRequest(_TableRequest):
    """Request for ``change-column-type``."""

    column: str = Field(..., min_length=1)
    new_type: str = Field(..., min_length=1)
    confirmation: str = ""


# ------------------------------------------------------------------ #
# Constraints
# ------------------------------------------------------------------ #


class AddUniqueRequest(_TableRequest):
    """Request for ``add-unique``."""

    columns: list[str] = Field(..., min_length=1)
    name: str | None = None


class DropUniqueRequest(_TableRequest):
    """Request for ``drop-unique``."""

    name: str = Field(..., min_length=1)
    confirmation: str = ""


class AddForeignKeyRequest(_TableRequest):
    """Request for ``add-foreign-key``.

    ``on_delete`` / ``on_update`` are appended verbatim (``CASCADE``,
    ``SET NULL`` …) and must come from a trusted caller.
    """

    columns: list[str] = Field(..., min_length=1)
    ref_table: str = Field(..., min_length=1)
    ref_columns: list[str] = Field(..., min_length=1)
    name: str | None = None
    on_delete: str | None = None
    on_update: str | None = None


class DropForeignKeyRequest(_TableRequest):
    """Request for ``drop-foreign-key``."""

    name: str = Field(..., min_length=1)
    confirmation: str = ""


# ------------------------------------------------------------------ #
# Generic CRUD
# ------------------------------------------------------------------ #


class GenericCrudRequest(_TableRequest):
    """Request for ``generic-crud``.

    ``create``/``update`` need non-empty ``data``; ``update``/``delete``
    need a non-empty ``filter``.  A missing filter is rejected, never
    treated as "all rows".  ``read`` with no filter returns every row.
    """

    action: CrudAction
    data: dict[str, Any] | None = None
    filter: dict[str, Any] | None = None
    confirmation: str = ""

    @model_validator(mode="after")
    def check_action_arguments(self) -> GenericCrudRequest:
        if self.action in (CrudAction.CREATE, CrudAction.UPDATE) and not self.data:
            raise ValueError(f"'{self.action.value}' requires non-empty data")
        if self.action in (CrudAction.UPDATE, CrudAction.DELETE) and not self.filter:
            raise ValueError(f"'{self.action.value}' requires a non-empty filter")
        return self


__all__ = [
    "ListTablesRequest",
    "ListColumnsRequest",
    "DescribeTableRequest",
    "ReadOnlyQueryRequest",
    "ExportTableRequest",
    "ImportTableRequest",
    "InsertRowsRequest",
    "ColumnDefinition",
    "CreateTableRequest",
    "DropTableRequest",
    "RenameTableRequest",
    "AddColumnRequest",
    "DropColumnRequest",
    "RenameColumnRequest",
    "ChangeColumnTypeRequest",
    "AddUniqueRequest",
    "DropUniqueRequest",
    "AddForeignKeyRequest",
    "DropForeignKeyRequest",
    "GenericCrudRequest",
]
