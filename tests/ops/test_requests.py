"""Tests for operation request models."""

from __future__ import annotations

import pydantic
import pytest

from sqlbridge.core.models import ColumnDescriptor, CrudAction
from sqlbridge.ops.requests import (
    AddColumnRequest,
    CreateTableRequest,
    DropTableRequest,
    ExportTableRequest,
    GenericCrudRequest,
    InsertRowsRequest,
    ListTablesRequest,
    ReadOnlyQueryRequest,
)


class TestCommon:
    def test_extra_fields_forbidden(self):
        with pytest.raises(pydantic.ValidationError):
            DropTableRequest.model_validate({"table": "users", "cascade": True})

    def test_table_required(self):
        with pytest.raises(pydantic.ValidationError):
            DropTableRequest.model_validate({"table": ""})

    def test_frozen(self):
        request = ListTablesRequest()
        with pytest.raises(pydantic.ValidationError):
            request.include_columns = True

    def test_confirmation_defaults_empty(self):
        assert DropTableRequest(table="users").confirmation == ""

    def test_query_required(self):
        with pytest.raises(pydantic.ValidationError):
            ReadOnlyQueryRequest.model_validate({})


class TestCreateTable:
    def test_columns_converted(self):
        request = CreateTableRequest.model_validate(
            {"table": "users", "columns": [{"name": "id", "type": "INT PRIMARY KEY"}]}
        )
        assert request.columns[0].to_descriptor() == ColumnDescriptor("id", "INT PRIMARY KEY")

    def test_columns_required(self):
        with pytest.raises(pydantic.ValidationError):
            CreateTableRequest.model_validate({"table": "users", "columns": []})


class TestAddColumn:
    def test_simple_names(self):
        request = AddColumnRequest(table="users_2", column="Age", type="INT")
        assert request.column == "Age"

    @pytest.mark.parametrize(
        ("table", "column"),
        [
            ("users", "bad-name"),
            ("my table", "age"),
            ("users", "é"),
            ("users", "age\n"),
            ("users\n", "age"),
        ],
    )
    def test_rejects_other_characters(self, table, column):
        with pytest.raises(pydantic.ValidationError, match="letters, digits and underscores"):
            AddColumnRequest(table=table, column=column, type="INT")


class TestInsertRows:
    def test_rows_required(self):
        with pytest.raises(pydantic.ValidationError):
            InsertRowsRequest(table="users", rows=[])

    def test_empty_row_rejected(self):
        with pytest.raises(pydantic.ValidationError, match="row 1 has no columns"):
            InsertRowsRequest(table="users", rows=[{"a": 1}, {}])


class TestExportTable:
    def test_default_format(self):
        assert ExportTableRequest(table="users").format == "json"

    def test_unknown_format(self):
        with pytest.raises(pydantic.ValidationError):
            ExportTableRequest(table="users", format="xml")


class TestGenericCrud:
    def test_action_parsed(self):
        request = GenericCrudRequest.model_validate({"table": "t", "action": "read"})
        assert request.action is CrudAction.READ
        assert request.filter is None

    def test_unknown_action(self):
        with pytest.raises(pydantic.ValidationError):
            GenericCrudRequest.model_validate({"table": "t", "action": "upsert"})

    @pytest.mark.parametrize(
        ("arguments", "message"),
        [
            ({"action": "create"}, "'create' requires non-empty data"),
            ({"action": "create", "data": {}}, "'create' requires non-empty data"),
            ({"action": "update", "filter": {"id": 1}}, "'update' requires non-empty data"),
            ({"action": "update", "data": {"a": 1}}, "'update' requires a non-empty filter"),
            ({"action": "delete"}, "'delete' requires a non-empty filter"),
            ({"action": "delete", "filter": {}}, "'delete' requires a non-empty filter"),
        ],
    )
    def test_required_arguments(self, arguments, message):
        with pytest.raises(pydantic.ValidationError, match=message):
            GenericCrudRequest.model_validate({"table": "t", **arguments})

    def test_read_without_filter_allowed(self):
        GenericCrudRequest.model_validate({"table": "t", "action": "read", "filter": {}})
