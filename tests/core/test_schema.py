"""Tests for SchemaIntrospector."""

from __future__ import annotations

import pytest

from sqlbridge.core.errors import NotFoundError
from sqlbridge.core.models import ColumnDescriptor
from sqlbridge.core.schema import SchemaIntrospector
from tests._support.fake_adapter import FakeAdapter


@pytest.fixture
def adapter(engine, users_table) -> FakeAdapter:
    return FakeAdapter(engine, tables=users_table)


@pytest.fixture
def introspector(adapter) -> SchemaIntrospector:
    return SchemaIntrospector(adapter)


class TestTableNames:
    @pytest.mark.asyncio
    async def test_sorted_names(self, introspector):
        assert await introspector.table_names() == ["orders", "users"]

    @pytest.mark.asyncio
    async def test_empty_database(self):
        introspector = SchemaIntrospector(FakeAdapter("mysql"))
        assert await introspector.table_names() == []


class TestListTables:
    @pytest.mark.asyncio
    async def test_one_column_query_per_table(self, introspector, adapter):
        schemas = await introspector.list_tables()

        assert [s.name for s in schemas] == ["orders", "users"]
        assert schemas[1].column_names == ["id", "name", "email"]
        # 1 table query + N column queries
        assert len(adapter.fetched) == 3
        assert sorted(s.values for s in adapter.fetched[1:]) == [("orders",), ("users",)]

    @pytest.mark.asyncio
    async def test_declared_types_kept(self, introspector):
        schemas = await introspector.list_tables()
        assert schemas[0].columns[1] == ColumnDescriptor("user_id", "integer")


class TestListColumns:
    @pytest.mark.asyncio
    async def test_ordinal_order(self, introspector):
        assert await introspector.list_columns("users") == ["id", "name", "email"]

    @pytest.mark.asyncio
    async def test_missing_table_is_empty(self, introspector):
        assert await introspector.list_columns("ghosts") == []

    @pytest.mark.asyncio
    async def test_catalog_failure_is_empty(self, introspector, adapter):
        adapter.catalog_error = RuntimeError("permission denied for schema")
        assert await introspector.list_columns("users") == []

    @pytest.mark.asyncio
    async def test_table_name_is_bound(self, introspector, adapter):
        await introspector.list_columns("users")
        assert adapter.fetched[-1].values == ("users",)
        assert adapter.fetched[-1].text == adapter.dialect.list_columns_query()


class TestTableExists:
    @pytest.mark.asyncio
    async def test_exists(self, introspector):
        assert await introspector.table_exists("orders") is True
        assert await introspector.table_exists("ghosts") is False


class TestDescribeTable:
    @pytest.mark.asyncio
    async def test_describe(self, introspector):
        schema = await introspector.describe_table("orders")
        assert schema.to_dict() == {
            "name": "orders",
            "columns": [
                {"name": "id", "declared_type": "integer"},
                {"name": "user_id", "declared_type": "integer"},
            ],
        }

    @pytest.mark.asyncio
    async def test_missing_raises(self, introspector):
        with pytest.raises(NotFoundError, match="Table 'ghosts' does not exist"):
            await introspector.describe_table("ghosts")


class TestUpperCaseCatalogKeys:
    @pytest.mark.asyncio
    async def test_upper_case_labels(self):
        from sqlbridge.core.models import QueryResult

        class UpperCaseAdapter(FakeAdapter):
            async def _fetch(self, pool, statement):
                result = await super()._fetch(pool, statement)
                return QueryResult(
                    columns=tuple(c.upper() for c in result.columns),
                    rows=tuple({k.upper(): v for k, v in r.items()} for r in result.rows),
                )

        introspector = SchemaIntrospector(UpperCaseAdapter("mysql", tables={"t": [("a", "int(11)")]}))
        assert await introspector.table_names() == ["t"]
        assert await introspector.list_columns("t") == ["a"]
