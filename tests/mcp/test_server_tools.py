"""Tests for sqlbridge MCP tools.

The tool functions are called directly with a stand-in request context whose
``lifespan_context`` holds an ``AppContext`` over ``FakeAdapter``.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from sqlbridge.core.settings import DatabaseSettings
from sqlbridge.mcp import server
from sqlbridge.mcp._app import AppContext, get_app_context
from sqlbridge.mcp.tools import constraints, data, query, schema
from sqlbridge.ops.dispatcher import OPERATIONS, Dispatcher
from sqlbridge.ops.requests import ColumnDefinition
from tests._support.fake_adapter import FakeAdapter


@pytest.fixture
def adapter(users_table) -> FakeAdapter:
    return FakeAdapter("postgresql", tables=users_table)


@pytest.fixture
def ctx(adapter) -> SimpleNamespace:
    app = AppContext(dispatcher=Dispatcher(adapter, caller="mcp"), settings=DatabaseSettings(), connected=True)
    return SimpleNamespace(request_context=SimpleNamespace(lifespan_context=app))


class TestRegistration:
    @pytest.mark.asyncio
    async def test_every_operation_is_a_tool(self):
        tools = await server.mcp.list_tools()
        assert sorted(t.name for t in tools) == sorted(OPERATIONS)

    @pytest.mark.asyncio
    async def test_confirmation_phrase_in_descriptions(self):
        tools = {t.name: t for t in await server.mcp.list_tools()}
        assert "Confirm deletion of table <table>" in tools["drop-table"].description
        assert "Confirm type change for column <column> to <new_type>" in tools["change-column-type"].description

    @pytest.mark.asyncio
    async def test_ctx_not_exposed_as_argument(self):
        # Context parameters are injected by FastMCP, never part of the schema
        tools = {t.name: t for t in await server.mcp.list_tools()}
        assert "ctx" not in tools["list-tables"].inputSchema.get("properties", {})
        assert "confirmation" in tools["drop-table"].inputSchema["required"]

    def test_default_port(self):
        assert server.DEFAULT_HTTP_PORT == 8120


class TestAppContext:
    def test_get_app_context(self, ctx):
        app = get_app_context(ctx)
        assert app.connected is True
        assert app.dispatcher.context().caller == "mcp"


class TestQueryTools:
    @pytest.mark.asyncio
    async def test_list_tables(self, ctx):
        result = await query.list_tables(ctx)
        assert result["success"] is True
        assert result["data"] == ["orders", "users"]
        assert result["metadata"]["operation"] == "list-tables"

    @pytest.mark.asyncio
    async def test_list_columns_missing_table(self, ctx):
        result = await query.list_columns("ghosts", ctx)
        assert result["success"] is True
        assert result["data"] == []

    @pytest.mark.asyncio
    async def test_describe_table(self, ctx):
        result = await query.describe_table("orders", ctx)
        assert result["data"]["name"] == "orders"

    @pytest.mark.asyncio
    async def test_readonly_rejection(self, ctx, adapter):
        result = await query.run_readonly_query("DELETE FROM users", ctx)
        assert result["success"] is False
        assert result["error"]["code"] == "UNSAFE_QUERY"
        assert result["text"] == "Only SELECT queries are allowed."
        assert adapter.pools_created == 0


class TestSchemaTools:
    @pytest.mark.asyncio
    async def test_create_table(self, ctx, adapter):
        columns = [ColumnDefinition(name="id", type="INT PRIMARY KEY")]
        result = await schema.create_table("people", columns, ctx)
        assert result["data"] == {"table": "people", "created": True}
        assert adapter.executed[0].text == 'CREATE TABLE "people" (\n  "id" INT PRIMARY KEY\n)'

    @pytest.mark.asyncio
    async def test_drop_table_wrong_phrase(self, ctx, adapter):
        result = await schema.drop_table("users", "yes", ctx)
        assert result["error"]["code"] == "CONFIRMATION_REQUIRED"
        assert result["error"]["details"]["expected_phrase"] == "Confirm deletion of table users"
        assert adapter.executed == []

    @pytest.mark.asyncio
    async def test_add_column(self, ctx, adapter):
        result = await schema.add_column("users", "age", "INT", ctx)
        assert result["success"] is True

    @pytest.mark.asyncio
    async def test_rename_column(self, ctx, adapter):
        await schema.rename_column("users", "name", "full_name", "TEXT", ctx)
        assert adapter.executed[0].text == 'ALTER TABLE "users" RENAME COLUMN "name" TO "full_name"'

    @pytest.mark.asyncio
    async def test_change_column_type(self, ctx, adapter):
        result = await schema.change_column_type(
            "users", "born", "DATE", "Confirm type change for column born to DATE", ctx
        )
        assert result["success"] is True


class TestConstraintTools:
    @pytest.mark.asyncio
    async def test_add_unique_unnamed(self, ctx, adapter):
        await constraints.add_unique("users", ["email"], ctx)
        assert adapter.executed[0].text == 'ALTER TABLE "users" ADD UNIQUE ("email")'

    @pytest.mark.asyncio
    async def test_add_foreign_key_optional_actions_omitted(self, ctx, adapter):
        await constraints.add_foreign_key("orders", ["user_id"], "users", ["id"], ctx)
        assert adapter.executed[0].text == (
            'ALTER TABLE "orders" ADD FOREIGN KEY ("user_id") REFERENCES "users" ("id")'
        )

    @pytest.mark.asyncio
    async def test_drop_foreign_key(self, ctx):
        result = await constraints.drop_foreign_key(
            "orders", "fk", "Confirm deletion of foreign key fk from table orders", ctx
        )
        assert result["success"] is True


class TestDataTools:
    @pytest.mark.asyncio
    async def test_generic_crud_update(self, ctx, adapter):
        result = await data.generic_crud("users", "update", ctx, data={"name": "B"}, filter={"id": 5})
        assert result["text"] == "Rows updated: 1"
        assert adapter.executed[0].values == ("B", 5)

    @pytest.mark.asyncio
    async def test_generic_crud_delete_without_confirmation(self, ctx, adapter):
        result = await data.generic_crud("users", "delete", ctx, filter={"id": 5})
        assert result["error"]["code"] == "CONFIRMATION_REQUIRED"
        assert adapter.executed == []

    @pytest.mark.asyncio
    async def test_insert_rows(self, ctx, adapter):
        result = await data.insert_rows("users", [{"id": 1}, {"id": 2}], ctx)
        assert result["data"] == {"inserted": 2}

    @pytest.mark.asyncio
    async def test_import_and_export(self, ctx, adapter):
        imported = await data.import_table("users", "id,name\n1,Ada\n", ctx, format="csv")
        assert imported["data"] == {"inserted": 1}

        exported = await data.export_table("users", ctx, format="csv", columns=["id"])
        assert exported["data"] == {"format": "csv", "row_count": 0}
        assert exported["text"] == "id\n"
