"""Tests for the Dialect abstraction layer."""

from __future__ import annotations

import pytest

from sqlbridge.core.dialect import (
    Dialect,
    MySQLDialect,
    PostgreSQLDialect,
    get_dialect,
    register_dialect,
)


# =========================================================================
# Fixtures
# =========================================================================


@pytest.fixture(params=["mysql", "postgresql"])
def dialect(request: pytest.FixtureRequest) -> Dialect:
    """Parametric fixture: run each test against every dialect."""
    return get_dialect(request.param)


@pytest.fixture
def pg() -> PostgreSQLDialect:
    return PostgreSQLDialect()


@pytest.fixture
def mysql() -> MySQLDialect:
    return MySQLDialect()


# =========================================================================
# Protocol conformance
# =========================================================================


class TestProtocol:
    """Verify all concrete dialects implement the Dialect protocol."""

    def test_isinstance(self, dialect: Dialect) -> None:
        assert isinstance(dialect, Dialect)

    def test_name(self, dialect: Dialect) -> None:
        assert dialect.name in ("mysql", "postgresql")

    def test_placeholder_count_matches(self, dialect: Dialect) -> None:
        for n in range(0, 6):
            assert len(dialect.placeholders(n)) == n

    def test_quote_identifier_uses_quote_char(self, dialect: Dialect) -> None:
        quoted = dialect.quote_identifier("users")
        assert quoted == f"{dialect.quote_char}users{dialect.quote_char}"


# =========================================================================
# Placeholders
# =========================================================================


class TestPlaceholders:
    def test_mysql_anonymous(self, mysql: MySQLDialect) -> None:
        assert mysql.placeholder(0) == "%s"
        assert mysql.placeholder(7) == "%s"
        assert mysql.placeholders(3) == ["%s", "%s", "%s"]

    def test_mysql_ignores_offset(self, mysql: MySQLDialect) -> None:
        assert mysql.placeholders(2, offset=5) == ["%s", "%s"]

    def test_pg_numbered(self, pg: PostgreSQLDialect) -> None:
        assert pg.placeholder(0) == "$1"
        assert pg.placeholder(4) == "$5"
        assert pg.placeholders(3) == ["$1", "$2", "$3"]

    def test_pg_offset_continues_numbering(self, pg: PostgreSQLDialect) -> None:
        assert pg.placeholders(2, offset=1) == ["$2", "$3"]
        assert pg.placeholders(1, offset=3) == ["$4"]

    def test_zero_count(self, dialect: Dialect) -> None:
        assert dialect.placeholders(0) == []
        assert dialect.placeholders(0, offset=4) == []


# =========================================================================
# Quoting
# =========================================================================


class TestQuoting:
    def test_mysql_backticks(self, mysql: MySQLDialect) -> None:
        assert mysql.quote_char == "`"
        assert mysql.quote_identifier("order") == "`order`"

    def test_pg_double_quotes(self, pg: PostgreSQLDialect) -> None:
        assert pg.quote_char == '"'
        assert pg.quote_identifier("order") == '"order"'

    def test_case_preserved(self, pg: PostgreSQLDialect) -> None:
        assert pg.quote_identifier("UserName") == '"UserName"'


# =========================================================================
# DDL phrase variants
# =========================================================================


class TestDDLClauses:
    def test_rename_table(self, mysql: MySQLDialect, pg: PostgreSQLDialect) -> None:
        assert mysql.rename_table_clause("people") == "RENAME TO `people`"
        assert pg.rename_table_clause("people") == 'RENAME TO "people"'

    def test_mysql_rename_column_restates_type(self, mysql: MySQLDialect) -> None:
        assert mysql.rename_column_clause("name", "full_name", "VARCHAR(100)") == (
            "CHANGE `name` `full_name` VARCHAR(100)"
        )

    def test_pg_rename_column_ignores_type(self, pg: PostgreSQLDialect) -> None:
        assert pg.rename_column_clause("name", "full_name", "VARCHAR(100)") == (
            'RENAME COLUMN "name" TO "full_name"'
        )

    def test_alter_column_type(self, mysql: MySQLDialect, pg: PostgreSQLDialect) -> None:
        assert mysql.alter_column_type_clause("born", "DATE") == "MODIFY COLUMN `born` DATE"
        assert pg.alter_column_type_clause("born", "DATE") == 'ALTER COLUMN "born" TYPE DATE'

    def test_drop_unique(self, mysql: MySQLDialect, pg: PostgreSQLDialect) -> None:
        assert mysql.drop_constraint_clause("uq_email") == "DROP INDEX `uq_email`"
        assert pg.drop_constraint_clause("uq_email") == 'DROP CONSTRAINT "uq_email"'

    def test_drop_foreign_key(self, mysql: MySQLDialect, pg: PostgreSQLDialect) -> None:
        assert mysql.drop_foreign_key_clause("fk_user") == "DROP FOREIGN KEY `fk_user`"
        assert pg.drop_foreign_key_clause("fk_user") == 'DROP CONSTRAINT "fk_user"'


# =========================================================================
# Catalog queries
# =========================================================================


class TestCatalogQueries:
    def test_tables_query_base_tables_only(self, dialect: Dialect) -> None:
        q = dialect.list_tables_query()
        assert "BASE TABLE" in q
        assert "table_name" in q.lower()

    def test_pg_scoped_to_current_schema(self, pg: PostgreSQLDialect) -> None:
        assert "current_schema()" in pg.list_tables_query()
        assert "current_schema()" in pg.list_columns_query()

    def test_mysql_scoped_to_current_database(self, mysql: MySQLDialect) -> None:
        assert "DATABASE()" in mysql.list_tables_query()
        assert "DATABASE()" in mysql.list_columns_query()

    def test_columns_query_has_one_placeholder(self, mysql: MySQLDialect, pg: PostgreSQLDialect) -> None:
        assert mysql.list_columns_query().count("%s") == 1
        assert pg.list_columns_query().count("$1") == 1
        assert "$2" not in pg.list_columns_query()

    def test_columns_query_ordered(self, dialect: Dialect) -> None:
        assert "ordinal_position" in dialect.list_columns_query().lower()


# =========================================================================
# Registry
# =========================================================================


class TestRegistry:
    @pytest.mark.parametrize(
        ("alias", "expected"),
        [
            ("mysql", "mysql"),
            ("mariadb", "mysql"),
            ("MySQL", "mysql"),
            ("postgresql", "postgresql"),
            ("postgres", "postgresql"),
            ("pg", "postgresql"),
        ],
    )
    def test_aliases(self, alias: str, expected: str) -> None:
        assert get_dialect(alias).name == expected

    def test_singletons(self) -> None:
        assert get_dialect("postgres") is get_dialect("pg")

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown dialect"):
            get_dialect("sqlite")

    def test_register_custom(self) -> None:
        custom = PostgreSQLDialect()
        register_dialect("CockroachDB", custom)
        assert get_dialect("cockroachdb") is custom
