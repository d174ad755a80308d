"""SQL dialect profiles for the two supported engines.

Provides a ``Dialect`` protocol and one concrete implementation per engine.
The statement builder and the schema introspector ask the dialect for every
engine-specific fragment (identifier quoting, placeholder tokens, DDL phrase
variants, catalog queries), so neither of them branches on the engine.

Manifesto:
    Operations must behave identically on MySQL and PostgreSQL.  Without a
    dialect layer, every statement is an ``if mysql ... else ...`` ladder
    and a fix applied to one branch silently misses the other.

    - **One interface:** Dialect protocol for all engine-specific SQL
    - **Chosen once:** resolved at startup, never mutated afterwards
    - **Stateless:** shared read-only by every concurrent operation
    - **Testable:** fragments are plain strings, no driver needed

Architecture::

    ┌──────────────────────────────────────────────────────────────────┐
    │                     Dialect Abstraction Layer                     │
    └──────────────────────────────────────────────────────────────────┘

    StatementBuilder / SchemaIntrospector:
    ┌────────────────────────────────────────────────────────────────┐
    │  cols = ", ".join(d.quote_identifier(c) for c in columns)      │
    │  vals = ", ".join(d.placeholders(len(columns)))                │
    │  f"INSERT INTO {d.quote_identifier(t)} ({cols}) VALUES ({vals})"│
    └────────────────────────────────────────────────────────────────┘
                              │
                ┌─────────────┴──────────────┐
                ▼                            ▼
    ┌────────────────────────┐  ┌─────────────────────────────────┐
    │ MySQLDialect           │  │ PostgreSQLDialect               │
    │ `ident`                │  │ "ident"                         │
    │ %s, %s, %s             │  │ $1, $2, $3 (offset-aware)       │
    │ CHANGE / MODIFY COLUMN │  │ RENAME COLUMN / ALTER ... TYPE  │
    │ DROP INDEX / FOREIGN KEY│ │ DROP CONSTRAINT                 │
    └────────────────────────┘  └─────────────────────────────────┘

Features:
    - **MySQLDialect:** backtick quoting, ``%s`` placeholders (aiomysql paramstyle)
    - **PostgreSQLDialect:** double-quote quoting, ``$n`` placeholders (asyncpg)
    - **Offset-aware placeholders:** UPDATE continues numbering its WHERE
      group after the SET group
    - **get_dialect():** Lookup by engine name, including aliases

Examples:
    >>> from sqlbridge.core.dialect import get_dialect
    >>> pg = get_dialect("postgresql")
    >>> pg.placeholders(2, offset=1)
    ['$2', '$3']
    >>> pg.quote_identifier("order")
    '"order"'
    >>> get_dialect("mysql").placeholders(3)
    ['%s', '%s', '%s']

Guardrails:
    ❌ DON'T: Compare engine names inside statement construction
    ✅ DO: Add a method to the Dialect protocol and implement it twice

    ❌ DON'T: Quote identifiers containing the quote character
    ✅ DO: Reject them before building (see ``Dialect.quote_char``)

Tags:
    dialect, sql, abstraction, portability, mysql, postgresql, sqlbridge

Doc-Types:
    - API Reference
    - Architecture Documentation
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a **SQL fragment** (string) valid for the target
    engine.  Fragments that embed identifiers quote them; DDL type text is
    inserted verbatim.
    """

    @property
    def name(self) -> str:
        """Canonical engine name (``'mysql'`` or ``'postgresql'``)."""
        ...

    # -- Identifiers -------------------------------------------------------

    @property
    def quote_char(self) -> str:
        """Delimiter wrapped around identifiers.

        Embedded delimiters are not escaped; names containing this character
        must be rejected by the caller.
        """
        ...

    def quote_identifier(self, name: str) -> str:
        """Wrap ``name`` in the engine's identifier delimiters."""
        ...

    # -- Placeholder generation --------------------------------------------

    def placeholder(self, index: int) -> str:
        """Single positional placeholder (0-based index).

        ``index`` is ignored by MySQL (anonymous ``%s``) but required by
        PostgreSQL's numbered ``$n`` style.
        """
        ...

    def placeholders(self, count: int, offset: int = 0) -> list[str]:
        """Exactly ``count`` placeholder tokens, numbered from ``offset + 1``.

        >>> dialect.placeholders(2, offset=3)
        ['%s', '%s']       # MySQL
        ['$4', '$5']       # PostgreSQL
        """
        ...

    # -- DDL phrase variants -----------------------------------------------

    def rename_table_clause(self, new_name: str) -> str:
        """``ALTER TABLE t <clause>`` fragment renaming the table."""
        ...

    def rename_column_clause(self, old_name: str, new_name: str, column_type: str) -> str:
        """``ALTER TABLE t <clause>`` fragment renaming a column.

        MySQL restates the full column definition, so ``column_type`` is
        required there; PostgreSQL ignores it.
        """
        ...

    def alter_column_type_clause(self, column: str, new_type: str) -> str:
        """``ALTER TABLE t <clause>`` fragment changing a column's type."""
        ...

    def drop_constraint_clause(self, name: str) -> str:
        """``ALTER TABLE t <clause>`` fragment dropping a UNIQUE constraint."""
        ...

    def drop_foreign_key_clause(self, name: str) -> str:
        """``ALTER TABLE t <clause>`` fragment dropping a foreign key."""
        ...

    # -- Catalog queries ---------------------------------------------------

    def list_tables_query(self) -> str:
        """Query returning one ``table_name`` row per base table, sorted."""
        ...

    def list_columns_query(self) -> str:
        """Query returning ``column_name`` / ``data_type`` rows for one table.

        Accepts exactly one placeholder, bound to the table name.  Rows come
        back in ordinal position order.
        """
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class MySQLDialect:
    """MySQL / MariaDB dialect: backtick quoting, ``%s`` placeholders.

    ``%s`` is the ``format`` paramstyle used by ``aiomysql`` (and PyMySQL
    underneath it).
    """

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def quote_char(self) -> str:
        return "`"

    def quote_identifier(self, name: str) -> str:
        return f"`{name}`"

    # -- Placeholders ------------------------------------------------------

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def placeholders(self, count: int, offset: int = 0) -> list[str]:  # noqa: ARG002
        return ["%s"] * count

    # -- DDL ---------------------------------------------------------------

    def rename_table_clause(self, new_name: str) -> str:
        return f"RENAME TO {self.quote_identifier(new_name)}"

    def rename_column_clause(self, old_name: str, new_name: str, column_type: str) -> str:
        return f"CHANGE {self.quote_identifier(old_name)} {self.quote_identifier(new_name)} {column_type}"

    def alter_column_type_clause(self, column: str, new_type: str) -> str:
        return f"MODIFY COLUMN {self.quote_identifier(column)} {new_type}"

    def drop_constraint_clause(self, name: str) -> str:
        # UNIQUE constraints are indexes in MySQL
        return f"DROP INDEX {self.quote_identifier(name)}"

    def drop_foreign_key_clause(self, name: str) -> str:
        return f"DROP FOREIGN KEY {self.quote_identifier(name)}"

    # -- Catalog -----------------------------------------------------------

    def list_tables_query(self) -> str:
        return (
            "SELECT TABLE_NAME AS table_name FROM information_schema.TABLES "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_TYPE = 'BASE TABLE' "
            "ORDER BY TABLE_NAME"
        )

    def list_columns_query(self) -> str:
        return (
            "SELECT COLUMN_NAME AS column_name, COLUMN_TYPE AS data_type "
            "FROM information_schema.COLUMNS "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s "
            "ORDER BY ORDINAL_POSITION"
        )


class PostgreSQLDialect:
    """PostgreSQL dialect: double-quote quoting, ``$n`` placeholders.

    ``$n`` is the native protocol style used by ``asyncpg``.  Catalog
    queries are scoped to ``current_schema()``.
    """

    @property
    def name(self) -> str:
        return "postgresql"

    @property
    def quote_char(self) -> str:
        return '"'

    def quote_identifier(self, name: str) -> str:
        return f'"{name}"'

    # -- Placeholders ------------------------------------------------------

    def placeholder(self, index: int) -> str:
        return f"${index + 1}"

    def placeholders(self, count: int, offset: int = 0) -> list[str]:
        return [f"${offset + i + 1}" for i in range(count)]

    # -- DDL ---------------------------------------------------------------

    def rename_table_clause(self, new_name: str) -> str:
        return f"RENAME TO {self.quote_identifier(new_name)}"

    def rename_column_clause(self, old_name: str, new_name: str, column_type: str) -> str:  # noqa: ARG002
        return f"RENAME COLUMN {self.quote_identifier(old_name)} TO {self.quote_identifier(new_name)}"

    def alter_column_type_clause(self, column: str, new_type: str) -> str:
        return f"ALTER COLUMN {self.quote_identifier(column)} TYPE {new_type}"

    def drop_constraint_clause(self, name: str) -> str:
        return f"DROP CONSTRAINT {self.quote_identifier(name)}"

    def drop_foreign_key_clause(self, name: str) -> str:
        return f"DROP CONSTRAINT {self.quote_identifier(name)}"

    # -- Catalog -----------------------------------------------------------

    def list_tables_query(self) -> str:
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = current_schema() AND table_type = 'BASE TABLE' "
            "ORDER BY table_name"
        )

    def list_columns_query(self) -> str:
        return (
            "SELECT column_name, data_type FROM information_schema.columns "
            "WHERE table_schema = current_schema() AND table_name = $1 "
            "ORDER BY ordinal_position"
        )


# =========================================================================
# Registry / Factory
# =========================================================================

# Pre-instantiated singletons (dialects are stateless)
_MYSQL = MySQLDialect()
_POSTGRESQL = PostgreSQLDialect()

_DIALECTS: dict[str, Dialect] = {
    "mysql": _MYSQL,
    "mariadb": _MYSQL,  # alias
    "postgresql": _POSTGRESQL,
    "postgres": _POSTGRESQL,  # alias
    "pg": _POSTGRESQL,  # alias
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by engine name.

    Args:
        db_type: One of ``'mysql'``, ``'mariadb'``, ``'postgresql'``,
                 ``'postgres'``, ``'pg'`` (or a ``DatabaseType`` member).

    Returns:
        Pre-instantiated :class:`Dialect` for the requested engine.

    Raises:
        ValueError: If ``db_type`` is not recognised.
    """
    key = db_type.lower() if isinstance(db_type, str) else db_type.value
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {sorted(_DIALECTS)}"
        )
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation (test doubles, forks).

    Args:
        name: Lookup key (lower-cased automatically).
        dialect: Instance implementing :class:`Dialect`.
    """
    _DIALECTS[name.lower()] = dialect


__all__ = [
    # Protocol
    "Dialect",
    # Implementations
    "MySQLDialect",
    "PostgreSQLDialect",
    # Factory
    "get_dialect",
    "register_dialect",
]
