"""sqlbridge core -- engine-agnostic SQL primitives.

Manifesto:
    Every operation must produce the same result on MySQL and PostgreSQL.
    The core holds everything that knows about engines (dialects, pooled
    adapters, catalog queries, statement construction) so that the
    operation layer above it never does.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (SqlBridgeError ...)
        models.py          TableSchema, ColumnDescriptor, ParameterizedStatement, QueryResult
        logging.py         structlog configuration (stderr)
        settings.py        DB_* environment settings (pydantic-settings)

    Layer 2 -- Engine Abstraction
        dialect.py         Dialect protocol + MySQL / PostgreSQL profiles
        adapters/          Pooled async adapters (aiomysql, asyncpg)

    Layer 3 -- SQL Construction
        schema.py          SchemaIntrospector (catalog queries)
        statements.py      StatementBuilder (DML + DDL)

    Transports
        transports/mcp.py  FastMCP scaffold

Tags:
    sqlbridge, core, dialect, adapters, statements

Doc-Types:
    package-overview, architecture-map
"""

from sqlbridge.core.dialect import Dialect, MySQLDialect, PostgreSQLDialect, get_dialect
from sqlbridge.core.errors import SqlBridgeError
from sqlbridge.core.models import (
    ColumnDescriptor,
    CrudAction,
    ParameterizedStatement,
    QueryResult,
    TableSchema,
)
from sqlbridge.core.schema import SchemaIntrospector
from sqlbridge.core.statements import StatementBuilder

__all__ = [
    "Dialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "get_dialect",
    "SqlBridgeError",
    "ColumnDescriptor",
    "CrudAction",
    "ParameterizedStatement",
    "QueryResult",
    "TableSchema",
    "SchemaIntrospector",
    "StatementBuilder",
]
