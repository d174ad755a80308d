"""Connection pool adapters -- one uniform async interface for two engines.

Manifesto:
    Every operation must run identically on MySQL and PostgreSQL.  The
    adapter hides the driver pool behind ``fetch`` / ``execute`` /
    ``test_connection`` / ``close`` so nothing above this package imports
    a driver.

Architecture::

    DatabaseAdapter (base.py)        Abstract base: pool lifecycle + error mapping
        |-- MySQLAdapter             aiomysql pool, %s placeholders
        |-- PostgreSQLAdapter        asyncpg pool, $n placeholders

    AdapterRegistry (registry.py)    engine name -> adapter class
    DatabaseConfig (types.py)        connection + pool parameters
    DatabaseType (types.py)          Enum of supported engines

Guardrails:
    ❌ ``adapter.execute("DELETE FROM t WHERE id=" + user_input)``
    ✅ ``adapter.execute(ParameterizedStatement("... WHERE id=%s", (user_input,)))``
    ❌ ``adapter = PostgreSQLAdapter(...)`` directly in operation code
    ✅ ``adapter = get_adapter(settings.to_config())``

Tags:
    sqlbridge, database, adapters, asyncpg, aiomysql, registry-pattern

Doc-Types:
    package-overview, module-index
"""

from sqlbridge.core.dialect import Dialect, get_dialect

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .registry import AdapterRegistry, adapter_registry, get_adapter
from .types import DatabaseConfig, DatabaseType

__all__ = [
    # Types
    "DatabaseType",
    "DatabaseConfig",
    "Dialect",
    "get_dialect",
    # Base class
    "DatabaseAdapter",
    # Implementations
    "MySQLAdapter",
    "PostgreSQLAdapter",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
