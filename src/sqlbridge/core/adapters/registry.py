"""Database adapter registry and factory.

Manifesto:
    Consumers should never hard-code adapter class names.  The registry
    maps engine names to adapter classes and ``get_adapter()`` builds a
    configured (not yet connected) instance from a ``DatabaseConfig``.

Features:
    - ``AdapterRegistry`` with pre-registered defaults and aliases
    - ``register()`` for custom adapters and test doubles
    - ``get_adapter()`` factory: config → adapter

Tags:
    sqlbridge, database, registry, factory

Doc-Types:
    api-reference
"""

from __future__ import annotations

from sqlbridge.core.errors import ConfigError

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .types import DatabaseConfig


class AdapterRegistry:
    """
    Registry for database adapter classes.

    Pre-registered adapters:
    - ``mysql`` / ``mariadb``: :class:`MySQLAdapter`
    - ``postgresql`` / ``postgres`` / ``pg``: :class:`PostgreSQLAdapter`
    """

    def __init__(self):
        self._factories: dict[str, type[DatabaseAdapter]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self._factories["mysql"] = MySQLAdapter
        self._factories["mariadb"] = MySQLAdapter  # Alias
        self._factories["postgresql"] = PostgreSQLAdapter
        self._factories["postgres"] = PostgreSQLAdapter  # Alias
        self._factories["pg"] = PostgreSQLAdapter  # Alias

    def register(self, name: str, adapter_class: type[DatabaseAdapter]) -> None:
        """Register an adapter class."""
        self._factories[name.lower()] = adapter_class

    def create(self, config: DatabaseConfig, name: str | None = None) -> DatabaseAdapter:
        """Create an adapter for ``config`` (looked up by ``name`` or the config's engine)."""
        key = (name or config.db_type.value).lower()
        if key not in self._factories:
            raise ConfigError(f"Unknown database adapter: {key}")
        return self._factories[key](config)

    def list_adapters(self) -> list[str]:
        """List registered adapter names."""
        return sorted(self._factories.keys())


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(config: DatabaseConfig) -> DatabaseAdapter:
    """
    Get a database adapter for a config.

    Usage:
        adapter = get_adapter(load_settings().to_config())
    """
    return adapter_registry.create(config)


__all__ = [
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
