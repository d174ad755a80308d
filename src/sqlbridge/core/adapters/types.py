"""Database types and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlbridge.core.errors import ConfigError


class DatabaseType(str, Enum):
    """Supported database engines."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"

    @classmethod
    def from_name(cls, name: str) -> DatabaseType:
        """Resolve an engine selector, accepting the common aliases."""
        key = name.strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unsupported database type: {name!r}") from None


_ALIASES: dict[str, DatabaseType] = {
    "mysql": DatabaseType.MYSQL,
    "mariadb": DatabaseType.MYSQL,
    "postgresql": DatabaseType.POSTGRESQL,
    "postgres": DatabaseType.POSTGRESQL,
    "pg": DatabaseType.POSTGRESQL,
}


@dataclass
class DatabaseConfig:
    """
    Configuration for a pooled database connection.

    Both engines use the same fields; only the driver differs.
    """

    db_type: DatabaseType = DatabaseType.POSTGRESQL

    host: str = "localhost"
    port: int = 5432
    database: str = ""
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    # Connection pool
    pool_min_size: int = 1
    pool_max_size: int = 10
    connect_timeout: float = 10.0

    # Extra options (driver-specific)
    options: dict[str, Any] = field(default_factory=dict)

    def to_connection_string(self, mask_password: bool = True) -> str:
        """Render a URL for the database; the password is masked unless asked."""
        password = "***" if mask_password and self.password else (self.password or "")
        credentials = self.username or ""
        if password:
            credentials = f"{credentials}:{password}"
        if credentials:
            credentials = f"{credentials}@"
        match self.db_type:
            case DatabaseType.POSTGRESQL:
                return f"postgresql://{credentials}{self.host}:{self.port}/{self.database}"
            case DatabaseType.MYSQL:
                return f"mysql://{credentials}{self.host}:{self.port}/{self.database}"
            case _:
                raise ConfigError(f"Connection string not supported for: {self.db_type}")


__all__ = [
    "DatabaseType",
    "DatabaseConfig",
]
