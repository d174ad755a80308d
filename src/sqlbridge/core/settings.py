"""Environment-driven settings for sqlbridge.

The engine selector, host, port, credentials and database name are read
from ``DB_*`` environment variables (or a ``.env`` file).  ``DB_PORT`` has
no default: a server started without it refuses to come up.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not on first query
    - **Environment-driven:** Reads from env vars and .env files
    - **Typed failures:** Problems surface as ``MissingConfigError`` /
      ``InvalidConfigError`` rather than raw pydantic errors

Examples:
    >>> import os
    >>> os.environ.update(DB_TYPE="postgres", DB_PORT="5432")
    >>> settings = load_settings()
    >>> settings.to_config().db_type.value
    'postgresql'

Tags:
    settings, configuration, pydantic, environment, sqlbridge
"""

from __future__ import annotations

import pydantic
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sqlbridge.core.adapters.types import DatabaseConfig, DatabaseType
from sqlbridge.core.errors import InvalidConfigError, MissingConfigError


class DatabaseSettings(BaseSettings):
    """Process settings.

    Fields
    ──────
    db_type            : Engine selector (mysql, mariadb, postgresql, postgres, pg)
    db_host            : Server host
    db_port            : Server port (required)
    db_user            : Login role
    db_password        : Login password
    db_database        : Database / catalog name
    db_pool_min_size   : Connections opened eagerly by the pool
    db_pool_max_size   : Upper bound on pooled connections
    db_connect_timeout : Seconds to wait for a new connection
    log_level          : Structlog log level
    log_json           : JSON log lines (None = auto-detect)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Connection ───────────────────────────────────────────────
    db_type: str | None = None
    db_host: str = "localhost"
    db_port: int | None = None
    db_user: str | None = None
    db_password: str | None = Field(default=None, repr=False)
    db_database: str = ""

    # ── Pool ─────────────────────────────────────────────────────
    db_pool_min_size: int = Field(default=1, ge=0)
    db_pool_max_size: int = Field(default=10, ge=1)
    db_connect_timeout: float = Field(default=10.0, gt=0)

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    def to_config(self) -> DatabaseConfig:
        """Build the adapter-level config, validating required fields."""
        if not self.db_type:
            raise MissingConfigError("DB_TYPE")
        if self.db_port is None:
            raise MissingConfigError("DB_PORT")
        try:
            db_type = DatabaseType.from_name(self.db_type)
        except ValueError as exc:
            raise InvalidConfigError("DB_TYPE", self.db_type) from exc
        if self.db_pool_min_size > self.db_pool_max_size:
            raise InvalidConfigError(
                "DB_POOL_MIN_SIZE",
                self.db_pool_min_size,
                f"DB_POOL_MIN_SIZE ({self.db_pool_min_size}) exceeds "
                f"DB_POOL_MAX_SIZE ({self.db_pool_max_size})",
            )
        return DatabaseConfig(
            db_type=db_type,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
            username=self.db_user,
            password=self.db_password,
            pool_min_size=self.db_pool_min_size,
            pool_max_size=self.db_pool_max_size,
            connect_timeout=self.db_connect_timeout,
        )


def load_settings(**overrides) -> DatabaseSettings:
    """Read settings from the environment, mapping failures onto ``ConfigError``."""
    try:
        return DatabaseSettings(**overrides)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        key = str(first["loc"][0]).upper() if first.get("loc") else "settings"
        raise InvalidConfigError(key, first.get("input"), f"Invalid configuration for {key}: {first['msg']}") from exc


__all__ = ["DatabaseSettings", "load_settings"]
