"""
Structured error types for sqlbridge.

Every failure raised inside the dialect, adapter, introspection and
statement layers is a :class:`SqlBridgeError` subclass.  The dispatcher
catches them at the operation boundary and turns them into the uniform
error envelope, so a raw driver exception object never reaches a transport.

Manifesto:
    - **Typed hierarchy:** one class per failure kind the caller can act on
    - **Message text only:** driver exceptions are chained as ``cause`` but
      only their message crosses the operation boundary
    - **Rich context:** errors carry the table/column/engine they concern

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────┐
        │                     SqlBridgeError                         │
        │             (category, context, cause)                     │
        ├───────────────────────────────────────────────────────────┤
        │  ValidationError      UnsafeQueryError     NotFoundError   │
        │  (VALIDATION)         (SAFETY)             (NOT_FOUND)     │
        │                            │                               │
        │                  ConfirmationRequiredError                 │
        │                                                            │
        │  ExecutionError       ConnectivityError    ConfigError     │
        │  (DATABASE)           (NETWORK)            (CONFIG)        │
        │                            │                    │          │
        │                     PoolClosedError     MissingConfigError │
        │                                         InvalidConfigError │
        └───────────────────────────────────────────────────────────┘

Examples:
    >>> error = ExecutionError("duplicate key value", cause=RuntimeError("x"))
    >>> error.with_context(table="customers").to_dict()["context"]
    {'table': 'customers'}

Tags:
    error-handling, exception-hierarchy, sqlbridge

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories used for envelope codes and log routing."""

    VALIDATION = "VALIDATION"     # Missing / malformed arguments
    SAFETY = "SAFETY"             # Read-only guard, confirmation phrases
    NOT_FOUND = "NOT_FOUND"       # Table or column absent
    DATABASE = "DATABASE"         # Driver-level statement failure
    NETWORK = "NETWORK"           # Pool creation, liveness probe
    CONFIG = "CONFIG"             # Startup configuration
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to an error."""

    operation: str | None = None
    table: str | None = None
    column: str | None = None
    engine: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "table", "column", "engine"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SqlBridgeError(Exception):
    """
    Base exception for all sqlbridge errors.

    Subclasses set ``default_category`` so call sites only pass a message
    and, when wrapping a driver exception, the ``cause``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SqlBridgeError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ExecutionError("Failed").with_context(table="orders")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CALLER ERRORS (operation not attempted)
# =============================================================================


class ValidationError(SqlBridgeError):
    """Missing or malformed operation arguments."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class UnsafeQueryError(SqlBridgeError):
    """Free-form query text rejected by the read-only guard."""

    default_category = ErrorCategory.SAFETY


class ConfirmationRequiredError(UnsafeQueryError):
    """Destructive operation attempted without the exact confirmation phrase."""

    def __init__(self, expected_phrase: str, message: str | None = None, **kwargs: Any):
        self.expected_phrase = expected_phrase
        super().__init__(
            message or f'Confirmation required. Supply exactly: "{expected_phrase}"',
            **kwargs,
        )


class NotFoundError(SqlBridgeError):
    """Table or column absent where it was expected."""

    default_category = ErrorCategory.NOT_FOUND


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class ExecutionError(SqlBridgeError):
    """Driver-level statement failure (constraint violation, bad type, lost link)."""

    default_category = ErrorCategory.DATABASE


class ConnectivityError(SqlBridgeError):
    """No connection could be established or the liveness probe failed."""

    default_category = ErrorCategory.NETWORK


class PoolClosedError(ConnectivityError):
    """Statement submitted after the pool was shut down."""

    def __init__(self, message: str = "Connection pool is closed", **kwargs: Any):
        super().__init__(message, **kwargs)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(SqlBridgeError):
    """Configuration error. Fatal at startup."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SqlBridgeError",
    "ValidationError",
    "UnsafeQueryError",
    "ConfirmationRequiredError",
    "NotFoundError",
    "ExecutionError",
    "ConnectivityError",
    "PoolClosedError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
]
