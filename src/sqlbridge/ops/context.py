"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the pooled adapter plus the introspector and
statement builder bound to its dialect, and the caller identity used in logs.
The adapter is owned by whoever built the dispatcher; the context only
borrows it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlbridge.core.adapters.base import DatabaseAdapter
from sqlbridge.core.dialect import Dialect
from sqlbridge.core.schema import SchemaIntrospector
from sqlbridge.core.statements import StatementBuilder


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        adapter: Pooled adapter that executes statements.
        introspector: Catalog reader bound to ``adapter``.
        builder: Statement builder for ``adapter.dialect``.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request: ``"mcp"``, ``"cli"`` or ``"sdk"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    adapter: DatabaseAdapter
    introspector: SchemaIntrospector
    builder: StatementBuilder
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def dialect(self) -> Dialect:
        return self.builder.dialect
