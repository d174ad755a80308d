"""
Operation layer: the transport-agnostic catalog of database operations.

Modules
-------
context       OperationContext (adapter + introspector + builder)
requests      Pydantic request models, one per operation
result        OperationResult / OperationError envelope, timing helper
guards        Read-only guard, confirmation-phrase guard
codecs        CSV / JSON parsing and serialisation, table rendering
tables        Table and column operations
constraints   UNIQUE / FOREIGN KEY operations
data          Query, CRUD, insert, import / export operations
dispatcher    Dispatcher + OPERATIONS catalog

Transports (MCP tools, CLI commands) call ``Dispatcher.dispatch(name, args)``
and render the returned envelope; they contain no SQL.
"""

from sqlbridge.ops.dispatcher import OPERATIONS, Dispatcher, OperationSpec
from sqlbridge.ops.result import OperationError, OperationResult

__all__ = [
    "Dispatcher",
    "OPERATIONS",
    "OperationSpec",
    "OperationError",
    "OperationResult",
]
