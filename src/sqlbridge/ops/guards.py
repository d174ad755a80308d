"""
Safety guards applied before any statement is built.

Two guards exist:

- **Read-only guard**: free-form query text must start with ``SELECT``
  (case-insensitive, after leading whitespace) and hold a single statement.
  Anything else is rejected with :class:`UnsafeQueryError` before the
  adapter is touched.
- **Confirmation guard**: destructive structural operations need a literal
  phrase that exactly equals a template interpolated with the target
  names.  The comparison is plain string equality; case, whitespace and
  punctuation must all match.

Both are pure functions so they can be tested without a database.
"""

from __future__ import annotations

import re

from sqlbridge.core.errors import ConfirmationRequiredError, UnsafeQueryError
from sqlbridge.core.logging import get_logger
from sqlbridge.core.statements import MULTIPLE_STATEMENTS, is_single_statement

logger = get_logger(__name__)

READ_ONLY_PATTERN = re.compile(r"^\s*select", re.IGNORECASE)

# ------------------------------------------------------------------ #
# Confirmation phrase templates
# ------------------------------------------------------------------ #

DROP_TABLE = "Confirm deletion of table {table}"
DROP_COLUMN = "Confirm deletion of column {column} from table {table}"
DROP_UNIQUE = "Confirm deletion of constraint {name} from table {table}"
DROP_FOREIGN_KEY = "Confirm deletion of foreign key {name} from table {table}"
CHANGE_COLUMN_TYPE = "Confirm type change for column {column} to {new_type}"
DELETE_ROWS = "Confirm deletion of filtered records in table {table}"


def is_read_only(query: str) -> bool:
    """Whether ``query`` passes the SELECT-prefix check."""
    return isinstance(query, str) and READ_ONLY_PATTERN.match(query) is not None


def require_read_only(query: str) -> None:
    """Raise :class:`UnsafeQueryError` unless ``query`` is a single SELECT."""
    if not is_read_only(query):
        logger.warning("readonly_guard_rejected", query_prefix=str(query)[:40])
        raise UnsafeQueryError("Only SELECT queries are allowed.")
    if not is_single_statement(query):
        logger.warning("readonly_guard_rejected", query_prefix=query[:40], reason="multiple_statements")
        raise UnsafeQueryError(MULTIPLE_STATEMENTS)


def expected_phrase(template: str, **names: str) -> str:
    """Interpolate a confirmation template with the operation's target names."""
    return template.format(**names)


def confirmation_matches(expected: str, supplied: str | None) -> bool:
    """Exact, case- and whitespace-sensitive comparison."""
    return isinstance(supplied, str) and supplied == expected


def require_confirmation(template: str, supplied: str | None, **names: str) -> None:
    """Raise :class:`ConfirmationRequiredError` unless ``supplied`` matches exactly."""
    expected = expected_phrase(template, **names)
    if not confirmation_matches(expected, supplied):
        logger.warning("confirmation_rejected", expected=expected, supplied=supplied or "")
        raise ConfirmationRequiredError(expected)


__all__ = [
    "READ_ONLY_PATTERN",
    "DROP_TABLE",
    "DROP_COLUMN",
    "DROP_UNIQUE",
    "DROP_FOREIGN_KEY",
    "CHANGE_COLUMN_TYPE",
    "DELETE_ROWS",
    "is_read_only",
    "require_read_only",
    "expected_phrase",
    "confirmation_matches",
    "require_confirmation",
]
