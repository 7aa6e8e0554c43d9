"""Typed exceptions for the ledger store.

SQLite failures are wrapped in this small hierarchy so the HTTP layer can
map them to a 5xx response without catching ``sqlite3.Error`` itself.
Codec failures never appear here; they are values, not exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class StoreOperationContext:
    """Structured operation metadata carried by store exceptions.

    Attributes:
        operation: Stable operation identifier (for example
            ``"store.append_entry"``).
        details: Optional human-readable context for logs and debugging.
    """

    operation: str
    details: str | None = None


class StoreError(RuntimeError):
    """Base exception for ledger store failures."""


class StoreOperationError(StoreError):
    """Base exception for failed store operations.

    Args:
        context: Structured operation metadata.
        cause: Optional underlying exception.
    """

    def __init__(
        self,
        *,
        context: StoreOperationContext,
        cause: Exception | None = None,
    ) -> None:
        message = context.operation
        if context.details:
            message = f"{message}: {context.details}"
        super().__init__(message)
        self.context = context
        self.cause = cause


class StoreReadError(StoreOperationError):
    """Query failure."""


class StoreWriteError(StoreOperationError):
    """Append or schema failure."""
