"""
Pydantic models for the JSON endpoints of the relay.

The submission and raw read endpoints speak plain text (the wire encoding
itself), so only the diagnostic endpoints below have models:
- ``GET /health``             -> :class:`HealthResponse`
- ``GET /messages/{offset}``  -> :class:`MessagesResponse`
"""

from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """
    Liveness check.

    Attributes:
        status: Always "ok" when the process can answer and read the store
        version: Installed package version
        entries: Number of entries currently in the ledger
    """

    status: str
    version: str
    entries: int


class CodecErrorView(BaseModel):
    """
    A decode failure for one stored entry.

    Attributes:
        kind: "StructuralError", "UnrecognizedKind" or "InvalidField"
        message: Human-readable cause
        field: Offending field name for InvalidField errors
        value: Offending raw value, when there is one
    """

    kind: str
    message: str
    field: str | None = None
    value: str | None = None


class EntryView(BaseModel):
    """
    One ledger entry decoded as a persisted message.

    Exactly one of ``record`` and ``error`` is set.

    Attributes:
        serial: Position of the entry in the ledger
        raw: Stored encoding, without the serial prefix
        kind: "block" or "transaction" when the entry decoded
        record: Decoded record fields
        error: Decode failure
    """

    serial: int
    raw: str
    kind: str | None = None
    record: dict[str, Any] | None = None
    error: CodecErrorView | None = None


class MessagesResponse(BaseModel):
    """Decoded window of ledger entries starting at ``offset``."""

    offset: int
    entries: list[EntryView]
