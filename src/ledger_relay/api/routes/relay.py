"""Submission and read endpoints.

Routes
------
- ``POST /``                 submit one message; the body is its wire encoding.
- ``GET /``                  rejected: an offset is required.
- ``GET /{offset}``          raw entries ``offset .. offset + read_window``,
                             one ``"<serial>:<entry>"`` line each.
- ``GET /messages/{offset}`` the same window decoded as persisted messages.

Every submission is decoded as a :class:`~ledger_relay.messages.NewMessage`
and the *re-encoded* canonical form is what gets appended, so the ledger
never holds a string the codec would not produce itself.
"""

import asyncio
import dataclasses
import logging
import math
import re
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

from ledger_relay.api.models import CodecErrorView, EntryView, MessagesResponse
from ledger_relay.messages import NewMessage
from ledger_relay.messages.fields import format_float
from ledger_relay.store import (
    StoreError,
    StoredMessage,
    append_entry,
    persisted_line,
    read_entries,
    read_messages,
)

logger = logging.getLogger(__name__)

_OFFSET_RE = re.compile(r"[+-]?[0-9]{1,19}")

#: Offsets and window ends are signed 64-bit, the SQLite INTEGER range.
MAX_OFFSET = 2**63 - 1
MIN_OFFSET = -(2**63)


def _error(message: str, status_code: int = 400) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


def _parse_offset(raw: str) -> int | PlainTextResponse:
    """Parse a path offset, returning the error response on failure."""
    if _OFFSET_RE.fullmatch(raw) is None:
        return _error("Error: Failed to parse id")
    offset = int(raw)
    if not MIN_OFFSET <= offset <= MAX_OFFSET:
        return _error("Error: Failed to parse id")
    if offset < 0:
        return _error("Error: Id must be positive")
    return offset


def _window_end(offset: int, window: int) -> int:
    return min(offset + window, MAX_OFFSET)


def _jsonable(value: Any) -> Any:
    """Make a record dict JSON-safe: non-finite floats become their text form."""
    if isinstance(value, float) and not math.isfinite(value):
        return format_float(value)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _entry_view(stored: StoredMessage) -> EntryView:
    result = stored.result
    if not result.ok:
        error = result.error
        return EntryView(
            serial=stored.serial,
            raw=stored.raw,
            error=CodecErrorView(
                kind=error.kind.value, message=error.message, field=error.field, value=error.value
            ),
        )
    message = result.unwrap()
    return EntryView(
        serial=stored.serial,
        raw=stored.raw,
        kind=message.kind.value,
        record=_jsonable(dataclasses.asdict(message.record)),
    )


def router() -> APIRouter:
    """Build the relay router; settings are read from config on each request."""
    api = APIRouter()

    @api.post("/")
    async def submit(request: Request):
        """Validate one message and append its canonical encoding."""
        from ledger_relay.config import config

        body = await request.body()
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError:
            return _error("Failed to parse body")

        if "\n" in text:
            return _error("Error: Message contains newlines")

        result = NewMessage.decode(text)
        if not result.ok:
            logger.debug(
                "relay: rejected submission (%s): %s", result.error.kind.value, result.error
            )
            return _error(f"Error: {result.error}")
        canonical = result.unwrap().encode()

        try:
            serial = append_entry(canonical)
        except StoreError:
            logger.error("relay: failed to append submission", exc_info=True)
            return _error("Failed to push message to the ledger", status_code=500)
        logger.debug("relay: accepted %s as entry %s", result.unwrap().kind.value, serial)

        delay = config.rate_limit.post_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)

        return Response(status_code=200)

    @api.get("/")
    async def missing_offset():
        """Reject reads without an offset."""
        return _error("Error: Didn't provide an id")

    @api.get("/messages/{offset}", response_model=MessagesResponse)
    async def read_decoded(offset: str):
        """Return the read window decoded through the persisted message codec."""
        from ledger_relay.config import config

        parsed = _parse_offset(offset)
        if isinstance(parsed, PlainTextResponse):
            return parsed

        stored = read_messages(parsed, _window_end(parsed, config.relay.read_window))
        return MessagesResponse(offset=parsed, entries=[_entry_view(item) for item in stored])

    @api.get("/{offset}")
    async def read_raw(offset: str):
        """Return entries from ``offset`` as ``"<serial>:<entry>"`` lines."""
        from ledger_relay.config import config

        parsed = _parse_offset(offset)
        if isinstance(parsed, PlainTextResponse):
            return parsed

        rows = read_entries(parsed, _window_end(parsed, config.relay.read_window))
        lines = [persisted_line(serial, body) + "\n" for serial, body in rows]
        return PlainTextResponse("".join(lines))

    return api
