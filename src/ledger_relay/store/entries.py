"""Append-only entry log backed by SQLite.

Each row is one ledger entry: the canonical ``NewMessage`` encoding of an
accepted submission.  The row's ``serial`` is its append index, starting at
zero, and is assigned inside the same INSERT statement that stores the body
so concurrent appends can never share a serial.

Entries are stored without their serial.  Prefixing ``"<serial>:"`` to a
stored body yields the persisted ``Message`` encoding, which is how the read
path recovers structured records (:func:`read_messages`).
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass

from ledger_relay.messages import DecodeResult, Message, genesis_block
from ledger_relay.store.connection import connection_scope, get_db_path
from ledger_relay.store.errors import StoreOperationContext, StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS entries (
    serial INTEGER PRIMARY KEY,
    body   TEXT NOT NULL
)
"""


@dataclass(frozen=True)
class StoredMessage:
    """A stored entry together with the outcome of decoding it as a ``Message``."""

    serial: int
    raw: str
    result: DecodeResult[Message]


def persisted_line(serial: int, body: str) -> str:
    """Render an entry the way readers see it: ``"<serial>:<body>"``."""
    return f"{serial}:{body}"


def init_store() -> None:
    """Create the database file, its directory and the entries table."""
    path = get_db_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with connection_scope(write=True) as conn:
            conn.execute(_SCHEMA)
    except (OSError, sqlite3.Error) as exc:
        raise StoreWriteError(
            context=StoreOperationContext("store.init_store", str(path)), cause=exc
        ) from exc
    logger.debug("store: schema ready at %s", path)


def append_entry(body: str) -> int:
    """Append ``body`` at the next index and return that index."""
    try:
        with connection_scope(write=True) as conn:
            cursor = conn.execute(
                "INSERT INTO entries (serial, body) "
                "SELECT COALESCE(MAX(serial) + 1, 0), ? FROM entries",
                (body,),
            )
            serial = cursor.lastrowid
    except sqlite3.Error as exc:
        raise StoreWriteError(
            context=StoreOperationContext("store.append_entry", str(exc)), cause=exc
        ) from exc
    logger.info("store: appended entry %s", serial)
    return serial


def bootstrap_genesis() -> bool:
    """Append the genesis block if and only if the log is empty.

    Returns:
        True when genesis was appended, False when the log already had entries.
    """
    body = genesis_block().encode()
    try:
        with connection_scope(write=True) as conn:
            cursor = conn.execute(
                "INSERT INTO entries (serial, body) "
                "SELECT 0, ? WHERE NOT EXISTS (SELECT 1 FROM entries)",
                (body,),
            )
            appended = cursor.rowcount == 1
    except sqlite3.Error as exc:
        raise StoreWriteError(
            context=StoreOperationContext("store.bootstrap_genesis", str(exc)), cause=exc
        ) from exc
    if appended:
        logger.info("store: empty ledger seeded with genesis block")
    return appended


def read_entries(start: int, stop: int) -> list[tuple[int, str]]:
    """Return ``(serial, body)`` pairs for serials ``start`` to ``stop`` inclusive."""
    try:
        with connection_scope() as conn:
            rows = conn.execute(
                "SELECT serial, body FROM entries WHERE serial BETWEEN ? AND ? ORDER BY serial",
                (start, stop),
            ).fetchall()
    except sqlite3.Error as exc:
        raise StoreReadError(
            context=StoreOperationContext("store.read_entries", str(exc)), cause=exc
        ) from exc
    return [(int(serial), str(body)) for serial, body in rows]


def count_entries() -> int:
    try:
        with connection_scope() as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM entries").fetchone()
    except sqlite3.Error as exc:
        raise StoreReadError(
            context=StoreOperationContext("store.count_entries", str(exc)), cause=exc
        ) from exc
    return int(count)


def read_messages(start: int, stop: int) -> list[StoredMessage]:
    """Read entries ``start`` to ``stop`` and decode each as a persisted ``Message``.

    Entries that fail to decode are still returned, with the failure in
    ``result``, and logged at WARNING.
    """
    messages = []
    for serial, body in read_entries(start, stop):
        result = Message.decode(persisted_line(serial, body))
        if not result.ok:
            logger.warning("store: entry %s does not decode: %s", serial, result.error)
        messages.append(StoredMessage(serial=serial, raw=body, result=result))
    return messages
