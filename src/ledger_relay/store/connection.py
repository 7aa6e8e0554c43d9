"""SQLite connections for the entry log.

The log needs no explicit locking.  Every write is one statement: an append
computes its serial with ``MAX(serial) + 1`` inside the INSERT itself, and the
genesis bootstrap is a conditional INSERT.  SQLite's database write lock
serializes those statements, so two writers can never claim one serial.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

#: Milliseconds a writer waits for the database lock held by another append.
BUSY_TIMEOUT_MS = 5000


def get_db_path() -> Path:
    """Return ``config.database.absolute_path``, read on every call."""
    from ledger_relay.config import config

    return config.database.absolute_path


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    # Concurrent POSTs queue on the write lock instead of failing with
    # "database is locked".
    connection.execute(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS}")
    return connection


def get_connection() -> sqlite3.Connection:
    return configure_connection(sqlite3.connect(str(get_db_path())))


@contextmanager
def connection_scope(*, write: bool = False) -> Iterator[sqlite3.Connection]:
    """Open a connection for one store operation and always close it.

    Args:
        write: Commit when the block finishes, roll back if it raises.
            Reads leave this False and never hold the write lock.
    """
    connection = get_connection()
    try:
        yield connection
        if write:
            connection.commit()
    except Exception:
        if write:
            try:
                connection.rollback()
            except sqlite3.Error:
                # Re-raise the error from the block, not the rollback failure.
                pass
        raise
    finally:
        connection.close()
