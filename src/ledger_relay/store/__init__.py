"""Store package: append-only ledger entries in SQLite.

Public surface
--------------
- :func:`init_store`       : create the database and schema.
- :func:`append_entry`     : append one encoded message, returning its serial.
- :func:`bootstrap_genesis`: seed an empty ledger with the genesis block.
- :func:`read_entries`     : raw ``(serial, body)`` pairs for a serial range.
- :func:`read_messages`    : the same range decoded as persisted messages.
- :func:`count_entries`    : number of entries in the ledger.
- :exc:`StoreError` and subclasses: raised on SQLite failure.
"""

from ledger_relay.store.entries import (
    StoredMessage,
    append_entry,
    bootstrap_genesis,
    count_entries,
    init_store,
    persisted_line,
    read_entries,
    read_messages,
)
from ledger_relay.store.errors import (
    StoreError,
    StoreOperationContext,
    StoreOperationError,
    StoreReadError,
    StoreWriteError,
)

__all__ = [
    "StoreError",
    "StoreOperationContext",
    "StoreOperationError",
    "StoreReadError",
    "StoreWriteError",
    "StoredMessage",
    "append_entry",
    "bootstrap_genesis",
    "count_entries",
    "init_store",
    "persisted_line",
    "read_entries",
    "read_messages",
]
