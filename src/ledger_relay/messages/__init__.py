"""Message codec for the ledger relay.

Converts between the colon-delimited wire encoding and immutable record
values, validating every field on the way in.  The codec is pure: no I/O,
no shared state, safe to call from any thread.

Public surface
--------------
- :class:`Move`, :class:`Transaction`, :class:`NewTransaction`,
  :class:`Block`, :class:`NewBlock`: records with ``encode()`` and a
  ``decode()`` classmethod.
- :class:`Message`, :class:`NewMessage`: tagged envelopes that dispatch on
  the ``block`` / ``transaction`` tag.
- :func:`genesis_block`: the fixed bootstrap block.
- :class:`DecodeResult`, :class:`CodecError`, :class:`ErrorKind`,
  :exc:`MessageDecodeError`: decode outcomes.

Usage example
-------------
::

    from ledger_relay.messages import NewMessage

    result = NewMessage.decode(body)
    if not result.ok:
        return f"Error: {result.error}"
    canonical = result.unwrap().encode()
"""

from ledger_relay.messages.block import Block, NewBlock
from ledger_relay.messages.envelope import Message, MessageKind, NewMessage
from ledger_relay.messages.errors import CodecError, DecodeResult, ErrorKind, MessageDecodeError
from ledger_relay.messages.genesis import genesis_block
from ledger_relay.messages.move import Move
from ledger_relay.messages.transaction import NewTransaction, Transaction

__all__ = [
    "Block",
    "CodecError",
    "DecodeResult",
    "ErrorKind",
    "Message",
    "MessageDecodeError",
    "MessageKind",
    "Move",
    "NewBlock",
    "NewMessage",
    "NewTransaction",
    "Transaction",
    "genesis_block",
]
