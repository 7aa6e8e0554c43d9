"""Transaction codec, persisted and new forms.

Layouts (colon-delimited, moves use commas internally)::

    <serial>:transaction:<unique_string>:<sig>:<sender>:<move>:<move>...
    transaction:<unique_string>:<sig>:<sender>:<move>:<move>...

Fields are checked strictly left to right and the first failure is the one
reported, so a short input is always a structural error and a bad
``unique_string`` is reported even when ``sig`` is also bad.
"""

from __future__ import annotations

from dataclasses import dataclass

from ledger_relay.messages.errors import CodecError, DecodeResult
from ledger_relay.messages.fields import (
    check_key,
    check_signature,
    check_tag,
    check_unique_string,
    parse_serial,
)
from ledger_relay.messages.move import Move

FIELD_SEPARATOR = ":"
TRANSACTION_TAG = "transaction"


@dataclass(frozen=True)
class NewTransaction:
    """A client-submitted transaction that has not been given a serial yet."""

    unique_string: str
    sig: str
    sender: str
    moves: tuple[Move, ...] = ()

    def encode(self) -> str:
        return FIELD_SEPARATOR.join(
            [TRANSACTION_TAG, self.unique_string, self.sig, self.sender]
            + [move.encode() for move in self.moves]
        )

    @classmethod
    def decode(cls, text: str) -> DecodeResult[NewTransaction]:
        parts = text.split(FIELD_SEPARATOR)
        if len(parts) < 4:
            return DecodeResult.failure(
                CodecError.structural("Transaction has less than four parts")
            )
        if error := check_tag(parts[0], TRANSACTION_TAG, "First"):
            return DecodeResult.failure(error)
        return _decode_body(parts[1:])


@dataclass(frozen=True)
class Transaction:
    """A transaction as stored in the ledger, carrying its serial."""

    serial: int
    unique_string: str
    sig: str
    sender: str
    moves: tuple[Move, ...] = ()

    def encode(self) -> str:
        return FIELD_SEPARATOR.join(
            [str(self.serial), TRANSACTION_TAG, self.unique_string, self.sig, self.sender]
            + [move.encode() for move in self.moves]
        )

    @classmethod
    def decode(cls, text: str) -> DecodeResult[Transaction]:
        parts = text.split(FIELD_SEPARATOR)
        if len(parts) < 5:
            return DecodeResult.failure(
                CodecError.structural("Transaction has less than five parts")
            )

        serial = parse_serial(parts[0])
        if not serial.ok:
            return DecodeResult.failure(serial.error)
        if error := check_tag(parts[1], TRANSACTION_TAG, "Second"):
            return DecodeResult.failure(error)

        body = _decode_body(parts[2:])
        if not body.ok:
            return DecodeResult.failure(body.error)
        new = body.unwrap()
        return DecodeResult.success(
            cls(
                serial=serial.unwrap(),
                unique_string=new.unique_string,
                sig=new.sig,
                sender=new.sender,
                moves=new.moves,
            )
        )


def _decode_body(parts: list[str]) -> DecodeResult[NewTransaction]:
    """Decode ``unique_string``, ``sig``, ``sender`` and the moves after them."""
    unique_string, sig, sender, *raw_moves = parts

    if error := check_unique_string(unique_string):
        return DecodeResult.failure(error)
    if error := check_signature(sig):
        return DecodeResult.failure(error)
    if error := check_key(sender, "sender", "Sender public key"):
        return DecodeResult.failure(error)

    moves: list[Move] = []
    for raw in raw_moves:
        move = Move.decode(raw)
        if not move.ok:
            return DecodeResult.failure(move.error)
        moves.append(move.unwrap())

    return DecodeResult.success(
        NewTransaction(unique_string=unique_string, sig=sig, sender=sender, moves=tuple(moves))
    )
