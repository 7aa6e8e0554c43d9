"""Block codec, persisted and new forms.

Layouts::

    <serial>:block:<nonce>:<miner_account>:<tx>:<tx>...
    block:<nonce>:<miner_account>:<tx>:<tx>...

Each ``<tx>`` is a persisted :class:`Transaction` encoding with every ``:``
replaced by ``;`` so that splitting the block on ``:`` leaves transactions
whole.  Decoding reverses the substitution before handing the part to
:meth:`Transaction.decode`.
"""

from __future__ import annotations

from dataclasses import dataclass

from ledger_relay.messages.errors import CodecError, DecodeResult
from ledger_relay.messages.fields import (
    check_key,
    check_tag,
    format_float,
    parse_float,
    parse_serial,
)
from ledger_relay.messages.transaction import FIELD_SEPARATOR, Transaction

BLOCK_TAG = "block"
NESTED_SEPARATOR = ";"


@dataclass(frozen=True)
class NewBlock:
    """A block submitted by a miner, not yet given a serial."""

    nonce: float
    miner_account: str
    transactions: tuple[Transaction, ...] = ()

    def encode(self) -> str:
        return FIELD_SEPARATOR.join(
            [BLOCK_TAG, format_float(self.nonce), self.miner_account]
            + [_nest(tx) for tx in self.transactions]
        )

    @classmethod
    def decode(cls, text: str) -> DecodeResult[NewBlock]:
        parts = text.split(FIELD_SEPARATOR)
        if len(parts) < 3:
            return DecodeResult.failure(CodecError.structural("Block has less than three parts"))
        if error := check_tag(parts[0], BLOCK_TAG, "First"):
            return DecodeResult.failure(error)
        return _decode_body(parts[1:])


@dataclass(frozen=True)
class Block:
    """A block as stored in the ledger, carrying its serial."""

    serial: int
    nonce: float
    miner_account: str
    transactions: tuple[Transaction, ...] = ()

    def encode(self) -> str:
        return FIELD_SEPARATOR.join(
            [str(self.serial), BLOCK_TAG, format_float(self.nonce), self.miner_account]
            + [_nest(tx) for tx in self.transactions]
        )

    @classmethod
    def decode(cls, text: str) -> DecodeResult[Block]:
        parts = text.split(FIELD_SEPARATOR)
        if len(parts) < 4:
            return DecodeResult.failure(CodecError.structural("Block has less than four parts"))

        serial = parse_serial(parts[0])
        if not serial.ok:
            return DecodeResult.failure(serial.error)
        if error := check_tag(parts[1], BLOCK_TAG, "Second"):
            return DecodeResult.failure(error)

        body = _decode_body(parts[2:])
        if not body.ok:
            return DecodeResult.failure(body.error)
        new = body.unwrap()
        return DecodeResult.success(
            cls(
                serial=serial.unwrap(),
                nonce=new.nonce,
                miner_account=new.miner_account,
                transactions=new.transactions,
            )
        )


def _nest(transaction: Transaction) -> str:
    return transaction.encode().replace(FIELD_SEPARATOR, NESTED_SEPARATOR)


def _decode_body(parts: list[str]) -> DecodeResult[NewBlock]:
    """Decode ``nonce``, ``miner_account`` and the nested transactions."""
    raw_nonce, miner_account, *raw_transactions = parts

    nonce = parse_float(raw_nonce, "nonce", "Nonce")
    if not nonce.ok:
        return DecodeResult.failure(nonce.error)
    if error := check_key(miner_account, "miner_account", "Miner account"):
        return DecodeResult.failure(error)

    transactions: list[Transaction] = []
    for raw in raw_transactions:
        tx = Transaction.decode(raw.replace(NESTED_SEPARATOR, FIELD_SEPARATOR))
        if not tx.ok:
            return DecodeResult.failure(tx.error)
        transactions.append(tx.unwrap())

    return DecodeResult.success(
        NewBlock(
            nonce=nonce.unwrap(),
            miner_account=miner_account,
            transactions=tuple(transactions),
        )
    )
