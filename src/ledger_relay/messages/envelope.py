"""Tagged envelopes over the record codecs.

:class:`Message` wraps a persisted :class:`Block` or :class:`Transaction`;
:class:`NewMessage` wraps a :class:`NewBlock` or :class:`NewTransaction`.
The tag is never a separate field: it is read from the encoding itself, at
part 1 for persisted messages (part 0 is the serial) and at part 0 for new
ones.  A persisted line fed to ``NewMessage.decode`` (or the reverse) is
therefore rejected as an unrecognized kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ledger_relay.messages.block import BLOCK_TAG, Block, NewBlock
from ledger_relay.messages.errors import CodecError, DecodeResult
from ledger_relay.messages.transaction import (
    FIELD_SEPARATOR,
    TRANSACTION_TAG,
    NewTransaction,
    Transaction,
)


class MessageKind(Enum):
    BLOCK = BLOCK_TAG
    TRANSACTION = TRANSACTION_TAG


@dataclass(frozen=True)
class Message:
    """A persisted record: ``kind`` says which of ``Block``/``Transaction`` it holds."""

    kind: MessageKind
    record: Block | Transaction

    @classmethod
    def block(cls, block: Block) -> Message:
        return cls(kind=MessageKind.BLOCK, record=block)

    @classmethod
    def transaction(cls, transaction: Transaction) -> Message:
        return cls(kind=MessageKind.TRANSACTION, record=transaction)

    @property
    def serial(self) -> int:
        return self.record.serial

    def encode(self) -> str:
        return self.record.encode()

    @classmethod
    def decode(cls, text: str) -> DecodeResult[Message]:
        tag = _read_tag(text, position=1)
        if not tag.ok:
            return DecodeResult.failure(tag.error)

        match tag.unwrap():
            case MessageKind.BLOCK:
                block = Block.decode(text)
                if not block.ok:
                    return DecodeResult.failure(block.error)
                return DecodeResult.success(cls.block(block.unwrap()))
            case MessageKind.TRANSACTION:
                transaction = Transaction.decode(text)
                if not transaction.ok:
                    return DecodeResult.failure(transaction.error)
                return DecodeResult.success(cls.transaction(transaction.unwrap()))


@dataclass(frozen=True)
class NewMessage:
    """A client submission: ``kind`` says which of ``NewBlock``/``NewTransaction`` it holds."""

    kind: MessageKind
    record: NewBlock | NewTransaction

    @classmethod
    def block(cls, block: NewBlock) -> NewMessage:
        return cls(kind=MessageKind.BLOCK, record=block)

    @classmethod
    def transaction(cls, transaction: NewTransaction) -> NewMessage:
        return cls(kind=MessageKind.TRANSACTION, record=transaction)

    def encode(self) -> str:
        return self.record.encode()

    @classmethod
    def decode(cls, text: str) -> DecodeResult[NewMessage]:
        tag = _read_tag(text, position=0)
        if not tag.ok:
            return DecodeResult.failure(tag.error)

        match tag.unwrap():
            case MessageKind.BLOCK:
                block = NewBlock.decode(text)
                if not block.ok:
                    return DecodeResult.failure(block.error)
                return DecodeResult.success(cls.block(block.unwrap()))
            case MessageKind.TRANSACTION:
                transaction = NewTransaction.decode(text)
                if not transaction.ok:
                    return DecodeResult.failure(transaction.error)
                return DecodeResult.success(cls.transaction(transaction.unwrap()))


def _read_tag(text: str, *, position: int) -> DecodeResult[MessageKind]:
    parts = text.split(FIELD_SEPARATOR)
    if len(parts) < 2:
        return DecodeResult.failure(CodecError.structural("Message has less than two parts"))
    tag = parts[position]
    try:
        return DecodeResult.success(MessageKind(tag))
    except ValueError:
        return DecodeResult.failure(CodecError.unrecognized_kind(tag))
