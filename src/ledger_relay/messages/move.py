"""Move codec: a single transfer instruction, ``<from>,<amount>``."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

from ledger_relay.messages.errors import CodecError, DecodeResult
from ledger_relay.messages.fields import check_key, format_float, parse_float

MOVE_SEPARATOR = ","


@dataclass(frozen=True)
class Move:
    """Transfer of ``amount`` to the account ``from_``.

    ``from_`` is the wire field ``from`` (the recipient key).
    """

    from_: str
    amount: float

    def encode(self) -> str:
        # +inf is written as the largest finite float, so a decoded infinite
        # amount comes back as sys.float_info.max.
        amount = sys.float_info.max if self.amount == math.inf else self.amount
        return f"{self.from_}{MOVE_SEPARATOR}{format_float(amount)}"

    @classmethod
    def decode(cls, text: str) -> DecodeResult[Move]:
        parts = text.split(MOVE_SEPARATOR)
        if len(parts) != 2:
            return DecodeResult.failure(
                CodecError.structural(
                    f"Move must have exactly two comma-separated parts, found {len(parts)}"
                )
            )
        from_, raw_amount = parts

        if error := check_key(from_, "from", "Recipient public key"):
            return DecodeResult.failure(error)

        parsed = parse_float(raw_amount, "amount", "Amount")
        if not parsed.ok:
            return DecodeResult.failure(parsed.error)
        amount = parsed.unwrap()

        # NaN fails this comparison too.
        if not amount > 0:
            return DecodeResult.failure(
                CodecError.invalid_field("amount", "Amount must be positive", raw_amount)
            )
        # Only the exact infinity is refused; large finite values pass.
        if amount == math.inf:
            return DecodeResult.failure(
                CodecError.invalid_field("amount", "Amount is too big", raw_amount)
            )

        return DecodeResult.success(cls(from_=from_, amount=amount))
