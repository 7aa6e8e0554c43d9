"""Field-level validation shared by every record codec.

Checks return ``None`` when the field is acceptable and a
:class:`~ledger_relay.messages.errors.CodecError` otherwise.  Parsers return
a :class:`~ledger_relay.messages.errors.DecodeResult` holding the parsed
number.

Number grammar
--------------
Floats accept an optional sign, decimal digits with an optional fraction
and exponent, and the words ``inf``, ``infinity`` and ``nan`` in any case.
Python's ``float()`` is more permissive (surrounding whitespace, digit
group underscores), so input is matched against :data:`_FLOAT_RE` first.
Serials are unsigned 64-bit integers with an optional leading ``+``.
"""

from __future__ import annotations

import base64
import binascii
import math
import re
from decimal import Decimal

from ledger_relay.messages.errors import CodecError, DecodeResult

#: Encoded length of an account public key (sender, recipient, miner).
KEY_LENGTH = 116

#: Encoded length of a transaction signature.
SIGNATURE_LENGTH = 88

MAX_SERIAL = 2**64 - 1

_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)
#: A 64-bit serial has at most 20 digits; longer input is rejected before int().
_SERIAL_RE = re.compile(r"\+?[0-9]{1,20}")


def is_base64(value: str) -> bool:
    """Return True if ``value`` is strict standard-alphabet base64.

    Padding must be canonical, so the length is always a multiple of four.  A
    key one character short or long (115 or 117) fails here, not at the
    length check.
    """
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def check_key(value: str, field: str, label: str) -> CodecError | None:
    """Validate an account key: base64 with exactly ``KEY_LENGTH`` characters."""
    if not is_base64(value):
        return CodecError.invalid_field(field, f"{label} ({value}) is not base64", value)
    if len(value) != KEY_LENGTH:
        return CodecError.invalid_field(field, f"{label} ({value}) is an invalid key", value)
    return None


def check_signature(value: str) -> CodecError | None:
    if not is_base64(value):
        return CodecError.invalid_field("sig", "Signature is not base64", value)
    if len(value) != SIGNATURE_LENGTH:
        return CodecError.invalid_field("sig", "Signature has an invalid length", value)
    return None


def check_unique_string(value: str) -> CodecError | None:
    if not is_base64(value):
        return CodecError.invalid_field("unique_string", "Unique string is not base64", value)
    if not value:
        return CodecError.invalid_field("unique_string", "Unique string is too short", value)
    return None


def check_tag(value: str, expected: str, position: str) -> CodecError | None:
    """Require the literal record tag at a fixed position."""
    if value != expected:
        return CodecError.invalid_field("kind", f"{position} part is not {expected}", value)
    return None


def parse_serial(text: str) -> DecodeResult[int]:
    if _SERIAL_RE.fullmatch(text) is None or int(text) > MAX_SERIAL:
        return DecodeResult.failure(
            CodecError.invalid_field("serial", "Serial is not a number", text)
        )
    return DecodeResult.success(int(text))


def parse_float(text: str, field: str, label: str) -> DecodeResult[float]:
    if _FLOAT_RE.fullmatch(text) is None:
        return DecodeResult.failure(
            CodecError.invalid_field(field, f"{label} is not a number", text)
        )
    return DecodeResult.success(float(text))


def format_float(value: float) -> str:
    """Render a float in plain positional notation.

    Uses the shortest digits that round-trip, never an exponent, and drops a
    fractional part of zero: ``1337.0`` renders as ``1337`` and ``1e-7`` as
    ``0.0000001``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
