"""Error values and the decode result type for the message codec.

Malformed input is an ordinary case for the codec, so decoders never raise
on it.  Every decode returns a :class:`DecodeResult` that carries either a
fully valid record or the *first* :class:`CodecError` found while scanning
fields left to right.

Callers branch on :attr:`CodecError.kind`, never on the message text.  The
message is meant to be shown verbatim to whoever submitted the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Category of a codec failure."""

    #: Wrong number of colon- or comma-delimited parts.
    STRUCTURAL = "StructuralError"
    #: Tag field is neither ``block`` nor ``transaction``.
    UNRECOGNIZED_KIND = "UnrecognizedKind"
    #: A field failed its own rule (base64, length, number range).
    INVALID_FIELD = "InvalidField"


@dataclass(frozen=True)
class CodecError:
    """A single validation failure.

    Attributes:
        kind:    Failure category, see :class:`ErrorKind`.
        message: Human-readable cause, safe to display to a client.
        field:   Name of the offending field for ``INVALID_FIELD`` errors.
        value:   The raw offending value, when there is one.
    """

    kind: ErrorKind
    message: str
    field: str | None = None
    value: str | None = None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def structural(cls, message: str) -> CodecError:
        return cls(kind=ErrorKind.STRUCTURAL, message=message)

    @classmethod
    def unrecognized_kind(cls, tag: str) -> CodecError:
        return cls(
            kind=ErrorKind.UNRECOGNIZED_KIND,
            message=f"Message is not block or transaction (got {tag!r})",
            value=tag,
        )

    @classmethod
    def invalid_field(cls, field: str, message: str, value: str | None = None) -> CodecError:
        return cls(kind=ErrorKind.INVALID_FIELD, message=message, field=field, value=value)


class MessageDecodeError(ValueError):
    """Raised by :meth:`DecodeResult.unwrap` on a failed decode."""

    def __init__(self, error: CodecError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of a decode: exactly one of ``value`` or ``error`` is set."""

    value: T | None = None
    error: CodecError | None = None

    @classmethod
    def success(cls, value: T) -> DecodeResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: CodecError) -> DecodeResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the decoded value or raise :exc:`MessageDecodeError`."""
        if self.error is not None:
            raise MessageDecodeError(self.error)
        return self.value  # type: ignore[return-value]
