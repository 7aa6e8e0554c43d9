"""Tests for the shared field validators and number helpers."""

import math
import sys

import pytest

from ledger_relay.messages.errors import ErrorKind
from ledger_relay.messages.fields import (
    MAX_SERIAL,
    check_key,
    check_signature,
    check_unique_string,
    format_float,
    is_base64,
    parse_float,
    parse_serial,
)
from tests.constants import SENDER, SIG


@pytest.mark.unit
class TestBase64:
    def test_accepts_padded_and_unpadded_quanta(self):
        assert is_base64("Zm9v")
        assert is_base64("Zm8=")
        assert is_base64("")

    @pytest.mark.parametrize("value", ["not-base64!!", "Zm9", "Zm9v YQ==", "Zm:v"])
    def test_rejects_invalid(self, value):
        assert not is_base64(value)


@pytest.mark.unit
class TestKeyCheck:
    def test_exact_length_passes(self):
        assert check_key(SENDER, "sender", "Sender public key") is None

    @pytest.mark.parametrize("length", [112, 115, 117, 120])
    def test_wrong_length_fails(self, length):
        error = check_key("S" * length, "sender", "Sender public key")

        assert error is not None
        assert error.kind is ErrorKind.INVALID_FIELD
        assert error.field == "sender"

    @pytest.mark.parametrize("length", [115, 117])
    def test_off_by_one_key_fails_the_base64_check(self, length):
        error = check_key("S" * length, "sender", "Sender public key")
        assert error.message.endswith("is not base64")

    def test_valid_base64_wrong_length_reports_invalid_key(self):
        error = check_key("S" * 120, "sender", "Sender public key")
        assert "is an invalid key" in error.message
        assert error.value == "S" * 120

    def test_non_base64_reports_offending_value(self):
        error = check_key("?" * 116, "from", "Recipient public key")
        assert error.message == f"Recipient public key ({'?' * 116}) is not base64"


@pytest.mark.unit
def test_signature_length():
    assert check_signature(SIG) is None
    assert check_signature(SIG + "QQQQ").message == "Signature has an invalid length"
    assert check_signature("!" * 88).message == "Signature is not base64"


@pytest.mark.unit
def test_unique_string_must_be_non_empty_base64():
    assert check_unique_string("Zm9v") is None
    assert check_unique_string("").message == "Unique string is too short"
    assert check_unique_string("@@").message == "Unique string is not base64"


@pytest.mark.unit
class TestParseSerial:
    @pytest.mark.parametrize(
        "text, expected", [("0", 0), ("42", 42), ("+7", 7), (str(MAX_SERIAL), MAX_SERIAL)]
    )
    def test_accepts_unsigned(self, text, expected):
        assert parse_serial(text).unwrap() == expected

    @pytest.mark.parametrize(
        "text", ["", "-1", "1.0", "x", " 1", str(MAX_SERIAL + 1), "1_0", "9" * 5000]
    )
    def test_rejects(self, text):
        result = parse_serial(text)
        assert not result.ok
        assert result.error.field == "serial"
        assert result.error.message == "Serial is not a number"


@pytest.mark.unit
class TestParseFloat:
    @pytest.mark.parametrize(
        "text, expected",
        [("1", 1.0), ("1.", 1.0), (".5", 0.5), ("-3e2", -300.0), ("2.5E-3", 0.0025), ("+4", 4.0)],
    )
    def test_accepts_decimal_forms(self, text, expected):
        assert parse_float(text, "nonce", "Nonce").unwrap() == expected

    def test_accepts_special_words(self):
        assert parse_float("inf", "nonce", "Nonce").unwrap() == math.inf
        assert parse_float("-Infinity", "nonce", "Nonce").unwrap() == -math.inf
        assert math.isnan(parse_float("NaN", "nonce", "Nonce").unwrap())

    @pytest.mark.parametrize("text", ["", " 1", "1 ", "1_000", "0x10", "1e", "e5", ".", "abc"])
    def test_rejects_non_numbers(self, text):
        result = parse_float(text, "nonce", "Nonce")
        assert not result.ok
        assert result.error.message == "Nonce is not a number"


@pytest.mark.unit
class TestFormatFloat:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (1337.0, "1337"),
            (0.5, "0.5"),
            (2.5, "2.5"),
            (1e-7, "0.0000001"),
            (1e22, "10000000000000000000000"),
            (-3.0, "-3"),
            (math.inf, "inf"),
            (-math.inf, "-inf"),
            (math.nan, "NaN"),
        ],
    )
    def test_plain_positional_notation(self, value, expected):
        assert format_float(value) == expected

    def test_max_float_has_no_exponent(self):
        text = format_float(sys.float_info.max)

        assert text.startswith("17976931348623157")
        assert len(text) == 309
        assert float(text) == sys.float_info.max

    @pytest.mark.parametrize("value", [0.1, 1 / 3, 123456.789, 1e-300, 6.02214076e23])
    def test_round_trips_through_parse(self, value):
        assert parse_float(format_float(value), "amount", "Amount").unwrap() == value
