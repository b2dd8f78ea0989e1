from datetime import timezone
from decimal import Decimal

import pytest

from mtgox.errors import ParseError
from mtgox.models.parsing import (
    format_decimal,
    parse_decimal,
    parse_timestamp,
    parse_type_code,
)


def test_parse_decimal_accepts_strings_ints_and_floats():
    assert parse_decimal("7.95", "price") == Decimal("7.95")
    assert parse_decimal(3, "amount") == Decimal(3)
    # floats go through str(), so no binary noise
    assert parse_decimal(0.1, "price") == Decimal("0.1")
    assert parse_decimal(Decimal("2.5"), "price") == Decimal("2.5")


@pytest.mark.parametrize(
    "bad", ["abc", "", "  ", None, True, "NaN", "Infinity", float("nan"), [1], "-1"]
)
def test_parse_decimal_never_defaults(bad):
    with pytest.raises(ParseError) as ei:
        parse_decimal(bad, "price")
    assert ei.value.field == "price"


def test_parse_decimal_signed_allows_negative():
    assert parse_decimal("-1.5", "delta", signed=True) == Decimal("-1.5")


def test_parse_timestamp_is_utc():
    ts = parse_timestamp("1300000000")
    assert ts.tzinfo == timezone.utc
    assert ts.timestamp() == 1300000000

    with pytest.raises(ParseError):
        parse_timestamp("yesterday")


def test_parse_type_code():
    assert parse_type_code(1) == 1
    assert parse_type_code("2") == 2
    assert parse_type_code(True) is None
    assert parse_type_code("buy") is None
    assert parse_type_code(None) is None


def test_format_decimal_is_plain():
    assert format_decimal(Decimal("1.0")) == "1"
    assert format_decimal(Decimal("1E+2")) == "100"
    assert format_decimal("0.00010000") == "0.0001"
    assert format_decimal(7.9) == "7.9"


def test_type_code_rejects_non_ascii_digits():
    assert parse_type_code("²") is None
    assert parse_type_code(" 1 ") == 1


@pytest.mark.parametrize("bad", ["NaN", "Infinity", "-1", "abc", "", None, float("inf")])
def test_format_decimal_refuses_what_parse_decimal_refuses(bad):
    with pytest.raises(ParseError) as ei:
        format_decimal(bad, "amount")
    assert ei.value.field == "amount"
