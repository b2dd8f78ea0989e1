from decimal import Decimal

import pytest

from mtgox.errors import ParseError
from mtgox.models.ledger import OrderLedger
from mtgox.models.order import Buy, Sell


def rec(oid, type_, date, price="7.5"):
    return {"oid": oid, "type": type_, "date": date, "amount": "1", "price": price}


def test_partitions_by_type_code_oldest_first():
    ledger = OrderLedger.from_records(
        [
            rec("s2", 1, 300),
            rec("b2", 2, 250),
            rec("s1", 1, 100),
            rec("b1", "2", 200),
        ]
    )
    assert [o.id for o in ledger.sells] == ["s1", "s2"]
    assert [o.id for o in ledger.buys] == ["b1", "b2"]
    assert all(isinstance(o, Sell) for o in ledger.sells)
    assert all(isinstance(o, Buy) for o in ledger.buys)
    assert len(ledger) == 4


def test_same_date_keeps_input_order():
    ledger = OrderLedger.from_records([rec("a", 2, 100), rec("b", 2, 100)])
    assert [o.id for o in ledger.buys] == ["a", "b"]


def test_unknown_type_code_is_skipped_and_logged(caplog):
    odd = rec("x", 7, 150)
    ledger = OrderLedger.from_records([rec("s1", 1, 100), odd, rec("b1", 2, 200)])

    assert [o.id for o in ledger.sells] == ["s1"]
    assert [o.id for o in ledger.buys] == ["b1"]
    assert "x" not in [o.id for o in ledger]
    assert ledger.skipped == (odd,)
    assert any("unknown type code" in r.message for r in caplog.records)


def test_empty_list():
    ledger = OrderLedger.from_records([])
    assert ledger.buys == () and ledger.sells == ()


def test_bad_price_fails_the_batch():
    with pytest.raises(ParseError):
        OrderLedger.from_records([rec("b1", 2, 100, price="abc")])


def test_bad_date_fails_the_batch():
    with pytest.raises(ParseError):
        OrderLedger.from_records([rec("b1", 2, None)])


def test_prices_are_decimals():
    ledger = OrderLedger.from_records([rec("b1", 2, 100, price="7.123")])
    assert ledger.buys[0].price == Decimal("7.123")


def test_non_ascii_digit_type_code_is_skipped():
    odd = rec("sq", "²", 150)
    ledger = OrderLedger.from_records([odd, rec("b1", 2, 100)])
    assert [o.id for o in ledger.buys] == ["b1"]
    assert ledger.skipped == (odd,)


def test_unknown_type_with_bad_date_is_still_skipped():
    odd = rec("x", 9, "not-a-date")
    ledger = OrderLedger.from_records([rec("s1", 1, 100), odd])
    assert [o.id for o in ledger.sells] == ["s1"]
    assert ledger.skipped == (odd,)


def test_skipped_records_keep_payload_order():
    a, b = rec("a", 5, 300), rec("b", None, 100)
    ledger = OrderLedger.from_records([a, rec("s1", 1, 200), b])
    assert ledger.skipped == (a, b)
