from decimal import Decimal

import pytest

from mtgox.errors import ParseError
from mtgox.models.order import Buy, CancelRequest, OrderType, Sell, Trade

RECORD = {
    "oid": "abc-1",
    "currency": "USD",
    "item": "BTC",
    "type": 2,
    "amount": "0.25",
    "price": "7.5",
    "status": 1,
    "date": 1300000000,
}


def test_buy_keeps_record_fields():
    b = Buy.from_record(RECORD)
    assert b.id == "abc-1"
    assert b.date.timestamp() == 1300000000
    assert b.amount == Decimal("0.25")
    assert b.price == Decimal("7.5")
    assert b.currency == "USD"
    assert b.status == 1
    assert b.type is OrderType.BUY


def test_sell_carries_sell_type():
    s = Sell.from_record({**RECORD, "type": 1})
    assert s.type == 1
    assert s.cancel_request() == CancelRequest(oid="abc-1", type=OrderType.SELL)


def test_trade_takes_currency_from_caller():
    t = Trade.from_record(
        {"tid": 1001, "date": "1300000060", "amount": 1.2, "price": "7.90"}, "EUR"
    )
    assert t.id == "1001"
    assert t.currency == "EUR"
    assert t.amount == Decimal("1.2")
    assert t.date.timestamp() == 1300000060


@pytest.mark.parametrize(
    "patch", [{"price": "abc"}, {"amount": None}, {"date": "soon"}, {"oid": ""}]
)
def test_malformed_own_order_raises(patch):
    with pytest.raises(ParseError):
        Buy.from_record({**RECORD, **patch})


def test_cancel_request_strips_everything_else():
    req = CancelRequest.from_mapping(RECORD)
    assert req.to_params() == {"oid": "abc-1", "type": 2}

    assert CancelRequest.from_mapping({"oid": 42, "type": "1"}).to_params() == {
        "oid": "42",
        "type": 1,
    }


@pytest.mark.parametrize("m", [{"oid": "1"}, {"oid": "1", "type": 3}, {"type": 1}])
def test_cancel_request_needs_oid_and_known_type(m):
    with pytest.raises(ParseError):
        CancelRequest.from_mapping(m)


TRADE = {"tid": 1001, "date": 1300000060, "amount": "1.2", "price": "7.90"}


@pytest.mark.parametrize(
    "patch",
    [
        {"price": "abc"},
        {"price": None},
        {"amount": "-2"},
        {"date": "soon"},
        {"tid": None},
        {"tid": ""},
    ],
)
def test_malformed_trade_raises(patch):
    with pytest.raises(ParseError):
        Trade.from_record({**TRADE, **patch}, "USD")


def test_trade_without_tid_key_raises():
    record = dict(TRADE)
    del record["tid"]
    with pytest.raises(ParseError):
        Trade.from_record(record, "USD")
