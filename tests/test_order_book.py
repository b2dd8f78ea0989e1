from decimal import Decimal

import pytest

from mtgox.errors import EmptyBookError, ParseError
from mtgox.models.book import OrderBook
from mtgox.models.offer import Ask, Bid, MaxBid, MinAsk

DEPTH = {
    "asks": [[8.0, 3.5], [7.95, 1.0], [8.2, 12.0], [7.95, 2.25]],
    "bids": [[7.8, 4.0], [7.9, 0.5], [7.5, 20.0], [7.9, 1.75, 1300000000]],
}


def test_sides_are_sorted_best_first():
    ob = OrderBook.from_depth(DEPTH, "USD")
    assert [a.price for a in ob.asks] == [
        Decimal("7.95"),
        Decimal("7.95"),
        Decimal("8.0"),
        Decimal("8.2"),
    ]
    assert [b.price for b in ob.bids] == [
        Decimal("7.9"),
        Decimal("7.9"),
        Decimal("7.8"),
        Decimal("7.5"),
    ]
    assert all(isinstance(a, Ask) for a in ob.asks)
    assert all(isinstance(b, Bid) for b in ob.bids)


def test_equal_prices_keep_payload_order():
    ob = OrderBook.from_depth(DEPTH, "USD")
    assert [a.amount for a in ob.asks[:2]] == [Decimal("1.0"), Decimal("2.25")]
    assert [b.amount for b in ob.bids[:2]] == [Decimal("0.5"), Decimal("1.75")]


def test_min_ask_and_max_bid_are_first_of_side():
    ob = OrderBook.from_depth(DEPTH, "EUR")
    m = ob.min_ask()
    assert m == MinAsk(price=Decimal("7.95"), amount=Decimal("1.0"), currency="EUR")
    assert m.price == ob.asks[0].price
    assert ob.max_bid() == MaxBid(
        price=Decimal("7.9"), amount=Decimal("0.5"), currency="EUR"
    )


def test_empty_sides_raise():
    ob = OrderBook.from_depth({"asks": [], "bids": [[1, 1]]}, "USD")
    with pytest.raises(EmptyBookError) as ei:
        ob.min_ask()
    assert ei.value.side == "asks"
    assert ob.max_bid().price == Decimal("1")

    ob = OrderBook.from_depth({"asks": [[1, 1]]}, "USD")
    assert ob.bids == ()
    with pytest.raises(EmptyBookError):
        ob.max_bid()


@pytest.mark.parametrize(
    "depth", [{"asks": [["x", "1"]]}, {"bids": [[1]]}, {"asks": ["7.9"]}]
)
def test_malformed_rows_raise(depth):
    with pytest.raises(ParseError):
        OrderBook.from_depth(depth, "USD")
