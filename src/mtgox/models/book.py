from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Tuple, TypeVar

from mtgox.errors import EmptyBookError, ParseError
from mtgox.models.offer import Ask, Bid, MaxBid, MinAsk

T = TypeVar("T", Ask, Bid)


def _build_side(
    rows: Iterable[Any], side: str, currency: str, make: Callable[..., T]
) -> List[T]:
    out: List[T] = []
    for i, row in enumerate(rows):
        # rows are [price, amount]; later API versions append extra columns
        if not isinstance(row, (list, tuple)) or len(row) < 2:
            raise ParseError(f"{side}[{i}]", row, "expected [price, amount]")
        out.append(make(row[0], row[1], currency))
    return out


@dataclass(frozen=True)
class OrderBook:
    """
    Both sides of the book for one currency.

    asks: cheapest first.  bids: highest first.
    Equal prices keep the order the exchange sent them in (sorted() is stable,
    reverse=True included), so picking the best offer is deterministic.
    """

    currency: str
    asks: Tuple[Ask, ...]
    bids: Tuple[Bid, ...]

    @classmethod
    def from_depth(cls, payload: Mapping[str, Any], currency: str) -> "OrderBook":
        asks = _build_side(payload.get("asks") or [], "asks", currency, Ask.from_raw)
        bids = _build_side(payload.get("bids") or [], "bids", currency, Bid.from_raw)
        return cls(
            currency=currency,
            asks=tuple(sorted(asks, key=lambda a: a.price)),
            bids=tuple(sorted(bids, key=lambda b: b.price, reverse=True)),
        )

    def min_ask(self) -> MinAsk:
        if not self.asks:
            raise EmptyBookError("asks", self.currency)
        return MinAsk.of(self.asks[0])

    def max_bid(self) -> MaxBid:
        if not self.bids:
            raise EmptyBookError("bids", self.currency)
        return MaxBid.of(self.bids[0])
