from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol, Union

from mtgox.models.parsing import parse_decimal


class Offer(Protocol):
    """A resting order in the public book, ask or bid."""

    price: Decimal
    amount: Decimal
    currency: str

    def effective_price(self, commission: Decimal) -> Decimal: ...


def _rate(commission: Any) -> Decimal:
    return parse_decimal(commission, "commission")


@dataclass(frozen=True)
class Ask:
    price: Decimal
    amount: Decimal
    currency: str

    @classmethod
    def from_raw(cls, price: Any, amount: Any, currency: str) -> "Ask":
        return cls(
            price=parse_decimal(price, "ask.price"),
            amount=parse_decimal(amount, "ask.amount"),
            currency=currency,
        )

    def effective_price(self, commission: Decimal) -> Decimal:
        # what buying from this ask really costs
        return self.price * (1 + _rate(commission))


@dataclass(frozen=True)
class Bid:
    price: Decimal
    amount: Decimal
    currency: str

    @classmethod
    def from_raw(cls, price: Any, amount: Any, currency: str) -> "Bid":
        return cls(
            price=parse_decimal(price, "bid.price"),
            amount=parse_decimal(amount, "bid.amount"),
            currency=currency,
        )

    def effective_price(self, commission: Decimal) -> Decimal:
        # what selling into this bid really yields
        return self.price * (1 - _rate(commission))


AnyOffer = Union[Ask, Bid]


@dataclass(frozen=True)
class MinAsk:
    price: Decimal
    amount: Decimal
    currency: str

    @classmethod
    def of(cls, ask: Ask) -> "MinAsk":
        return cls(price=ask.price, amount=ask.amount, currency=ask.currency)


@dataclass(frozen=True)
class MaxBid:
    price: Decimal
    amount: Decimal
    currency: str

    @classmethod
    def of(cls, bid: Bid) -> "MaxBid":
        return cls(price=bid.price, amount=bid.amount, currency=bid.currency)
