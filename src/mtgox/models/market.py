from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from mtgox.errors import ParseError
from mtgox.models.parsing import parse_decimal


@dataclass(frozen=True)
class Ticker:
    currency: str
    buy: Decimal
    sell: Decimal
    high: Decimal
    low: Decimal
    price: Decimal
    volume: Decimal
    vwap: Decimal

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], currency: str) -> "Ticker":
        def d(key: str) -> Decimal:
            return parse_decimal(payload.get(key), f"ticker.{key}")

        return cls(
            currency=currency,
            buy=d("buy"),
            sell=d("sell"),
            high=d("high"),
            low=d("low"),
            price=d("last"),
            volume=d("vol"),
            vwap=d("vwap"),
        )

    def direction(self, previous: Optional["Ticker"]) -> str:
        """'up', 'down' or 'unchanged' relative to an earlier snapshot."""
        if previous is None or previous.price == self.price:
            return "unchanged"
        return "up" if self.price > previous.price else "down"


def _get(mapping: Mapping[str, Any], key: str) -> Any:
    # the info endpoint capitalises its keys, other endpoints do not
    if key in mapping:
        return mapping[key]
    return mapping.get(key.capitalize())


# legacy withdraw responses report only these two wallets
_LEGACY_KEYS = {"btcs": "BTC", "usds": "USD"}


def extract_balance(payload: Mapping[str, Any]) -> Dict[str, Decimal]:
    wallets = _get(payload, "wallets")
    if wallets is None:
        legacy = {cur: payload[k] for k, cur in _LEGACY_KEYS.items() if k in payload}
        if not legacy:
            raise ParseError("wallets", None, "no wallet data in payload")
        return {cur: parse_decimal(v, f"balance.{cur}") for cur, v in legacy.items()}

    if not isinstance(wallets, Mapping):
        raise ParseError("wallets", wallets, "expected a mapping")
    out: Dict[str, Decimal] = {}
    for currency, details in wallets.items():
        balance = _get(details, "balance") if isinstance(details, Mapping) else None
        value = _get(balance, "value") if isinstance(balance, Mapping) else None
        out[currency] = parse_decimal(value, f"balance.{currency}")
    return out
