from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Protocol

from mtgox.errors import ParseError
from mtgox.models.parsing import parse_decimal, parse_timestamp, parse_type_code


class OrderType(IntEnum):
    """Type codes used by the exchange for the user's own orders."""

    SELL = 1
    BUY = 2


class Order(Protocol):
    id: str
    date: datetime
    amount: Decimal
    price: Decimal
    currency: Optional[str]


def _require_id(record: Mapping[str, Any], key: str) -> str:
    raw = record.get(key)
    if raw is None or isinstance(raw, bool) or str(raw).strip() == "":
        raise ParseError(key, raw, "missing identifier")
    return str(raw)


@dataclass(frozen=True)
class Trade:
    id: str
    date: datetime
    amount: Decimal
    price: Decimal
    currency: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any], currency: str) -> "Trade":
        # the public trade feed has no currency field of its own
        return cls(
            id=_require_id(record, "tid"),
            date=parse_timestamp(record.get("date"), "trade.date"),
            amount=parse_decimal(record.get("amount"), "trade.amount"),
            price=parse_decimal(record.get("price"), "trade.price"),
            currency=currency,
        )


def _own_order_fields(record: Mapping[str, Any], label: str) -> Dict[str, Any]:
    status = parse_type_code(record.get("status"))
    return {
        "id": _require_id(record, "oid"),
        "date": parse_timestamp(record.get("date"), f"{label}.date"),
        "amount": parse_decimal(record.get("amount"), f"{label}.amount"),
        "price": parse_decimal(record.get("price"), f"{label}.price"),
        "currency": record.get("currency"),
        "status": status,
    }


@dataclass(frozen=True)
class CancelRequest:
    """Exactly what the cancel endpoint needs: an order id and its type code."""

    oid: str
    type: OrderType

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CancelRequest":
        code = parse_type_code(mapping.get("type"))
        if code not in (OrderType.SELL, OrderType.BUY):
            raise ParseError("type", mapping.get("type"), "unknown order type")
        return cls(oid=_require_id(mapping, "oid"), type=OrderType(code))

    def to_params(self) -> Dict[str, Any]:
        return {"oid": self.oid, "type": int(self.type)}


@dataclass(frozen=True)
class Buy:
    id: str
    date: datetime
    amount: Decimal
    price: Decimal
    currency: Optional[str] = None
    status: Optional[int] = None
    type: OrderType = OrderType.BUY

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Buy":
        return cls(**_own_order_fields(record, "buy"))

    def cancel_request(self) -> CancelRequest:
        return CancelRequest(oid=self.id, type=self.type)


@dataclass(frozen=True)
class Sell:
    id: str
    date: datetime
    amount: Decimal
    price: Decimal
    currency: Optional[str] = None
    status: Optional[int] = None
    type: OrderType = OrderType.SELL

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Sell":
        return cls(**_own_order_fields(record, "sell"))

    def cancel_request(self) -> CancelRequest:
        return CancelRequest(oid=self.id, type=self.type)
