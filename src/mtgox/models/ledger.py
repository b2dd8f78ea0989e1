from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Tuple

from mtgox.errors import ParseError
from mtgox.models.order import Buy, OrderType, Sell
from mtgox.models.parsing import parse_timestamp, parse_type_code

log = logging.getLogger("ledger")


@dataclass(frozen=True)
class OrderLedger:
    """
    The user's open orders split by side, oldest first.

    Records whose type code is neither SELL (1) nor BUY (2) are not fatal:
    they are logged at WARNING and kept verbatim in `skipped`, in payload
    order. Their other fields, date included, are never parsed.
    """

    buys: Tuple[Buy, ...] = ()
    sells: Tuple[Sell, ...] = ()
    skipped: Tuple[Mapping[str, Any], ...] = field(default=(), compare=False)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "OrderLedger":
        rows = list(records or [])
        for i, r in enumerate(rows):
            if not isinstance(r, Mapping):
                raise ParseError(f"orders[{i}]", r, "expected an order record")

        known: List[Tuple[int, Mapping[str, Any]]] = []
        skipped: List[Mapping[str, Any]] = []
        for r in rows:
            code = parse_type_code(r.get("type"))
            if code in (OrderType.SELL, OrderType.BUY):
                known.append((code, r))
            else:
                log.warning(
                    "Order skipped: unknown type code %r (oid=%s)",
                    r.get("type"),
                    r.get("oid"),
                )
                skipped.append(r)

        buys: List[Buy] = []
        sells: List[Sell] = []
        for code, r in sorted(
            known, key=lambda k: parse_timestamp(k[1].get("date"), "order.date")
        ):
            if code == OrderType.SELL:
                sells.append(Sell.from_record(r))
            else:
                buys.append(Buy.from_record(r))
        return cls(buys=tuple(buys), sells=tuple(sells), skipped=tuple(skipped))

    def __iter__(self):
        yield from self.buys
        yield from self.sells

    def __len__(self) -> int:
        return len(self.buys) + len(self.sells)
