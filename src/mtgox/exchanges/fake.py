from __future__ import annotations
import copy
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from mtgox.errors import NotFound, TransportError
from mtgox.exchanges.http import raise_for_payload
from mtgox.models.order import OrderType

_T0 = 1_300_000_000  # fixed clock so fake data is reproducible

DEFAULT_TICKER = {
    "high": 8.25,
    "low": 7.1,
    "avg": 7.8,
    "vwap": "7.82",
    "vol": 42981,
    "last": 7.94,
    "buy": 7.9,
    "sell": 7.95,
}

DEFAULT_DEPTH = {
    "asks": [[8.0, 3.5], [7.95, 1.0], [8.2, 12.0], [7.95, 2.25]],
    "bids": [[7.8, 4.0], [7.9, 0.5], [7.5, 20.0], [7.9, 1.75]],
}

DEFAULT_TRADES = [
    {"tid": "1002", "date": _T0 + 60, "amount": "0.5", "price": "7.93"},
    {"tid": "1001", "date": _T0, "amount": "1.2", "price": "7.90"},
    {"tid": "1003", "date": _T0 + 120, "amount": "3", "price": "7.94"},
]

DEFAULT_WALLETS = {
    "BTC": {"Balance": {"value": "10.5", "currency": "BTC"}},
    "USD": {"Balance": {"value": "250.00", "currency": "USD"}},
}


class FakeTransport:
    """
    In-memory stand-in for the exchange. Speaks the same paths and payload
    shapes as the real API, keeps open orders and wallets as state, and
    records every request in `calls` as (method, path, params).
    """

    name = "fake"

    def __init__(
        self,
        ticker: Optional[Mapping[str, Any]] = None,
        depth: Optional[Mapping[str, Any]] = None,
        trades: Optional[List[Mapping[str, Any]]] = None,
        wallets: Optional[Mapping[str, Any]] = None,
        orders: Optional[List[Mapping[str, Any]]] = None,
        address: str = "1FakeDepositAddressXXXXXXXXXXXXXXX",
    ):
        self.ticker = copy.deepcopy(dict(ticker if ticker is not None else DEFAULT_TICKER))
        self.depth = copy.deepcopy(dict(depth if depth is not None else DEFAULT_DEPTH))
        self.trades = copy.deepcopy(list(trades if trades is not None else DEFAULT_TRADES))
        self.wallets = copy.deepcopy(dict(wallets if wallets is not None else DEFAULT_WALLETS))
        self.orders: List[Dict[str, Any]] = [dict(o) for o in (orders or [])]
        self.address = address
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self._seq = 0

    def _next_oid(self) -> Tuple[str, int]:
        self._seq += 1
        return f"fake-{self._seq}", _T0 + 3600 + self._seq

    def _orders_payload(self) -> Dict[str, Any]:
        return {"orders": copy.deepcopy(self.orders)}

    def _wallets_payload(self) -> Dict[str, Any]:
        return {"Wallets": copy.deepcopy(self.wallets)}

    # --- public ---
    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        if path == "api/0/data/ticker.php":
            return {"ticker": copy.deepcopy(self.ticker)}
        if path == "api/0/data/getDepth.php":
            return copy.deepcopy(self.depth)
        if path == "api/0/data/getTrades.php":
            return copy.deepcopy(self.trades)
        raise NotFound(body=f"no such endpoint: GET /{path}")

    # --- private ---
    def _place(self, kind: OrderType, params: Dict[str, Any]) -> Dict[str, Any]:
        oid, date = self._next_oid()
        self.orders.append(
            {
                "oid": oid,
                "type": int(kind),
                "amount": str(params["amount"]),
                "price": str(params["price"]),
                "currency": params.get("Currency", "USD"),
                "item": "BTC",
                "status": 1,
                "date": date,
            }
        )
        return self._orders_payload()

    def _cancel(self, params: Dict[str, Any]) -> Dict[str, Any]:
        oid = str(params.get("oid"))
        kind = str(params.get("type"))
        for i, o in enumerate(self.orders):
            if str(o["oid"]) == oid and str(o["type"]) == kind:
                del self.orders[i]
                return self._orders_payload()
        return {"error": "Order not found"}

    def _withdraw(self, params: Dict[str, Any]) -> Dict[str, Any]:
        group = params.get("group1", "BTC")
        amount = Decimal(str(params["amount"]))
        balance = self.wallets.get(group, {}).get("Balance")
        if balance is None or Decimal(str(balance["value"])) < amount:
            return {"error": "Insufficient funds"}
        balance["value"] = str(Decimal(str(balance["value"])) - amount)
        return self._wallets_payload()

    def _post(self, path: str, params: Dict[str, Any]) -> Any:
        if path == "api/0/btcAddress.php":
            return {"addr": self.address}
        if path == "api/0/info.php":
            return self._wallets_payload()
        if path == "api/0/getOrders.php":
            return self._orders_payload()
        if path == "api/0/buyBTC.php":
            return self._place(OrderType.BUY, params)
        if path == "api/0/sellBTC.php":
            return self._place(OrderType.SELL, params)
        if path == "api/0/cancelOrder.php":
            return self._cancel(params)
        if path == "api/0/withdraw.php":
            return self._withdraw(params)
        if path.startswith("api/1/") and path.endswith("/private/trades"):
            return {"result": "success", "return": []}
        raise NotFound(body=f"no such endpoint: POST /{path}")

    def request(
        self, method: str, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        method = method.upper()
        query = dict(params or {})
        path = path.lstrip("/")
        self.calls.append((method, path, query))
        if method == "GET":
            data = self._get(path, query)
        elif method == "POST":
            data = self._post(path, query)
        else:
            raise TransportError(f"Unsupported method: {method}")
        return raise_for_payload(data)
