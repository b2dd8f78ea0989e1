# src/mtgox/client.py
from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import logging

from mtgox.errors import NotFound, ParseError
from mtgox.exchanges.base import ITransport
from mtgox.exchanges.http import HttpTransport
from mtgox.models.book import OrderBook
from mtgox.models.ledger import OrderLedger
from mtgox.models.market import Ticker, extract_balance
from mtgox.models.offer import Ask, AnyOffer, Bid, MaxBid, MinAsk
from mtgox.models.order import Buy, CancelRequest, Sell, Trade
from mtgox.models.parsing import format_decimal, parse_timestamp
from mtgox.settings import Settings

log = logging.getLogger("client")

ORDER_NOT_FOUND = "Order not found."


def _orders_of(payload: Any) -> List[Mapping[str, Any]]:
    if not isinstance(payload, Mapping) or "orders" not in payload:
        raise ParseError("orders", payload, "response has no order list")
    orders = payload["orders"]
    if not isinstance(orders, list):
        raise ParseError("orders", orders, "expected a list")
    return orders


class Client:
    """
    Typed access to the exchange. Every call is one round trip through the
    transport; the payload is parsed into the models and nothing is kept.
    """

    def __init__(self, transport: ITransport, settings: Optional[Settings] = None):
        self.transport = transport
        self.settings = settings or Settings()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Client":
        return cls(HttpTransport.from_settings(settings), settings)

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.transport.request("GET", path, params)

    def _post(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.transport.request("POST", path, params)

    # --- Public market data ---
    def ticker(self, currency: str) -> Ticker:
        data = self._get("/api/0/data/ticker.php", {"Currency": currency})
        if not isinstance(data, Mapping) or not isinstance(data.get("ticker"), Mapping):
            raise ParseError("ticker", data, "response has no ticker")
        return Ticker.from_payload(data["ticker"], currency)

    def offers(self, currency: str) -> OrderBook:
        """Both sides of the book in one request."""
        data = self._get("/api/0/data/getDepth.php", {"Currency": currency})
        if not isinstance(data, Mapping):
            raise ParseError("depth", data, "expected a mapping")
        return OrderBook.from_depth(data, currency)

    def asks(self, currency: str) -> Tuple[Ask, ...]:
        return self.offers(currency).asks

    def bids(self, currency: str) -> Tuple[Bid, ...]:
        return self.offers(currency).bids

    def min_ask(self, currency: str) -> MinAsk:
        return self.offers(currency).min_ask()

    def max_bid(self, currency: str) -> MaxBid:
        return self.offers(currency).max_bid()

    def trades(self, currency: str) -> Tuple[Trade, ...]:
        """Recent public trades, oldest first."""
        data = self._get("/api/0/data/getTrades.php", {"Currency": currency})
        if not isinstance(data, list):
            raise ParseError("trades", data, "expected a list")
        for i, t in enumerate(data):
            if not isinstance(t, Mapping):
                raise ParseError(f"trades[{i}]", t, "expected a trade record")
        rows = sorted(data, key=lambda t: parse_timestamp(t.get("date"), "trade.date"))
        return tuple(Trade.from_record(t, currency) for t in rows)

    def effective_price(self, offer: AnyOffer) -> Decimal:
        # commission is looked up now, not when the offer was parsed
        return offer.effective_price(self.settings.commission)

    # --- Account ---
    def address(self) -> str:
        data = self._post("/api/0/btcAddress.php")
        if not isinstance(data, Mapping) or not data.get("addr"):
            raise ParseError("addr", data, "response has no address")
        return str(data["addr"])

    def info(self) -> Dict[str, Any]:
        data = self._post("/api/0/info.php")
        if not isinstance(data, Mapping):
            raise ParseError("info", data, "expected a mapping")
        return dict(data)

    def balance(self) -> Dict[str, Decimal]:
        return extract_balance(self.info())

    def history(self, currency: str) -> Any:
        """The account's own trade history, returned as the exchange sends it."""
        data = self._post(f"/api/1/BTC{currency}/private/trades")
        if isinstance(data, Mapping) and "return" in data:
            return data["return"]
        return data

    def withdraw(self, amount: Union[Decimal, float, str], address: str) -> Dict[str, Decimal]:
        """Send bitcoins to `address`; returns the wallet balances afterwards."""
        qty = format_decimal(amount, "amount")
        log.info("withdraw %s BTC to %s", qty, address)
        data = self._post(
            "/api/0/withdraw.php", {"group1": "BTC", "amount": qty, "btca": address}
        )
        if not isinstance(data, Mapping):
            raise ParseError("withdraw", data, "expected a mapping")
        return extract_balance(data)

    # --- Own orders ---
    def orders(self) -> OrderLedger:
        return OrderLedger.from_records(_orders_of(self._post("/api/0/getOrders.php")))

    def buys(self) -> Tuple[Buy, ...]:
        return self.orders().buys

    def sells(self) -> Tuple[Sell, ...]:
        return self.orders().sells

    def _place(
        self, path: str, side: str, amount: Any, price: Any, currency: str
    ) -> OrderLedger:
        params = {
            "amount": format_decimal(amount, "amount"),
            "price": format_decimal(price, "price"),
            "Currency": currency,
        }
        log.info("place %s %s BTC @ %s %s", side, params["amount"], params["price"], currency)
        return OrderLedger.from_records(_orders_of(self._post(path, params)))

    def buy(self, amount: Any, price: Any, currency: str) -> OrderLedger:
        """Limit order to buy `amount` BTC at `price` in `currency`."""
        return self._place("/api/0/buyBTC.php", "buy", amount, price, currency)

    def sell(self, amount: Any, price: Any, currency: str) -> OrderLedger:
        """Limit order to sell `amount` BTC at `price` in `currency`."""
        return self._place("/api/0/sellBTC.php", "sell", amount, price, currency)

    # --- Cancellation ---
    def cancel(self, request: CancelRequest) -> OrderLedger:
        """Cancel by descriptor: sends exactly `oid` and `type`."""
        log.info("cancel oid=%s type=%d", request.oid, request.type)
        data = self._post("/api/0/cancelOrder.php", request.to_params())
        return OrderLedger.from_records(_orders_of(data))

    def cancel_order(self, order: Union[Buy, Sell, Mapping[str, Any]]) -> OrderLedger:
        """Cancel a Buy/Sell from `orders()`, or a mapping with `oid` and `type`."""
        if isinstance(order, (Buy, Sell)):
            return self.cancel(order.cancel_request())
        return self.cancel(CancelRequest.from_mapping(order))

    def cancel_by_id(self, oid: Any) -> OrderLedger:
        """
        Cancel an order knowing only its id.

        Best effort, two requests: the open orders are fetched to learn the
        order's type, then the cancel is sent. If the order is filled or
        cancelled in between, the exchange's own error for the cancel is
        raised unchanged. An id absent from the first listing raises NotFound.
        """
        wanted = str(oid)
        for record in _orders_of(self._post("/api/0/getOrders.php", {})):
            if str(record.get("oid")) == wanted:
                return self.cancel(CancelRequest.from_mapping(record))
        log.debug("cancel: oid=%s not among open orders", wanted)
        raise NotFound(body=ORDER_NOT_FOUND)
