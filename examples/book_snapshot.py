# examples/book_snapshot.py
# ------------------------------------------------------------
# 호가창 스냅샷 + 수수료 반영 가격 출력
# 실거래소 대신 FakeTransport 로 실행 (MTGOX_LIVE=1 이면 실제 API)
# ------------------------------------------------------------
import os

from mtgox.client import Client
from mtgox.exchanges.fake import FakeTransport
from mtgox.settings import Settings


def main():
    s = Settings.load(os.getenv("MTGOX_CONFIG"))
    if os.getenv("MTGOX_LIVE") == "1":
        c = Client.from_settings(s)
    else:
        c = Client(FakeTransport(), s)

    book = c.offers("USD")
    best_ask = book.min_ask()
    best_bid = book.max_bid()

    print("=== USD book ===")
    print(f"asks: {len(book.asks)}  bids: {len(book.bids)}")
    pay = c.effective_price(book.asks[0])
    get = c.effective_price(book.bids[0])
    print(f"best ask {best_ask.price} x {best_ask.amount} -> pay {pay}")
    print(f"best bid {best_bid.price} x {best_bid.amount} -> get {get}")
    print(f"spread: {best_ask.price - best_bid.price}")


if __name__ == "__main__":
    main()
