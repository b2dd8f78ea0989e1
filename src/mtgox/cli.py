from typing import Optional

import typer

from mtgox.client import Client
from mtgox.errors import MtGoxError
from mtgox.exchanges.fake import FakeTransport
from mtgox.logging_config import setup as setup_logging
from mtgox.models.ledger import OrderLedger
from mtgox.models.parsing import parse_decimal
from mtgox.settings import Settings


app = typer.Typer(help="MtGox CLI")

ConfigOpt = typer.Option(None, help="YAML 설정 파일 경로 (생략 시 환경변수/.env)")
FakeOpt = typer.Option(False, help="실제 거래소 대신 메모리 상의 FakeTransport 사용")


@app.callback()
def main(
    log_dir: Optional[str] = typer.Option(None, help="지정하면 파일 로그를 남김"),
) -> None:
    if log_dir:
        setup_logging(log_dir=log_dir)


def _client(config: Optional[str], use_fake: bool) -> Client:
    s = Settings.load(config)
    if use_fake:
        return Client(FakeTransport(), s)
    return Client.from_settings(s)


def _fail(e: MtGoxError) -> None:
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


def _print_ledger(ledger: OrderLedger) -> None:
    for o in ledger:
        typer.echo(
            f"{o.type.name:<4} {o.id} {o.amount} @ {o.price} {o.currency or ''} "
            f"{o.date:%Y-%m-%d %H:%M:%S}"
        )
    if not len(ledger):
        typer.echo("no open orders")


@app.command()
def ticker(
    currency: str = "USD", config: Optional[str] = ConfigOpt, use_fake: bool = FakeOpt
):
    try:
        t = _client(config, use_fake).ticker(currency)
    except MtGoxError as e:
        _fail(e)
    typer.echo(
        f"{t.currency} last={t.price} buy={t.buy} sell={t.sell} "
        f"high={t.high} low={t.low} vol={t.volume} vwap={t.vwap}"
    )


@app.command()
def book(
    currency: str = "USD",
    depth: int = typer.Option(5, help="각 방향별 출력 개수"),
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    c = _client(config, use_fake)
    try:
        ob = c.offers(currency)
    except MtGoxError as e:
        _fail(e)
    typer.echo("asks:")
    for a in ob.asks[:depth]:
        typer.echo(f"  {a.price} x {a.amount} (eff {c.effective_price(a)})")
    typer.echo("bids:")
    for b in ob.bids[:depth]:
        typer.echo(f"  {b.price} x {b.amount} (eff {c.effective_price(b)})")


@app.command()
def trades(
    currency: str = "USD",
    limit: int = 20,
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    try:
        rows = _client(config, use_fake).trades(currency)
    except MtGoxError as e:
        _fail(e)
    for t in rows[-limit:]:
        typer.echo(f"{t.id} {t.date:%Y-%m-%d %H:%M:%S} {t.amount} @ {t.price} {t.currency}")


@app.command()
def balance(config: Optional[str] = ConfigOpt, use_fake: bool = FakeOpt):
    try:
        b = _client(config, use_fake).balance()
    except MtGoxError as e:
        _fail(e)
    for cur in sorted(b):
        typer.echo(f"{cur} {b[cur]}")


@app.command()
def orders(config: Optional[str] = ConfigOpt, use_fake: bool = FakeOpt):
    try:
        ledger = _client(config, use_fake).orders()
    except MtGoxError as e:
        _fail(e)
    _print_ledger(ledger)


@app.command()
def buy(
    amount: str,
    price: str,
    currency: str = "USD",
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    try:
        c = _client(config, use_fake)
        ledger = c.buy(
            parse_decimal(amount, "amount"), parse_decimal(price, "price"), currency
        )
    except MtGoxError as e:
        _fail(e)
    _print_ledger(ledger)


@app.command()
def sell(
    amount: str,
    price: str,
    currency: str = "USD",
    config: Optional[str] = ConfigOpt,
    use_fake: bool = FakeOpt,
):
    try:
        c = _client(config, use_fake)
        ledger = c.sell(
            parse_decimal(amount, "amount"), parse_decimal(price, "price"), currency
        )
    except MtGoxError as e:
        _fail(e)
    _print_ledger(ledger)


@app.command()
def cancel(oid: str, config: Optional[str] = ConfigOpt, use_fake: bool = FakeOpt):
    """
    주문 ID만으로 취소 (조회 후 취소, 두 번의 요청).
    """
    try:
        ledger = _client(config, use_fake).cancel_by_id(oid)
    except MtGoxError as e:
        _fail(e)
    _print_ledger(ledger)


@app.command()
def withdraw(
    amount: str, address: str, config: Optional[str] = ConfigOpt, use_fake: bool = FakeOpt
):
    try:
        b = _client(config, use_fake).withdraw(parse_decimal(amount, "amount"), address)
    except MtGoxError as e:
        _fail(e)
    for cur in sorted(b):
        typer.echo(f"{cur} {b[cur]}")


if __name__ == "__main__":
    app()
