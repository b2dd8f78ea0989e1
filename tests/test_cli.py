from pathlib import Path

from typer.testing import CliRunner

from mtgox.cli import app

runner = CliRunner()


def test_book_with_fake():
    result = runner.invoke(app, ["book", "--use-fake", "--depth", "2"])
    assert result.exit_code == 0, result.output
    out = result.output
    assert out.index("asks:") < out.index("bids:")
    # equal prices: payload order survives
    assert out.index("7.95 x 1.0") < out.index("7.95 x 2.25")
    assert "8.2" not in out.split("bids:")[0]


def test_ticker_and_balance_with_fake():
    result = runner.invoke(app, ["ticker", "--use-fake", "--currency", "USD"])
    assert result.exit_code == 0, result.output
    assert "last=7.94" in result.output

    result = runner.invoke(app, ["balance", "--use-fake"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["BTC 10.5", "USD 250.00"]


def test_buy_with_fake():
    result = runner.invoke(app, ["buy", "1.5", "7.9", "--use-fake"])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("BUY  fake-1 1.5 @ 7.9 USD")


def test_cancel_unknown_id_exits_1():
    result = runner.invoke(app, ["cancel", "99999", "--use-fake"])
    assert result.exit_code == 1
    assert "Order not found." in result.output


def test_bad_amount_exits_1():
    result = runner.invoke(app, ["withdraw", "lots", "1Dest", "--use-fake"])
    assert result.exit_code == 1


def test_log_dir_option(tmp_path: Path, monkeypatch):
    seen = []
    monkeypatch.setattr("mtgox.cli.setup_logging", lambda log_dir: seen.append(log_dir))
    result = runner.invoke(app, ["--log-dir", str(tmp_path), "orders", "--use-fake"])
    assert result.exit_code == 0, result.output
    assert "no open orders" in result.output
    assert seen == [str(tmp_path)]
