"""CLI: nobitex market stats|orderbook|trades"""

import click
from rich.console import Console
from rich.table import Table

from nobitex.models.market import GetTickersParams

console = Console()


def _get_client(ctx, authenticated=False):
    from nobitex.cli.main import _get_client
    return _get_client(ctx, authenticated)


def _run(coro):
    from nobitex.cli.main import _run
    return _run(coro)


def _echo_json(model):
    from nobitex.cli.main import _echo_json
    _echo_json(model)


def _level(levels: list[list[str]], i: int) -> list[str]:
    """Price and size at depth `i`, blank-padded when the level is missing or short."""
    level = levels[i] if i < len(levels) else []
    return (list(level[:2]) + ["", ""])[:2]


@click.group()
def market():
    """Public market data."""


@market.command("stats")
@click.argument("src")
@click.argument("dst")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def market_stats(ctx, src, dst, json_output):
    """Ticker stats for SRC/DST, e.g. `btc usdt`."""

    async def _stats():
        async with _get_client(ctx) as client:
            result = await client.market.get_tickers(GetTickersParams(src_currency=src, dst_currency=dst))
        if json_output:
            _echo_json(result)
            return
        table = Table(title=f"{src.upper()}/{dst.upper()}")
        for column in ("Market", "Latest", "Best buy", "Best sell", "Day change"):
            table.add_column(column)
        for name, t in result.stats.items():
            table.add_row(name, t.latest or "", t.best_buy or "", t.best_sell or "", t.day_change or "")
        console.print(table)

    _run(_stats())


@market.command("orderbook")
@click.argument("symbol")
@click.option("--depth", default=10, type=int)
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def market_orderbook(ctx, symbol, depth, json_output):
    """Order book for SYMBOL, e.g. BTCUSDT."""

    async def _orderbook():
        async with _get_client(ctx) as client:
            book = await client.market.get_order_book(symbol.upper())
        if json_output:
            _echo_json(book)
            return
        table = Table(title=f"{symbol.upper()} (last trade {book.last_trade_price})")
        table.add_column("Bid", style="green")
        table.add_column("Bid size")
        table.add_column("Ask", style="red")
        table.add_column("Ask size")
        for i in range(depth):
            table.add_row(*_level(book.bids, i), *_level(book.asks, i))
        console.print(table)

    _run(_orderbook())


@market.command("trades")
@click.argument("symbol")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def market_trades(ctx, symbol, json_output):
    """Recent trades for SYMBOL."""

    async def _trades():
        async with _get_client(ctx) as client:
            result = await client.market.get_recent_trades(symbol.upper())
        if json_output:
            _echo_json(result)
            return
        table = Table(title=f"{symbol.upper()} trades")
        table.add_column("Time")
        table.add_column("Type")
        table.add_column("Price")
        table.add_column("Volume")
        for t in result.trades:
            style = "green" if t.type == "buy" else "red"
            table.add_row(str(t.time or ""), f"[{style}]{t.type}[/{style}]", t.price, t.volume)
        console.print(table)

    _run(_trades())
