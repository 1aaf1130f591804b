"""CLI: nobitex wallets, nobitex orders list|open|cancel"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from nobitex.models.order import CancelOrderParams, GetOrdersListParams, OrdersList
from nobitex.models.wallet import GetWalletParams

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


@click.command("wallets")
@click.option("--currency", "currencies", multiple=True, help="Repeat to filter by several currencies")
@click.option("--type", "trade_type", type=click.Choice(["spot", "margin"]), default=None)
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def wallets(ctx, currencies, trade_type, json_output):
    """Wallet balances."""

    async def _wallets():
        params = GetWalletParams(currencies=list(currencies) or None, trade_type=trade_type)
        async with _get_client(ctx, authenticated=True) as client:
            result = await client.wallets.get_wallets(params)
        if json_output:
            _echo_json(result)
            return
        table = Table(title="Wallets")
        table.add_column("Currency", style="bold")
        table.add_column("Balance")
        table.add_column("Blocked")
        for name, w in result.wallets.items():
            table.add_row(name, w.balance, w.blocked)
        console.print(table)

    _run(_wallets())


def _print_orders(result: OrdersList, title: str) -> None:
    table = Table(title=f"{title} ({len(result.orders)})")
    table.add_column("ID", style="bold")
    table.add_column("Market")
    table.add_column("Type")
    table.add_column("Price")
    table.add_column("Amount")
    table.add_column("Matched")
    table.add_column("Status")
    for o in result.orders:
        table.add_row(
            str(o.id or ""), f"{o.src_currency}/{o.dst_currency}", o.type,
            o.price, o.amount, o.matched_amount or "", o.status or "",
        )
    console.print(table)


@click.group()
def orders():
    """Order management."""


@orders.command("list")
@click.option("--status", default=None)
@click.option("--src", default=None)
@click.option("--dst", default=None)
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def orders_list(ctx, status: Optional[str], src: Optional[str], dst: Optional[str], json_output):
    """Order history."""

    async def _list():
        params = GetOrdersListParams(status=status, src_currency=src, dst_currency=dst)
        async with _get_client(ctx, authenticated=True) as client:
            result = await client.orders.history(params)
        if json_output:
            _echo_json(result)
            return
        _print_orders(result, "Orders")

    _run(_list())


@orders.command("open")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def orders_open(ctx, json_output):
    """Open orders."""

    async def _open():
        async with _get_client(ctx, authenticated=True) as client:
            result = await client.orders.open_orders()
        if json_output:
            _echo_json(result)
            return
        _print_orders(result, "Open orders")

    _run(_open())


@orders.command("cancel")
@click.argument("order_id", type=int)
@click.pass_context
def orders_cancel(ctx, order_id: int):
    """Cancel an order by ID."""

    async def _cancel():
        async with _get_client(ctx, authenticated=True) as client:
            with console.status("Cancelling..."):
                result = await client.orders.cancel(CancelOrderParams(id=order_id))
        console.print(f"[green]Order {order_id} cancel: {result.status}[/green]")

    _run(_cancel())
