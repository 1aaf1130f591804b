"""CLI: nobitex auth login"""

import click
from rich.console import Console

console = Console()


def _get_client(ctx, authenticated=False):
    from nobitex.cli.main import _get_client
    return _get_client(ctx, authenticated)


def _run(coro):
    from nobitex.cli.main import _run
    return _run(coro)


def _mask(key: str) -> str:
    if len(key) <= 8:
        return "****"
    return key[:4] + "****" + key[-4:]


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.pass_context
def auth_login(ctx):
    """Log in with username, password and TOTP. The key is not saved."""
    opts = ctx.find_root().obj
    if not opts.get("username"):
        opts["username"] = click.prompt("Username")
    if not opts.get("password"):
        opts["password"] = click.prompt("Password", hide_input=True)

    async def _login():
        client = _get_client(ctx)
        async with client:
            with console.status("Logging in..."):
                result = await client.authenticate()
        console.print(f"[green]Logged in[/green] (device {result.device})")
        console.print(f"Key: {_mask(result.key)}")
        console.print("[dim]Export it as NOBITEX_API_KEY to reuse it in this shell.[/dim]")

    _run(_login())
