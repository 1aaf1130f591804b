"""
Nobitex CLI — `nobitex` command.

Commands:
  nobitex config show|set       Non-secret settings (base URL, user agent, remember)
  nobitex auth login            Log in and show the issued key (masked)
  nobitex market <cmd>          Public market data
  nobitex wallets               Wallet balances
  nobitex orders <cmd>          Order history and cancellation

Credentials come from options or NOBITEX_* environment variables and are
never written to disk.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install nobitex[cli]")

from nobitex.client import AsyncNobitex
from nobitex.errors import APIError, NobitexError

console = Console()
CONFIG_FILE = Path.home() / ".nobitex" / "config.json"
CONFIG_KEYS = ("base_url", "user_agent", "remember")


def setup_logging(verbose: bool = False) -> None:
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client(ctx: click.Context, authenticated: bool = False) -> AsyncNobitex:
    opts: dict[str, Any] = ctx.find_root().obj
    cfg = _load_config()
    if authenticated and not opts.get("api_key") and not (opts.get("username") and opts.get("password")):
        console.print("[red]No credentials. Set NOBITEX_API_KEY or NOBITEX_USERNAME/NOBITEX_PASSWORD.[/red]")
        raise SystemExit(1)
    return AsyncNobitex(
        username=opts.get("username"),
        password=opts.get("password"),
        otp_secret=opts.get("otp_secret"),
        api_key=opts.get("api_key"),
        user_agent=opts.get("user_agent") or cfg.get("user_agent"),
        remember=cfg.get("remember", ""),
        base_url=opts.get("base_url") or cfg.get("base_url") or "https://apiv2.nobitex.ir",
        auto_auth=authenticated,
    )


def _run(coro):
    try:
        return asyncio.run(coro)
    except APIError as e:
        console.print(f"[red]API error {e.status_code}: {e.message}[/red]")
        raise SystemExit(1)
    except NobitexError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


def _echo_json(model: Any) -> None:
    click.echo(model.model_dump_json(indent=2, by_alias=True))


@click.group()
@click.version_option("0.1.0")
@click.option("--username", envvar="NOBITEX_USERNAME", default=None)
@click.option("--password", envvar="NOBITEX_PASSWORD", default=None)
@click.option("--otp-secret", envvar="NOBITEX_OTP_SECRET", default=None)
@click.option("--api-key", envvar="NOBITEX_API_KEY", default=None)
@click.option("--user-agent", envvar="NOBITEX_USER_AGENT", default=None)
@click.option("--base-url", envvar="NOBITEX_BASE_URL", default=None)
@click.option("-v", "--verbose", is_flag=True)
@click.pass_context
def main(ctx, username, password, otp_secret, api_key, user_agent, base_url, verbose):
    """Nobitex CLI — market data and account access."""
    setup_logging(verbose)
    ctx.obj = {
        "username": username,
        "password": password,
        "otp_secret": otp_secret,
        "api_key": api_key,
        "user_agent": user_agent,
        "base_url": base_url,
    }


@main.group("config")
def config():
    """Saved, non-secret settings."""


@config.command("show")
def config_show():
    cfg = _load_config()
    if not cfg:
        console.print("[yellow]No settings saved.[/yellow]")
        return
    for key in CONFIG_KEYS:
        if key in cfg:
            console.print(f"{key} = {cfg[key]!r}")


@config.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
def config_set(key: str, value: str):
    """Save a setting to ~/.nobitex/config.json."""
    if key == "remember" and value not in ("yes", "no", ""):
        raise click.BadParameter("remember must be 'yes', 'no' or ''", param_hint="value")
    cfg = _load_config()
    _save_config({**cfg, key: value})
    console.print(f"[green]{key} saved.[/green]")


# Register subcommands from separate modules
from nobitex.cli.auth import auth
from nobitex.cli.market import market
from nobitex.cli.account import orders, wallets

main.add_command(auth)
main.add_command(market)
main.add_command(wallets)
main.add_command(orders)


if __name__ == "__main__":
    main()
