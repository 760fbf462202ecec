"""Prompt commands for CoinPrompt CLI.

Fetches market data for one or more coins and prints the rendered
prompt text on stdout.
"""

import asyncio
import logging
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from coinprompt.config import ConfigError, Settings, load_settings
from coinprompt.log import setup_logging
from coinprompt.models import InstrumentSnapshot
from coinprompt.pipeline import build_report, fetch_snapshot, validate_coins
from coinprompt.prompt import render_report, render_snapshot

console = Console(stderr=True)


def _error_panel(message: str, title: str = "Error") -> None:
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def _load_settings(ctx: click.Context) -> Settings:
    """Load settings and configure logging for a command."""
    obj = ctx.ensure_object(dict)

    try:
        settings = load_settings(obj.get("config_path"))
    except ConfigError as e:
        _error_panel(f"[red]Invalid configuration:[/red]\n\n{e}")
        raise SystemExit(1)

    verbose = obj.get("verbose", 0)
    if verbose >= 2:
        setup_logging(logging.DEBUG)
    elif verbose == 1:
        setup_logging(logging.INFO)
    else:
        setup_logging(settings.log_level)

    return settings


def create_exchange(settings: Settings):
    """Create the market data source described by the settings."""
    from coinprompt.exchanges import CcxtExchange

    return CcxtExchange(
        exchange_id=settings.exchange_id,
        quote=settings.quote,
        enable_rate_limit=settings.rate_limit,
    )


async def _generate_report(settings: Settings, coins: list[str]) -> str:
    async with create_exchange(settings) as exchange:
        snapshots = await build_report(exchange, coins, settings)
    return render_report(snapshots)


async def _fetch_coin(settings: Settings, coin: str) -> Optional[InstrumentSnapshot]:
    async with create_exchange(settings) as exchange:
        return await fetch_snapshot(exchange, coin, settings)


@click.command()
@click.argument("coins", nargs=-1)
@click.pass_context
def prompt(ctx: click.Context, coins: tuple[str, ...]) -> None:
    """Generate the full prompt for several coins.

    COINS are base currencies (e.g., BTC ETH SOL). Without arguments the
    configured coin list is used.

    \b
    Examples:
      coinprompt prompt                # BTC ETH SOL BNB XRP DOGE
      coinprompt prompt btc eth        # Custom coins
      coinprompt -v prompt > out.txt   # Progress on stderr
    """
    settings = _load_settings(ctx)

    try:
        coin_list = validate_coins(list(coins) if coins else list(settings.coins))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="COINS")

    try:
        text = asyncio.run(_generate_report(settings, coin_list))
    except Exception as e:
        _error_panel(f"[red]Failed to generate prompt:[/red]\n\n{str(e)}")
        raise SystemExit(1)

    click.echo(text, nl=False)


@click.command()
@click.argument("symbol")
@click.pass_context
def coin(ctx: click.Context, symbol: str) -> None:
    """Generate the prompt section for a single coin.

    SYMBOL is the base currency (e.g., BTC, ETH, SOL).

    \b
    Examples:
      coinprompt coin BTC
      coinprompt coin doge
    """
    settings = _load_settings(ctx)

    try:
        (coin_name,) = validate_coins([symbol])
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="SYMBOL")

    try:
        snapshot = asyncio.run(_fetch_coin(settings, coin_name))
    except Exception as e:
        _error_panel(f"[red]Failed to fetch coin data:[/red]\n\n{str(e)}")
        raise SystemExit(1)

    if snapshot is None:
        _error_panel(
            f"[yellow]Unable to fetch data for {coin_name}[/yellow]",
            title="Coin not found",
        )
        raise SystemExit(1)

    click.echo(render_snapshot(snapshot), nl=False)
