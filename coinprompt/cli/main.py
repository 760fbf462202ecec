"""Main CLI entry point for CoinPrompt.

Subcommand modules are imported on first use, so ``--help`` and
``--version`` never pay for importing ccxt.
"""

import importlib
from pathlib import Path
from typing import Optional

import click

from coinprompt import __version__


class LazyGroup(click.Group):
    """Click group resolving subcommands from ``{name: module}``."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self._lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self._lazy_subcommands:
            # each module exposes the command under its own name
            module = importlib.import_module(self._lazy_subcommands[cmd_name])
            command = getattr(module, cmd_name)
            self.add_command(command)
        return command


# Subcommand name -> defining module
LAZY_SUBCOMMANDS = {
    "prompt": "coinprompt.cli.prompt",
    "coin": "coinprompt.cli.prompt",
    "init": "coinprompt.cli.configure",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="coinprompt")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/coinprompt/config.toml)",
)
@click.option("-v", "--verbose", count=True, help="Log progress (-v) or debug details (-vv) to stderr")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: int) -> None:
    """CoinPrompt - crypto market snapshots for LLM trading prompts.

    Fetches intraday and 4-hour candles, funding rates and open interest
    for each coin and renders them with EMA, MACD, RSI and ATR readings.

    \b
    Quick Start:
      coinprompt prompt              # Default coins
      coinprompt prompt BTC ETH      # Custom coins
      coinprompt coin SOL            # Single coin section
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
