"""CLI commands for CoinPrompt.

This package provides the command-line interface for CoinPrompt,
including prompt generation and configuration commands.
"""

from coinprompt.cli.main import cli, main

__all__ = ["cli", "main"]
