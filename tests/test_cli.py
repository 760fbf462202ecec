"""Tests for the command line interface."""

from unittest.mock import patch

import click
import pytest
import toml
from click.testing import CliRunner

from coinprompt import __version__
from coinprompt.cli import cli
from coinprompt.config import DEFAULT_COINS
from coinprompt.exchanges.base import FetchError
from coinprompt.prompt import PROMPT_HEADER

from conftest import make_exchange


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    """Config location that does not exist yet, so defaults apply."""
    return tmp_path / "config.toml"


def invoke(runner, config_path, *args):
    return runner.invoke(cli, ["--config", str(config_path), *args])


class TestPromptCommand:

    def test_default_coins(self, runner, config_path):
        exchange = make_exchange(list(DEFAULT_COINS))

        with patch("coinprompt.cli.prompt.create_exchange", return_value=exchange):
            result = invoke(runner, config_path, "prompt")

        assert result.exit_code == 0, result.output
        assert result.output.startswith(PROMPT_HEADER)
        positions = [result.output.index(f"ALL {coin} DATA") for coin in DEFAULT_COINS]
        assert positions == sorted(positions)
        assert exchange.closed

    def test_custom_coins_are_normalised(self, runner, config_path):
        exchange = make_exchange(["ETH", "BTC"])

        with patch("coinprompt.cli.prompt.create_exchange", return_value=exchange):
            result = invoke(runner, config_path, "prompt", "eth", "btc")

        assert result.exit_code == 0, result.output
        assert result.output.index("ALL ETH DATA") < result.output.index("ALL BTC DATA")
        assert "ALL SOL DATA" not in result.output

    def test_coins_from_config(self, runner, config_path):
        config_path.write_text('[report]\ncoins = ["SOL"]\n')
        exchange = make_exchange(["SOL"])

        with patch("coinprompt.cli.prompt.create_exchange", return_value=exchange):
            result = invoke(runner, config_path, "prompt")

        assert result.exit_code == 0, result.output
        assert "ALL SOL DATA" in result.output
        assert "ALL BTC DATA" not in result.output

    def test_failed_coin_is_left_out(self, runner, config_path):
        exchange = make_exchange(
            ["BTC", "ETH"],
            failures={("candles_3m", "ETH"): FetchError("ETH/USDT", "boom")},
        )

        with patch("coinprompt.cli.prompt.create_exchange", return_value=exchange):
            result = invoke(runner, config_path, "prompt", "BTC", "ETH")

        assert result.exit_code == 0, result.output
        assert "ALL BTC DATA" in result.output
        assert "ALL ETH DATA" not in result.output

    def test_blank_coin_is_rejected(self, runner, config_path):
        result = invoke(runner, config_path, "prompt", "BTC", " ")

        assert result.exit_code == 2

    def test_unexpected_error_exits_with_failure(self, runner, config_path):
        exchange = make_exchange(
            ["BTC"],
            failures={("funding", "BTC"): RuntimeError("bug")},
        )

        with patch("coinprompt.cli.prompt.create_exchange", return_value=exchange):
            result = invoke(runner, config_path, "prompt", "BTC")

        assert result.exit_code == 1
        assert PROMPT_HEADER not in result.output

    def test_invalid_config(self, runner, config_path):
        config_path.write_text("[exchange\n")

        result = invoke(runner, config_path, "prompt")

        assert result.exit_code == 1


class TestCoinCommand:

    def test_single_coin_section(self, runner, config_path):
        exchange = make_exchange(["DOGE"])

        with patch("coinprompt.cli.prompt.create_exchange", return_value=exchange):
            result = invoke(runner, config_path, "coin", "doge")

        assert result.exit_code == 0, result.output
        assert result.output.startswith("ALL DOGE DATA")
        assert PROMPT_HEADER not in result.output

    def test_unknown_coin(self, runner, config_path):
        exchange = make_exchange(["BTC"])

        with patch("coinprompt.cli.prompt.create_exchange", return_value=exchange):
            result = invoke(runner, config_path, "coin", "NOPE")

        assert result.exit_code == 1
        assert "Unable to fetch data for NOPE" in result.output


class TestInitCommand:

    def test_writes_template(self, runner, config_path):
        result = invoke(runner, config_path, "init")

        assert result.exit_code == 0, result.output
        assert toml.load(config_path)["report"]["coins"] == list(DEFAULT_COINS)

    def test_keeps_existing_file(self, runner, config_path):
        config_path.write_text('[report]\ncoins = ["SOL"]\n')

        result = invoke(runner, config_path, "init")

        assert result.exit_code == 0
        assert toml.load(config_path)["report"]["coins"] == ["SOL"]

    def test_force_overwrites(self, runner, config_path):
        config_path.write_text('[report]\ncoins = ["SOL"]\n')

        result = invoke(runner, config_path, "init", "--force")

        assert result.exit_code == 0
        assert toml.load(config_path)["report"]["coins"] == list(DEFAULT_COINS)


class TestGroup:

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_commands_listed(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("prompt", "coin", "init"):
            assert name in result.output

    def test_subcommands_resolve_to_their_modules(self):
        ctx = click.Context(cli)

        assert cli.list_commands(ctx) == ["coin", "init", "prompt"]
        assert cli.get_command(ctx, "coin").callback.__module__ == "coinprompt.cli.prompt"
        assert cli.get_command(ctx, "init").callback.__module__ == "coinprompt.cli.configure"
        assert cli.get_command(ctx, "nope") is None

    def test_unknown_command(self, runner):
        result = runner.invoke(cli, ["nope"])

        assert result.exit_code == 2
