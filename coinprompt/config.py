"""Configuration loading for CoinPrompt.

Settings live in a TOML file (``~/.config/coinprompt/config.toml`` by
default, or the path in ``COINPROMPT_CONFIG``). Every key is optional.
"""

import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field

CONFIG_DIR = Path.home() / ".config" / "coinprompt"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
CONFIG_ENV_VAR = "COINPROMPT_CONFIG"

DEFAULT_COINS = ("BTC", "ETH", "SOL", "BNB", "XRP", "DOGE")


class ConfigError(Exception):
    """Raised when the configuration file cannot be read."""


class Settings(BaseModel):
    """Runtime settings for fetching and rendering snapshots."""

    exchange_id: str = Field("binance", description="ccxt exchange id")
    quote: str = Field("USDT", description="Quote currency")
    rate_limit: bool = Field(True, description="Enable ccxt rate limiting")

    intraday_timeframe: str = "3m"
    intraday_limit: int = Field(100, ge=1)
    longterm_timeframe: str = "4h"
    longterm_limit: int = Field(100, ge=1)
    open_interest_timeframe: str = "1h"
    open_interest_limit: int = Field(50, ge=1)

    coins: tuple[str, ...] = DEFAULT_COINS
    log_level: str = "WARNING"

    model_config = {"frozen": True}


def get_config_path(config_path: Optional[Path] = None) -> Path:
    """Resolve the configuration file path."""
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load the raw configuration dictionary.

    Returns:
        Parsed TOML, or an empty dict when the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    path = get_config_path(config_path)

    if not path.exists():
        return {}

    try:
        return toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings, falling back to defaults for missing keys."""
    config = load_config(config_path)

    exchange = config.get("exchange", {})
    intraday = config.get("intraday", {})
    longterm = config.get("longterm", {})
    open_interest = config.get("open_interest", {})

    values = {
        "exchange_id": exchange.get("id"),
        "quote": exchange.get("quote"),
        "rate_limit": exchange.get("rate_limit"),
        "intraday_timeframe": intraday.get("timeframe"),
        "intraday_limit": intraday.get("limit"),
        "longterm_timeframe": longterm.get("timeframe"),
        "longterm_limit": longterm.get("limit"),
        "open_interest_timeframe": open_interest.get("timeframe"),
        "open_interest_limit": open_interest.get("limit"),
        "coins": config.get("report", {}).get("coins"),
        "log_level": config.get("logging", {}).get("level"),
    }

    return Settings(**{key: value for key, value in values.items() if value is not None})


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file with the default settings."""
    path = get_config_path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    defaults = Settings()
    template = {
        "exchange": {
            "id": defaults.exchange_id,
            "quote": defaults.quote,
            "rate_limit": defaults.rate_limit,
        },
        "intraday": {
            "timeframe": defaults.intraday_timeframe,
            "limit": defaults.intraday_limit,
        },
        "longterm": {
            "timeframe": defaults.longterm_timeframe,
            "limit": defaults.longterm_limit,
        },
        "open_interest": {
            "timeframe": defaults.open_interest_timeframe,
            "limit": defaults.open_interest_limit,
        },
        "report": {
            "coins": list(defaults.coins),
        },
        "logging": {
            "level": defaults.log_level,
        },
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path
