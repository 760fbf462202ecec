"""Technical indicators module."""

from coinprompt.indicators.technical import (
    calculate_atr,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
)

__all__ = [
    "calculate_atr",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
]
