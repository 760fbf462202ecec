"""Data models for CoinPrompt."""

from coinprompt.models.candle import Candle
from coinprompt.models.snapshot import InstrumentSnapshot

__all__ = [
    "Candle",
    "InstrumentSnapshot",
]
