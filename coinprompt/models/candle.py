"""Candle (OHLCV) data model."""

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """Represents a single OHLCV candle."""

    timestamp: int = Field(..., description="Candle open time in epoch milliseconds")
    open: float = Field(..., ge=0, description="Opening price")
    high: float = Field(..., ge=0, description="High price")
    low: float = Field(..., ge=0, description="Low price")
    close: float = Field(..., ge=0, description="Closing price")
    volume: float = Field(..., ge=0, description="Traded base volume")

    model_config = {"frozen": True}

    @classmethod
    def from_ohlcv(cls, row: list) -> "Candle":
        """Build a candle from an exchange row ``[ts, open, high, low, close, volume]``."""
        timestamp, open_, high, low, close, volume = row[:6]
        return cls(
            timestamp=int(timestamp),
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=volume or 0.0,
        )
