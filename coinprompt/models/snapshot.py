"""Per-instrument snapshot model."""

from typing import Optional

from pydantic import BaseModel, Field

from coinprompt.models.candle import Candle


class InstrumentSnapshot(BaseModel):
    """Aggregated intraday and long-term view of one instrument.

    Indicator windows hold the most recent points of the full series,
    oldest first. ``None`` marks a value that is undefined because the
    source series was too short.
    """

    coin: str = Field(..., description="Instrument identifier, e.g. BTC")
    intraday_timeframe: str = Field("3m", description="Intraday candle timeframe")
    longterm_timeframe: str = Field("4h", description="Long-term candle timeframe")
    intraday_candles: list[Candle] = Field(..., description="Intraday candles, oldest first")
    longterm_candles: list[Candle] = Field(..., description="Long-term candles, oldest first")

    # Intraday
    current_price: float = Field(..., description="Last intraday close")
    mid_prices: list[float] = Field(..., description="Recent intraday closes")
    intraday_ema20: list[Optional[float]] = Field(..., description="Recent 20-period EMA")
    intraday_macd: list[Optional[float]] = Field(..., description="Recent MACD line")
    intraday_rsi7: list[Optional[float]] = Field(..., description="Recent 7-period RSI")
    intraday_rsi14: list[Optional[float]] = Field(..., description="Recent 14-period RSI")
    current_ema20: Optional[float] = None
    current_macd: Optional[float] = None
    current_rsi7: Optional[float] = None

    # Long-term
    longterm_ema20: Optional[float] = None
    longterm_ema50: Optional[float] = None
    longterm_atr3: Optional[float] = None
    longterm_atr14: Optional[float] = None
    longterm_macd: list[Optional[float]] = Field(..., description="Recent long-term MACD line")
    longterm_rsi14: list[Optional[float]] = Field(..., description="Recent long-term 14-period RSI")
    current_volume: float = Field(..., description="Volume of the last long-term candle")
    average_volume: float = Field(..., description="Mean volume across long-term candles")

    # Derivatives
    funding_rate: Optional[float] = None
    open_interest_latest: Optional[float] = None
    open_interest_average: Optional[float] = None

    model_config = {"frozen": True}
