"""Instrument snapshot builder.

Combines intraday and long-term candles with funding and open interest
figures into one :class:`InstrumentSnapshot`.
"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from coinprompt.config import Settings
from coinprompt.exchanges.base import BaseExchange, FetchError
from coinprompt.indicators import (
    calculate_atr,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
)
from coinprompt.models import Candle, InstrumentSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Number of most recent points kept for indicator series
RECENT_POINTS = 10


def _tail(values: list, count: int = RECENT_POINTS) -> list:
    return values[-count:]


def _latest(values: list):
    return values[-1] if values else None


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def average_open_interest(
    history: Optional[list[float]],
    latest: Optional[float],
) -> Optional[float]:
    """Average open interest over the history window.

    Falls back to the latest reading when the history is missing or empty.
    """
    if history:
        return _mean(history)
    return latest


def build_snapshot(
    coin: str,
    intraday: Optional[list[Candle]],
    longterm: Optional[list[Candle]],
    funding_rate: Optional[float] = None,
    open_interest_latest: Optional[float] = None,
    open_interest_history: Optional[list[float]] = None,
    *,
    intraday_timeframe: str = "3m",
    longterm_timeframe: str = "4h",
) -> Optional[InstrumentSnapshot]:
    """Run the indicator engine over both timeframes of one instrument.

    Args:
        coin: Instrument identifier.
        intraday: Intraday candles, oldest first.
        longterm: Long-term candles, oldest first.
        funding_rate: Current funding rate, if known.
        open_interest_latest: Latest open interest, if known.
        open_interest_history: Historical open interest, if known.
        intraday_timeframe: Timeframe code of `intraday`.
        longterm_timeframe: Timeframe code of `longterm`.

    Returns:
        The snapshot, or None when either candle sequence is missing.
    """
    if not intraday or not longterm:
        return None

    closes = [c.close for c in intraday]

    ema20 = calculate_ema(closes, 20)
    macd = calculate_macd(closes)
    rsi7 = calculate_rsi(closes, 7)
    rsi14 = calculate_rsi(closes, 14)

    lt_closes = [c.close for c in longterm]
    lt_highs = [c.high for c in longterm]
    lt_lows = [c.low for c in longterm]
    lt_volumes = [c.volume for c in longterm]

    return InstrumentSnapshot(
        coin=coin,
        intraday_timeframe=intraday_timeframe,
        longterm_timeframe=longterm_timeframe,
        intraday_candles=intraday,
        longterm_candles=longterm,
        current_price=closes[-1],
        mid_prices=_tail(closes),
        intraday_ema20=_tail(ema20),
        intraday_macd=_tail(macd),
        intraday_rsi7=_tail(rsi7),
        intraday_rsi14=_tail(rsi14),
        current_ema20=_latest(ema20),
        current_macd=_latest(macd),
        current_rsi7=_latest(rsi7),
        longterm_ema20=_latest(calculate_ema(lt_closes, 20)),
        longterm_ema50=_latest(calculate_ema(lt_closes, 50)),
        longterm_atr3=_latest(calculate_atr(lt_highs, lt_lows, lt_closes, 3)),
        longterm_atr14=_latest(calculate_atr(lt_highs, lt_lows, lt_closes, 14)),
        longterm_macd=_tail(calculate_macd(lt_closes)),
        longterm_rsi14=_tail(calculate_rsi(lt_closes, 14)),
        current_volume=lt_volumes[-1],
        average_volume=_mean(lt_volumes),
        funding_rate=funding_rate,
        open_interest_latest=open_interest_latest,
        open_interest_average=average_open_interest(open_interest_history, open_interest_latest),
    )


async def _settle(request: Awaitable[T], what: str) -> Optional[T]:
    """Await a fetch, turning a FetchError into None."""
    try:
        return await request
    except FetchError as e:
        logger.error("Error fetching %s: %s", what, e)
        return None


async def fetch_snapshot(
    exchange: BaseExchange,
    coin: str,
    settings: Optional[Settings] = None,
) -> Optional[InstrumentSnapshot]:
    """Fetch all market data for one coin and build its snapshot.

    The five requests run concurrently. A failed funding or open interest
    request only blanks its own field; a failed candle request drops the
    whole snapshot.

    Returns:
        The snapshot, or None when required candles are unavailable.
    """
    settings = settings or Settings()
    spot = exchange.spot_symbol(coin)
    perp = exchange.perp_symbol(coin)

    intraday, longterm, funding_rate, oi_latest, oi_history = await asyncio.gather(
        _settle(
            exchange.fetch_candles(spot, settings.intraday_timeframe, settings.intraday_limit),
            f"data for {spot}",
        ),
        _settle(
            exchange.fetch_candles(spot, settings.longterm_timeframe, settings.longterm_limit),
            f"data for {spot}",
        ),
        _settle(exchange.fetch_funding_rate(perp), f"funding rate for {perp}"),
        _settle(exchange.fetch_open_interest(perp), f"open interest for {perp}"),
        _settle(
            exchange.fetch_open_interest_history(
                perp, settings.open_interest_timeframe, settings.open_interest_limit
            ),
            f"open interest history for {perp}",
        ),
    )

    if not intraday or not longterm:
        logger.error("Failed to fetch required data for %s", coin)
        return None

    logger.debug(
        "%s: %d intraday, %d long-term candles, funding=%s, oi=%s, oi history=%s",
        coin,
        len(intraday),
        len(longterm),
        funding_rate,
        oi_latest,
        len(oi_history) if oi_history is not None else None,
    )

    return build_snapshot(
        coin,
        intraday,
        longterm,
        funding_rate=funding_rate,
        open_interest_latest=oi_latest,
        open_interest_history=oi_history,
        intraday_timeframe=settings.intraday_timeframe,
        longterm_timeframe=settings.longterm_timeframe,
    )
