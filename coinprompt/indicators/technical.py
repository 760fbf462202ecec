"""Technical indicator calculations for market snapshots.

This module provides the indicators rendered into coin prompts: EMA,
MACD, RSI and ATR. Every function takes plain lists (oldest value first)
and returns a new list of the same length. Positions inside the warm-up
window are ``None``.

Division follows IEEE 754: a zero denominator yields ``inf`` or ``nan``
instead of raising, and those values flow through to the caller
unchanged.
"""

import math
from typing import Optional


def _divide(numerator: float, denominator: float) -> float:
    """Divide two floats, returning inf/nan on a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _absent(length: int) -> list[Optional[float]]:
    return [None] * length


def _rsi_from_rs(rs: float) -> float:
    return 100 - _divide(100, 1 + rs)


def calculate_ema(prices: list[float], period: int) -> list[Optional[float]]:
    """Calculate Exponential Moving Average.

    The first EMA equals the first price (no SMA seed), so once the series
    is long enough every position carries a value.

    Args:
        prices: List of price values
        period: Number of periods for the EMA

    Returns:
        List of EMA values. All ``None`` when fewer than `period` prices.
    """
    if len(prices) < period or period < 1:
        return _absent(len(prices))

    multiplier = 2 / (period + 1)
    result = [prices[0]]

    for i in range(1, len(prices)):
        result.append(prices[i] * multiplier + result[-1] * (1 - multiplier))

    return result


def calculate_macd(
    prices: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9
) -> list[Optional[float]]:
    """Calculate the MACD line (fast EMA minus slow EMA).

    Args:
        prices: List of price values
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal line period. Accepted for call compatibility; the
            signal line is not computed.

    Returns:
        MACD line, ``None`` wherever either EMA is undefined.
    """
    fast_ema = calculate_ema(prices, fast)
    slow_ema = calculate_ema(prices, slow)

    return [
        None if f is None or s is None else f - s
        for f, s in zip(fast_ema, slow_ema)
    ]


def calculate_rsi(prices: list[float], period: int = 14) -> list[Optional[float]]:
    """Calculate Relative Strength Index.

    Seeds with the simple average of the first `period` gains and losses,
    then applies Wilder's recurrence. The previous averages are not carried
    forward: the previous average loss is taken as the previous raw loss
    and the previous average gain is rebuilt from the previous RSI
    (``prev_loss * (100 - prev_rsi) / prev_rsi``). Output after the seed
    therefore differs from textbook Wilder RSI.

    Zero average loss gives RS = inf and RSI = 100; a flat window gives
    NaN, which then propagates.

    Args:
        prices: List of price values (typically close prices)
        period: RSI period (default 14)

    Returns:
        List of RSI values (0-100). First `period` values are ``None``;
        all ``None`` when there are `period` prices or fewer.
    """
    if len(prices) < period + 1 or period < 1:
        return _absent(len(prices))

    changes = [prices[i] - prices[i - 1] for i in range(1, len(prices))]
    gains = [c if c > 0 else 0.0 for c in changes]
    losses = [-c if c < 0 else 0.0 for c in changes]

    rsi: list[Optional[float]] = _absent(period - 1)

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    rsi.append(_rsi_from_rs(_divide(avg_gain, avg_loss)))

    for i in range(period, len(changes)):
        prev_rs = _divide(100 - rsi[i - 1], rsi[i - 1])
        prev_avg_loss = losses[i - 1]
        prev_avg_gain = prev_rs * prev_avg_loss

        avg_gain = (prev_avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (prev_avg_loss * (period - 1) + losses[i]) / period
        rsi.append(_rsi_from_rs(_divide(avg_gain, avg_loss)))

    # Realign the differenced series with the price series
    return [None] + rsi


def calculate_atr(
    high: list[float],
    low: list[float],
    close: list[float],
    period: int = 14
) -> list[Optional[float]]:
    """Calculate Average True Range.

    Args:
        high: List of high prices
        low: List of low prices
        close: List of close prices
        period: ATR period (default 14)

    Returns:
        List of ATR values. First (period-1) values are ``None``.
    """
    n = len(close)
    if len(high) != n or len(low) != n or period < 1:
        return _absent(n)
    if n == 0:
        return []

    # First TR is just high - low
    true_ranges = [high[0] - low[0]]

    for i in range(1, n):
        tr = max(
            high[i] - low[i],
            abs(high[i] - close[i - 1]),
            abs(low[i] - close[i - 1])
        )
        true_ranges.append(tr)

    result: list[Optional[float]] = _absent(min(period - 1, n))
    if n < period:
        return result

    # First ATR is SMA of first `period` true ranges
    result.append(sum(true_ranges[:period]) / period)

    # Subsequent ATRs using Wilder's smoothing
    for i in range(period, n):
        result.append((result[-1] * (period - 1) + true_ranges[i]) / period)

    return result
