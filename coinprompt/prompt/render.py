"""Prompt text rendering for instrument snapshots.

Numbers are formatted the way JavaScript's ``toPrecision``, ``toFixed``
and ``JSON.stringify`` print them.
"""

import math
import re
from decimal import Decimal
from typing import Optional

from coinprompt.models import InstrumentSnapshot

PROMPT_HEADER = """ALL OF THE PRICE OR SIGNAL DATA BELOW IS ORDERED: OLDEST → NEWEST

Timeframes note: Unless stated otherwise in a section title, intraday series are provided at 3-minute intervals. If a coin uses a different interval, it is explicitly stated in that coin's section.
CURRENT MARKET STATE FOR ALL COINS

"""

MISSING = "N/A"

_TIMEFRAME_UNITS = {
    "s": "second",
    "m": "minute",
    "h": "hour",
    "d": "day",
    "w": "week",
    "M": "month",
}


def _non_finite(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def to_precision(value: float, digits: int) -> str:
    """Format like JavaScript ``Number.prototype.toPrecision``."""
    if not math.isfinite(value):
        return _non_finite(value)

    mantissa, exponent = f"{value:.{digits - 1}e}".split("e")
    exponent = int(exponent)

    if exponent < -6 or exponent >= digits:
        sign = "+" if exponent >= 0 else "-"
        return f"{mantissa}e{sign}{abs(exponent)}"

    return f"{value:.{max(digits - 1 - exponent, 0)}f}"


def to_fixed(value: float, digits: int) -> str:
    """Format like JavaScript ``Number.prototype.toFixed``."""
    if not math.isfinite(value):
        return _non_finite(value)
    if abs(value) >= 1e21:
        return js_number(value)
    if value == 0:
        value = 0.0
    return f"{value:.{digits}f}"


def js_number(value: float) -> str:
    """Shortest round-trip text of a number, as JavaScript prints it."""
    if not math.isfinite(value):
        return _non_finite(value)
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    # value == 0.<digits> * 10**n
    n = k + exponent
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{prefix}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def json_array(values: list[Optional[float]], digits: int) -> str:
    """Render values rounded to `digits` significant digits as a JSON array.

    Absent and non-finite values become ``null``.
    """
    items = []
    for value in values:
        if value is None or not math.isfinite(value):
            items.append("null")
        else:
            items.append(js_number(float(to_precision(value, digits))))
    return "[" + ",".join(items) + "]"


def describe_timeframe(timeframe: str) -> str:
    """Turn a timeframe code into prose, e.g. ``3m`` -> ``3-minute``."""
    match = re.fullmatch(r"(\d+)([smhdwM])", timeframe)
    if not match:
        return timeframe
    return f"{match.group(1)}-{_TIMEFRAME_UNITS[match.group(2)]}"


def _precision(value: Optional[float], digits: int) -> str:
    return MISSING if value is None else to_precision(value, digits)


def _fixed(value: Optional[float], digits: int) -> str:
    return MISSING if value is None else to_fixed(value, digits)


def render_snapshot(snapshot: InstrumentSnapshot) -> str:
    """Render one coin's section of the prompt."""
    coin = snapshot.coin

    oi_info = ""
    if snapshot.open_interest_latest is not None and snapshot.open_interest_average is not None:
        oi_info = (
            f"Open Interest: Latest: {to_fixed(snapshot.open_interest_latest, 2)} "
            f"Average: {to_fixed(snapshot.open_interest_average, 2)}\n"
        )

    funding_info = ""
    if snapshot.funding_rate is not None:
        funding_info = f"Funding Rate: {js_number(snapshot.funding_rate)}"

    intraday = describe_timeframe(snapshot.intraday_timeframe)
    longterm = describe_timeframe(snapshot.longterm_timeframe)

    return (
        f"ALL {coin} DATA\n"
        f"current_price = {to_precision(snapshot.current_price, 5)}, "
        f"current_ema20 = {_precision(snapshot.current_ema20, 5)}, "
        f"current_macd = {_fixed(snapshot.current_macd, 3)}, "
        f"current_rsi (7 period) = {_fixed(snapshot.current_rsi7, 3)}\n"
        f"In addition, here is the latest {coin} open interest and funding rate "
        f"for perps (the instrument you are trading):\n"
        f"{oi_info}{funding_info}\n"
        f"Intraday series ({intraday} intervals, oldest → latest):\n"
        f"Mid prices: {json_array(snapshot.mid_prices, 5)}\n"
        f"EMA indicators (20-period): {json_array(snapshot.intraday_ema20, 3)}\n"
        f"MACD indicators: {json_array(snapshot.intraday_macd, 3)}\n"
        f"RSI indicators (7-Period): {json_array(snapshot.intraday_rsi7, 3)}\n"
        f"RSI indicators (14-Period): {json_array(snapshot.intraday_rsi14, 3)}\n"
        f"Longer-term context ({longterm} timeframe):\n"
        f"20-Period EMA: {_fixed(snapshot.longterm_ema20, 3)} "
        f"vs. 50-Period EMA: {_fixed(snapshot.longterm_ema50, 3)}\n"
        f"3-Period ATR: {_fixed(snapshot.longterm_atr3, 3)} "
        f"vs. 14-Period ATR: {_fixed(snapshot.longterm_atr14, 3)}\n"
        f"Current Volume: {to_fixed(snapshot.current_volume, 3)} "
        f"vs. Average Volume: {to_fixed(snapshot.average_volume, 3)}\n"
        f"MACD indicators: {json_array(snapshot.longterm_macd, 3)}\n"
        f"RSI indicators (14-Period): {json_array(snapshot.longterm_rsi14, 3)}\n"
    )


def render_report(snapshots: list[InstrumentSnapshot]) -> str:
    """Render the full prompt: header followed by one section per coin."""
    return PROMPT_HEADER + "".join(render_snapshot(s) + "\n" for s in snapshots)
