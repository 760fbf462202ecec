"""Base exchange interface for CoinPrompt."""

from abc import ABC, abstractmethod
from typing import Optional

from coinprompt.models import Candle


class FetchError(Exception):
    """Raised when market data cannot be fetched from an exchange."""

    def __init__(self, symbol: str, message: str):
        super().__init__(f"{symbol}: {message}")
        self.symbol = symbol


class BaseExchange(ABC):
    """Abstract base class for market data sources.

    Implementations must raise :class:`FetchError` for any network or
    exchange API failure so callers can degrade the affected field
    without catching unrelated errors.

    Instances are async context managers and close their underlying
    connections on exit.
    """

    def __init__(self, quote: str = "USDT"):
        self.quote = quote

    def spot_symbol(self, coin: str) -> str:
        """Unified spot symbol for a coin, e.g. ``BTC/USDT``."""
        return f"{coin}/{self.quote}"

    def perp_symbol(self, coin: str) -> str:
        """Unified linear perpetual symbol for a coin, e.g. ``BTC/USDT:USDT``."""
        return f"{coin}/{self.quote}:{self.quote}"

    @abstractmethod
    async def fetch_candles(self, symbol: str, timeframe: str, limit: int) -> list[Candle]:
        """Get recent OHLCV candles.

        Args:
            symbol: Unified market symbol.
            timeframe: Candle timeframe (3m, 1h, 4h, ...).
            limit: Maximum number of candles.

        Returns:
            Candles ordered oldest first, at most `limit` of them.

        Raises:
            FetchError: If the candles cannot be fetched.
        """
        pass

    @abstractmethod
    async def fetch_funding_rate(self, symbol: str) -> Optional[float]:
        """Get the current funding rate of a perpetual contract.

        Returns:
            Funding rate, or None if the exchange reports none.

        Raises:
            FetchError: If the request fails.
        """
        pass

    @abstractmethod
    async def fetch_open_interest(self, symbol: str) -> Optional[float]:
        """Get the latest open interest (base currency amount).

        Returns:
            Open interest, or None if the exchange reports none.

        Raises:
            FetchError: If the request fails.
        """
        pass

    @abstractmethod
    async def fetch_open_interest_history(
        self,
        symbol: str,
        timeframe: str,
        limit: int,
    ) -> list[float]:
        """Get historical open interest amounts, oldest first.

        Raises:
            FetchError: If the request fails.
        """
        pass

    async def close(self) -> None:
        """Release network resources."""

    async def __aenter__(self) -> "BaseExchange":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
