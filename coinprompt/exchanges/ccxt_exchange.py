"""ccxt-backed exchange implementation."""

import logging
from typing import Any, Optional

import ccxt.async_support as ccxt_async
from pydantic import ValidationError

from coinprompt.exchanges.base import BaseExchange, FetchError
from coinprompt.models import Candle

logger = logging.getLogger(__name__)


class CcxtExchange(BaseExchange):
    """Market data from any ccxt exchange with unified spot and swap markets.

    Candles come from the spot market, funding and open interest from the
    linear perpetual of the same coin.
    """

    DEFAULT_EXCHANGE = "binance"

    def __init__(
        self,
        exchange_id: str = DEFAULT_EXCHANGE,
        quote: str = "USDT",
        enable_rate_limit: bool = True,
        client: Optional[Any] = None,
    ):
        """Initialize the exchange.

        Args:
            exchange_id: ccxt exchange id (binance, bybit, okx, ...).
            quote: Quote currency used to build symbols.
            enable_rate_limit: Let ccxt throttle requests.
            client: Pre-built ccxt async client, mainly for tests.

        Raises:
            ValueError: If `exchange_id` is not a ccxt exchange.
        """
        super().__init__(quote=quote)
        self.exchange_id = exchange_id

        if client is None:
            exchange_class = getattr(ccxt_async, exchange_id, None)
            if exchange_class is None:
                raise ValueError(f"Unknown ccxt exchange: {exchange_id}")
            client = exchange_class({"enableRateLimit": enable_rate_limit})

        self._client = client

    async def fetch_candles(self, symbol: str, timeframe: str, limit: int) -> list[Candle]:
        try:
            ohlcv = await self._client.fetch_ohlcv(symbol, timeframe, None, limit)
            return [Candle.from_ohlcv(row) for row in ohlcv]
        except ccxt_async.BaseError as e:
            raise FetchError(symbol, f"candles ({timeframe}): {e}") from e
        except (ValidationError, ValueError, TypeError) as e:
            raise FetchError(symbol, f"malformed candles ({timeframe}): {e}") from e

    async def fetch_funding_rate(self, symbol: str) -> Optional[float]:
        try:
            funding = await self._client.fetch_funding_rate(symbol)
        except ccxt_async.BaseError as e:
            raise FetchError(symbol, f"funding rate: {e}") from e

        return funding.get("fundingRate")

    async def fetch_open_interest(self, symbol: str) -> Optional[float]:
        try:
            open_interest = await self._client.fetch_open_interest(symbol)
        except ccxt_async.BaseError as e:
            raise FetchError(symbol, f"open interest: {e}") from e

        return open_interest.get("openInterestAmount")

    async def fetch_open_interest_history(
        self,
        symbol: str,
        timeframe: str,
        limit: int,
    ) -> list[float]:
        try:
            history = await self._client.fetch_open_interest_history(symbol, timeframe, None, limit)
        except ccxt_async.BaseError as e:
            raise FetchError(symbol, f"open interest history ({timeframe}): {e}") from e

        return [item.get("openInterestAmount") or 0.0 for item in history or []]

    async def close(self) -> None:
        logger.debug("Closing %s client", self.exchange_id)
        await self._client.close()
