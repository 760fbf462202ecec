"""Shared fixtures for CoinPrompt tests."""

import asyncio
from typing import Optional

import pytest

from coinprompt.exchanges.base import BaseExchange, FetchError
from coinprompt.models import Candle


def create_test_candles(
    num_candles: int = 100,
    base_price: float = 100.0,
    start_ts: int = 1_700_000_000_000,
    step_ms: int = 180_000,
) -> list[Candle]:
    """Create candles with a repeating zig-zag so gains and losses both occur."""
    candles = []

    for i in range(num_candles):
        variation = (i % 10) - 5
        price = base_price + variation + i * 0.1

        candles.append(Candle(
            timestamp=start_ts + i * step_ms,
            open=price,
            high=price + 3.0,
            low=price - 2.0,
            close=price + 1.0,
            volume=1000.0 + i * 10,
        ))

    return candles


class FakeExchange(BaseExchange):
    """In-memory exchange.

    ``failures`` maps a (method, coin) pair to the exception to raise;
    ``delays`` maps a coin to seconds to sleep before answering.
    """

    def __init__(
        self,
        intraday: Optional[dict[str, list[Candle]]] = None,
        longterm: Optional[dict[str, list[Candle]]] = None,
        funding: Optional[dict[str, Optional[float]]] = None,
        open_interest: Optional[dict[str, Optional[float]]] = None,
        open_interest_history: Optional[dict[str, list[float]]] = None,
        failures: Optional[dict[tuple[str, str], Exception]] = None,
        delays: Optional[dict[str, float]] = None,
    ):
        super().__init__(quote="USDT")
        self.intraday = intraday or {}
        self.longterm = longterm or {}
        self.funding = funding or {}
        self.open_interest = open_interest or {}
        self.open_interest_history = open_interest_history or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    @staticmethod
    def _coin(symbol: str) -> str:
        return symbol.split("/")[0]

    async def _answer(self, method: str, symbol: str, table: dict, default=None):
        coin = self._coin(symbol)
        self.calls.append((method, symbol))
        await asyncio.sleep(self.delays.get(coin, 0))
        if (method, coin) in self.failures:
            raise self.failures[(method, coin)]
        if coin not in table:
            raise FetchError(symbol, f"{method}: unknown symbol")
        return table.get(coin, default)

    async def fetch_candles(self, symbol, timeframe, limit):
        table = self.longterm if timeframe == "4h" else self.intraday
        candles = await self._answer(f"candles_{timeframe}", symbol, table)
        return candles[-limit:]

    async def fetch_funding_rate(self, symbol):
        return await self._answer("funding", symbol, self.funding)

    async def fetch_open_interest(self, symbol):
        return await self._answer("open_interest", symbol, self.open_interest)

    async def fetch_open_interest_history(self, symbol, timeframe, limit):
        history = await self._answer("open_interest_history", symbol, self.open_interest_history)
        return history[-limit:]

    async def close(self):
        self.closed = True


def make_exchange(coins: list[str], **kwargs) -> FakeExchange:
    """FakeExchange with complete data for every coin in `coins`."""
    data = {
        "intraday": {c: create_test_candles(100, base_price=100.0 + n) for n, c in enumerate(coins)},
        "longterm": {
            c: create_test_candles(100, base_price=200.0 + n, step_ms=14_400_000)
            for n, c in enumerate(coins)
        },
        "funding": {c: 0.0001 for c in coins},
        "open_interest": {c: 15.0 for c in coins},
        "open_interest_history": {c: [10.0, 20.0, 30.0] for c in coins},
    }
    data.update(kwargs)
    return FakeExchange(**data)


@pytest.fixture
def candles():
    """Factory fixture for test candles."""
    return create_test_candles


@pytest.fixture
def exchange_factory():
    """Factory fixture for fake exchanges."""
    return make_exchange
