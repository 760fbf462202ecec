"""Exchange implementations for CoinPrompt."""

from coinprompt.exchanges.base import BaseExchange, FetchError
from coinprompt.exchanges.ccxt_exchange import CcxtExchange

__all__ = [
    "BaseExchange",
    "CcxtExchange",
    "FetchError",
]
