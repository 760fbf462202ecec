"""Multi-instrument report aggregation."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Optional

from coinprompt.config import DEFAULT_COINS, Settings
from coinprompt.exchanges.base import BaseExchange
from coinprompt.models import InstrumentSnapshot
from coinprompt.pipeline.snapshot import fetch_snapshot

logger = logging.getLogger(__name__)


def validate_coins(coins) -> list[str]:
    """Validate a caller supplied coin list.

    Args:
        coins: Sequence of coin identifiers.

    Returns:
        Coins stripped and upper-cased, in the given order.

    Raises:
        ValueError: If `coins` is not a non-empty sequence of non-empty strings.
    """
    if isinstance(coins, (str, bytes)) or not isinstance(coins, Sequence) or not coins:
        raise ValueError("Please provide a non-empty list of coins")

    validated = []
    for coin in coins:
        if not isinstance(coin, str) or not coin.strip():
            raise ValueError(f"Invalid coin: {coin!r}")
        validated.append(coin.strip().upper())

    return validated


async def build_report(
    exchange: BaseExchange,
    coins: Optional[Sequence[str]] = None,
    settings: Optional[Settings] = None,
) -> list[InstrumentSnapshot]:
    """Build snapshots for several coins concurrently.

    Coins whose required data could not be fetched are left out. The
    result keeps the order of `coins`, not the order of completion.

    Args:
        exchange: Market data source.
        coins: Coins to include. Defaults to :data:`DEFAULT_COINS`.
        settings: Fetch settings. Defaults to :class:`Settings` defaults.

    Returns:
        Successful snapshots in input order.
    """
    coins = list(coins) if coins is not None else list(DEFAULT_COINS)

    logger.info("Fetching data for %d coins in parallel...", len(coins))

    snapshots = await asyncio.gather(
        *(fetch_snapshot(exchange, coin, settings) for coin in coins)
    )

    report = [snapshot for snapshot in snapshots if snapshot is not None]

    logger.info("Data fetching completed!")
    return report
