"""Snapshot building and report aggregation."""

from coinprompt.config import DEFAULT_COINS
from coinprompt.pipeline.report import build_report, validate_coins
from coinprompt.pipeline.snapshot import (
    average_open_interest,
    build_snapshot,
    fetch_snapshot,
)

__all__ = [
    "DEFAULT_COINS",
    "average_open_interest",
    "build_report",
    "build_snapshot",
    "fetch_snapshot",
    "validate_coins",
]
