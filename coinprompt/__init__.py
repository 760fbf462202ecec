"""CoinPrompt - multi-timeframe market snapshots for LLM prompts."""

__version__ = "0.1.0"
