"""Prompt rendering for CoinPrompt."""

from coinprompt.prompt.render import (
    PROMPT_HEADER,
    describe_timeframe,
    js_number,
    json_array,
    render_report,
    render_snapshot,
    to_fixed,
    to_precision,
)

__all__ = [
    "PROMPT_HEADER",
    "describe_timeframe",
    "js_number",
    "json_array",
    "render_report",
    "render_snapshot",
    "to_fixed",
    "to_precision",
]
