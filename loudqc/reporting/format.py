"""Human-readable formatting of loudness values."""
from __future__ import annotations

import math

NEG_INF_LABEL = "-∞"


def format_lufs(value: float) -> str:
    """Format a LUFS value to one decimal, or -∞ for silence."""
    if not math.isfinite(value):
        return NEG_INF_LABEL
    return f"{value:.1f} LUFS"


def format_db(value: float) -> str:
    """Format a dB value to one decimal, or -∞ dB for silence."""
    if not math.isfinite(value):
        return f"{NEG_INF_LABEL} dB"
    return f"{value:.1f} dB"
