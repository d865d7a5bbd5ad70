"""Numeric helpers shared by the scorers."""

from __future__ import annotations

import math


def to_float_or_none(value) -> float | None:
    """Coerce *value* to float; ``None`` for missing or non-numeric input.

    Booleans are rejected so that a stray ``true`` never reads as 1.0.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def to_float(value, default: float = 0.0) -> float:
    """Coerce *value* to a finite float, falling back to *default*."""
    out = to_float_or_none(value)
    if out is None or not math.isfinite(out):
        return default
    return out


def round_half_up(value: float, ndigits: int = 2) -> float:
    """Round like ``Math.round(x * 10**n) / 10**n``: ties go towards +inf.

    Non-finite values, and values too large to scale, are returned unchanged.
    """
    scale = 10 ** ndigits
    scaled = value * scale
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / scale


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
