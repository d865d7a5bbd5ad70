"""APY stability analyzer: descriptive statistics over a recent APY window.

    cv    = std / avg * 100      if avg > 0.1
          = std * 10             otherwise (avoids blow-up near zero APY)
    score = round(clamp(100 - cv, 0, 100))

std is the population standard deviation (divide by N). The trend compares
the mean of the first and last seven values in the window.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from yield_analytics.models.history import ApyStability, HistoryPoint, Trend
from yield_analytics.numeric import clamp, round_half_up, to_float_or_none

MIN_DATA_POINTS = 7
DEFAULT_WINDOW = 30
TREND_SAMPLE = 7
TREND_THRESHOLD = 0.10
# Below this average APY the coefficient of variation is replaced by std * 10.
CV_MIN_AVERAGE = 0.1
CV_FALLBACK_SCALE = 10


def _trend(values: np.ndarray) -> Trend:
    early = float(values[:TREND_SAMPLE].mean())
    late = float(values[-TREND_SAMPLE:].mean())
    if late > early * (1 + TREND_THRESHOLD):
        return "up"
    if late < early * (1 - TREND_THRESHOLD):
        return "down"
    return "stable"


def _valid_apys(history: Sequence[HistoryPoint]) -> list[float]:
    out = []
    for point in history:
        apy = to_float_or_none(point.apy)
        if apy is not None and math.isfinite(apy) and apy >= 0:
            out.append(apy)
    return out


def calculate_apy_stability(
    history: Sequence[HistoryPoint],
    window: int = DEFAULT_WINDOW,
) -> ApyStability | None:
    """Summarize the last *window* points of *history* (oldest first).

    Returns ``None`` when fewer than seven usable APY values remain, or
    when the mean or spread of the window is not finite.
    """
    if len(history) < MIN_DATA_POINTS:
        return None

    values = np.asarray(_valid_apys(history[-window:]), dtype=float)
    if values.size < MIN_DATA_POINTS:
        return None

    # Huge but finite APYs can overflow the variance.
    with np.errstate(over="ignore", invalid="ignore"):
        avg = float(values.mean())
        std = float(values.std(ddof=0))
        trend = _trend(values)
    if not (math.isfinite(avg) and math.isfinite(std)):
        return None
    cv = std / avg * 100 if avg > CV_MIN_AVERAGE else std * CV_FALLBACK_SCALE

    return ApyStability(
        score=int(round_half_up(clamp(100 - cv, 0, 100), 0)),
        volatility=round_half_up(std),
        avg_apy=round_half_up(avg),
        min_apy=round_half_up(float(values.min())),
        max_apy=round_half_up(float(values.max())),
        trend=trend,
        data_points=int(values.size),
    )
