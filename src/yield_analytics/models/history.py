"""Per-pool APY history and the stability summary derived from it."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from yield_analytics.models.base import WireModel

Trend = Literal["up", "down", "stable"]


class HistoryPoint(WireModel):
    """One observation from the pool chart endpoint."""

    timestamp: datetime | str | None = None
    apy: float | None = None
    tvl_usd: float | None = None
    apy_base: float | None = None
    apy_reward: float | None = None


class ApyStability(WireModel):
    """Descriptive statistics over the recent APY window of one pool."""

    score: int = Field(ge=0, le=100)
    volatility: float
    avg_apy: float
    min_apy: float
    max_apy: float
    trend: Trend
    data_points: int
