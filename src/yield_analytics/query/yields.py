"""Yield pool filtering and ordering."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, Field

from yield_analytics.models.history import Trend
from yield_analytics.models.pool import ProcessedPool, RiskLevel

SortKey = Literal["tvl", "apy", "risk", "stability"]

# Pools without stability data sort after every scored pool.
_NO_STABILITY = -1


class YieldQuery(BaseModel):
    chain: str | None = None
    min_apy: float = 0.0
    max_apy: float | None = None
    stablecoin_only: bool = False
    risk_level: RiskLevel | None = None
    max_risk_score: int | None = None
    min_tvl: float = 0.0
    stable_only: bool = False
    min_stability: int = 0
    trend: Trend | None = None
    sort_by: SortKey = "tvl"
    limit: int = Field(default=100, ge=0)


def _sort_key(sort_by: SortKey):
    if sort_by == "apy":
        return lambda p: -p.apy
    if sort_by == "risk":
        return lambda p: p.risk_score
    if sort_by == "stability":
        return lambda p: -(p.apy_stability.score if p.apy_stability else _NO_STABILITY)
    return lambda p: -p.tvl_usd


def filter_yields(pools: Sequence[ProcessedPool], query: YieldQuery) -> list[ProcessedPool]:
    out = list(pools)
    if query.chain:
        chain = query.chain.lower()
        out = [p for p in out if p.chain.lower() == chain]
    if query.min_apy > 0:
        out = [p for p in out if p.apy >= query.min_apy]
    if query.max_apy is not None:
        out = [p for p in out if p.apy <= query.max_apy]
    if query.stablecoin_only:
        out = [p for p in out if p.stablecoin]
    if query.min_tvl > 0:
        out = [p for p in out if p.tvl_usd >= query.min_tvl]
    if query.risk_level:
        out = [p for p in out if p.risk_level == query.risk_level]
    if query.max_risk_score is not None:
        out = [p for p in out if p.risk_score <= query.max_risk_score]
    if query.stable_only:
        out = [p for p in out if p.apy_stability is not None]
    if query.min_stability > 0:
        out = [p for p in out if p.apy_stability and p.apy_stability.score >= query.min_stability]
    if query.trend:
        out = [p for p in out if p.apy_stability and p.apy_stability.trend == query.trend]

    out.sort(key=_sort_key(query.sort_by))
    return out[: query.limit]
