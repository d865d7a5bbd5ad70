"""Dataset-level summaries: risk / stability distributions and ranked picks."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import Field

from yield_analytics.models.base import WireModel
from yield_analytics.models.pool import ProcessedPool

HIGH_STABILITY = 80
MEDIUM_STABILITY = 50
LOW_STABILITY = 20

TOP_APY_MIN_TVL = 10_000_000
SAFE_MIN_APY = 3.0
STABLE_HIGH_APY_MIN_SCORE = 70
STABLE_HIGH_APY_MIN_APY = 5.0
CURATOR_MIN_STABILITY = 60
CURATOR_MIN_APY = 3.0

TOP_APY_LIMIT = 15
PICK_LIMIT = 10


class RiskDistribution(WireModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    very_high: int = 0


class StabilityDistribution(WireModel):
    high: int = 0
    medium: int = 0
    low: int = 0
    volatile: int = 0


class DatasetSummary(WireModel):
    total_pools: int
    pools_with_stability: int
    risk_distribution: RiskDistribution
    stability_distribution: StabilityDistribution
    top_apy: list[ProcessedPool] = Field(default_factory=list)
    safest: list[ProcessedPool] = Field(default_factory=list)
    stable_high_apy: list[ProcessedPool] = Field(default_factory=list)
    curator_picks: list[ProcessedPool] = Field(default_factory=list)


def stability_bucket(score: int) -> str:
    if score >= HIGH_STABILITY:
        return "high"
    if score >= MEDIUM_STABILITY:
        return "medium"
    if score >= LOW_STABILITY:
        return "low"
    return "volatile"


def curator_score(pool: ProcessedPool) -> float:
    """apy * stability * (100 - risk): rewards yield that is steady and safe."""
    stability = pool.apy_stability.score if pool.apy_stability else 0
    return pool.apy * stability * (100 - pool.risk_score)


def summarize_dataset(pools: Sequence[ProcessedPool]) -> DatasetSummary:
    risk_counts = dict.fromkeys(("low", "medium", "high", "very_high"), 0)
    stability_counts = dict.fromkeys(("high", "medium", "low", "volatile"), 0)
    with_stability = [p for p in pools if p.apy_stability is not None]

    for pool in pools:
        risk_counts[pool.risk_level] += 1
    for pool in with_stability:
        stability_counts[stability_bucket(pool.apy_stability.score)] += 1

    top_apy = sorted(
        (p for p in pools if p.tvl_usd > TOP_APY_MIN_TVL),
        key=lambda p: p.apy,
        reverse=True,
    )[:TOP_APY_LIMIT]
    safest = sorted(
        (p for p in pools if p.risk_level == "low" and p.apy >= SAFE_MIN_APY),
        key=lambda p: p.risk_score,
    )[:PICK_LIMIT]
    stable_high_apy = sorted(
        (
            p
            for p in with_stability
            if p.apy_stability.score >= STABLE_HIGH_APY_MIN_SCORE and p.apy >= STABLE_HIGH_APY_MIN_APY
        ),
        key=lambda p: p.apy_stability.score * p.apy,
        reverse=True,
    )[:PICK_LIMIT]
    curator_picks = sorted(
        (
            p
            for p in with_stability
            if p.risk_level == "low"
            and p.apy_stability.score >= CURATOR_MIN_STABILITY
            and p.apy >= CURATOR_MIN_APY
        ),
        key=curator_score,
        reverse=True,
    )[:PICK_LIMIT]

    return DatasetSummary(
        total_pools=len(pools),
        pools_with_stability=len(with_stability),
        risk_distribution=RiskDistribution(**risk_counts),
        stability_distribution=StabilityDistribution(**stability_counts),
        top_apy=top_apy,
        safest=safest,
        stable_high_apy=stable_high_apy,
        curator_picks=curator_picks,
    )
