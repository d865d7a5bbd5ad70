"""Composite pool risk score: five additive factors, lower is safer."""

from __future__ import annotations

from dataclasses import dataclass

from yield_analytics.config.schema import ReferenceConfig
from yield_analytics.models.pool import RawPool, RiskBreakdown, RiskLevel
from yield_analytics.numeric import to_float
from yield_analytics.scoring.assets import default_reference, is_blue_chip, is_stablecoin

# Reward share of total APY above which the yield counts as incentive-driven.
REWARD_DEPENDENCE_RATIO = 0.7
REWARD_PENALTY = 5

ESTABLISHED_TVL_FLOOR = 100_000_000

_TVL_TIERS = ((1_000_000_000, 0), (100_000_000, 10), (10_000_000, 20))
_APY_TIERS = ((50, 25), (20, 15), (10, 10))
_LEVEL_BANDS: tuple[tuple[int, RiskLevel], ...] = ((20, "low"), (40, "medium"), (60, "high"))


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    level: RiskLevel
    breakdown: RiskBreakdown


def risk_level_for(score: int) -> RiskLevel:
    """<=20 low, <=40 medium, <=60 high, else very_high."""
    for ceiling, level in _LEVEL_BANDS:
        if score <= ceiling:
            return level
    return "very_high"


def tvl_score(tvl_usd: float) -> int:
    for floor, score in _TVL_TIERS:
        if tvl_usd >= floor:
            return score
    return 30


def apy_score(apy: float, apy_reward: float) -> int:
    """Tiered APY score plus a penalty when rewards dominate.

    reward_ratio = apy_reward / max(apy, 1)

    The penalty can lift this factor to 30, past its nominal cap of 25.
    """
    score = 0
    for floor, tier_score in _APY_TIERS:
        if apy > floor:
            score = tier_score
            break
    if apy_reward / max(apy, 1) > REWARD_DEPENDENCE_RATIO:
        score += REWARD_PENALTY
    return score


def stable_score(stablecoin: bool, assets: list[str], reference: ReferenceConfig) -> int:
    # An empty asset list is vacuously all-stable.
    all_stable = all(is_stablecoin(a, reference) for a in assets)
    if stablecoin or all_stable:
        return 0
    has_stable = any(is_stablecoin(a, reference) for a in assets)
    all_blue_chip = all(is_blue_chip(a, reference) for a in assets)
    if has_stable and all_blue_chip:
        return 5
    if all_blue_chip:
        return 10
    return 20


def il_score(il_risk: str | None, exposure: str | None, assets: list[str], reference: ReferenceConfig) -> int:
    if il_risk == "no":
        return 0
    if il_risk == "yes" and len(assets) <= 1:
        return 0
    if exposure == "single":
        return 0
    if len(assets) == 2:
        first, second = assets
        correlated = first == second or (
            is_stablecoin(first, reference) and is_stablecoin(second, reference)
        )
        return 5 if correlated else 15
    return 15


def protocol_score(project_slug: str, tvl_usd: float, reference: ReferenceConfig) -> int:
    if project_slug in reference.established_protocols:
        return 0
    if tvl_usd > ESTABLISHED_TVL_FLOOR:
        return 3
    return 10


def score_risk(
    pool: RawPool,
    project_slug: str,
    underlying_assets: list[str],
    reference: ReferenceConfig | None = None,
) -> RiskAssessment:
    """Score one pool. Missing or malformed numbers count as 0.

    The total is deliberately not clamped, so 105 is reachable.
    """
    ref = reference or default_reference()
    tvl = to_float(pool.tvl_usd)
    apy = to_float(pool.apy)
    apy_reward = to_float(pool.apy_reward)

    breakdown = RiskBreakdown(
        tvl_score=tvl_score(tvl),
        apy_score=apy_score(apy, apy_reward),
        stable_score=stable_score(bool(pool.stablecoin), underlying_assets, ref),
        il_score=il_score(pool.il_risk, pool.exposure, underlying_assets, ref),
        protocol_score=protocol_score(project_slug, tvl, ref),
    )
    total = breakdown.total
    return RiskAssessment(score=total, level=risk_level_for(total), breakdown=breakdown)
