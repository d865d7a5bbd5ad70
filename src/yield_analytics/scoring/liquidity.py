"""Liquidity risk modeler: safe sizing, slippage curve and exitability.

Slippage at a position size:

    ratio    = position_size / tvl_usd
    slippage = ratio * 100 * factor * (1 + 2 * ratio)     (percent, capped at 100)

The quadratic term makes slippage grow faster than linearly once a position
is a meaningful share of the pool.
"""

from __future__ import annotations

import math

from yield_analytics.config.schema import ReferenceConfig
from yield_analytics.models.pool import ExitabilityRating, LiquidityRisk, SlippageEstimates
from yield_analytics.numeric import clamp, round_half_up, to_float
from yield_analytics.scoring.assets import default_reference

MAX_SLIPPAGE = 100.0
LENDING_SLIPPAGE_FACTOR = 0.5
LIQUID_STAKING_SLIPPAGE_FACTOR = 0.3
NEUTRAL_SLIPPAGE_FACTOR = 1.0

LENDING_SCORE_BONUS = 10
LIQUID_STAKING_SCORE_BONUS = 15
# $1M slippage thresholds (percent) that nudge the score.
DEEP_SLIPPAGE = 0.5
SHALLOW_SLIPPAGE = 5.0
SLIPPAGE_SCORE_ADJUSTMENT = 10

_SAFE_ALLOCATION_TIERS = ((1_000_000_000, 5.0), (100_000_000, 3.0), (10_000_000, 2.0))
_SCORE_TIERS = (
    (1_000_000_000, 5),
    (500_000_000, 10),
    (100_000_000, 20),
    (50_000_000, 30),
    (10_000_000, 45),
    (5_000_000, 60),
    (1_000_000, 75),
)
_EXITABILITY_BANDS: tuple[tuple[int, ExitabilityRating], ...] = (
    (15, "excellent"),
    (30, "good"),
    (50, "moderate"),
    (70, "poor"),
)
_ESTIMATE_SIZES = {
    "at_100k": 100_000,
    "at_500k": 500_000,
    "at_1m": 1_000_000,
    "at_5m": 5_000_000,
    "at_10m": 10_000_000,
}


def estimate_slippage(position_size: float, tvl_usd: float, slippage_factor: float = NEUTRAL_SLIPPAGE_FACTOR) -> float:
    """Slippage percent for *position_size* against a pool of *tvl_usd*."""
    if tvl_usd <= 0:
        return MAX_SLIPPAGE
    ratio = position_size / tvl_usd
    slippage = ratio * 100 * slippage_factor * (1 + ratio * 2)
    if not math.isfinite(slippage):
        return MAX_SLIPPAGE
    return min(round_half_up(slippage), MAX_SLIPPAGE)


def is_lending_protocol(project_slug: str, reference: ReferenceConfig | None = None) -> bool:
    ref = reference or default_reference()
    return any(name in project_slug for name in ref.lending_protocols)


def is_liquid_staking_protocol(project_slug: str, reference: ReferenceConfig | None = None) -> bool:
    ref = reference or default_reference()
    return any(name in project_slug for name in ref.liquid_staking_protocols)


def slippage_factor_for(project_slug: str, reference: ReferenceConfig | None = None) -> float:
    """Liquid staking wins over lending when a slug matches both lists."""
    if is_liquid_staking_protocol(project_slug, reference):
        return LIQUID_STAKING_SLIPPAGE_FACTOR
    if is_lending_protocol(project_slug, reference):
        return LENDING_SLIPPAGE_FACTOR
    return NEUTRAL_SLIPPAGE_FACTOR


def safe_allocation_percent(tvl_usd: float, lending: bool = False) -> float:
    percent = 1.0
    for floor, tier_percent in _SAFE_ALLOCATION_TIERS:
        if tvl_usd >= floor:
            percent = tier_percent
            break
    return percent * 2 if lending else percent


def exitability_for(score: int) -> ExitabilityRating:
    for ceiling, rating in _EXITABILITY_BANDS:
        if score <= ceiling:
            return rating
    return "very_poor"


def _base_score(tvl_usd: float) -> int:
    for floor, score in _SCORE_TIERS:
        if tvl_usd >= floor:
            return score
    return 90


def assess_liquidity(
    tvl_usd: float,
    project_slug: str,
    reference: ReferenceConfig | None = None,
) -> LiquidityRisk:
    """Model how easily a position can enter and exit a pool of *tvl_usd*."""
    tvl = to_float(tvl_usd)
    lending = is_lending_protocol(project_slug, reference)
    liquid_staking = is_liquid_staking_protocol(project_slug, reference)
    factor = slippage_factor_for(project_slug, reference)

    percent = safe_allocation_percent(tvl, lending)
    estimates = SlippageEstimates(
        **{name: estimate_slippage(size, tvl, factor) for name, size in _ESTIMATE_SIZES.items()}
    )

    score = _base_score(tvl)
    if lending:
        score = clamp(score - LENDING_SCORE_BONUS, 0, 100)
    if liquid_staking:
        score = clamp(score - LIQUID_STAKING_SCORE_BONUS, 0, 100)
    if estimates.at_1m > SHALLOW_SLIPPAGE:
        score = clamp(score + SLIPPAGE_SCORE_ADJUSTMENT, 0, 100)
    elif estimates.at_1m < DEEP_SLIPPAGE:
        score = clamp(score - SLIPPAGE_SCORE_ADJUSTMENT, 0, 100)
    score = int(score)

    return LiquidityRisk(
        score=score,
        pool_tvl=tvl,
        max_safe_allocation=tvl * percent / 100,
        safe_allocation_percent=percent,
        slippage_estimates=estimates,
        exitability_rating=exitability_for(score),
    )
