"""Yield spread detector.

For each canonical asset, the highest-APY single-asset pool is compared with
every lower pool of a different protocol. A pair survives when

    apy_spread >= min_spread
    net_spread  = apy_spread - estimated_slippage * 0.5 >= 0.5

where the slippage is priced for the reference position against the
shallower of the two pools.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime, timezone

from yield_analytics.config.schema import ReferenceConfig
from yield_analytics.models.pool import ProcessedPool
from yield_analytics.models.spread import Confidence, PoolInfo, SpreadDetectionResult, YieldSpread
from yield_analytics.numeric import round_half_up
from yield_analytics.scoring.assets import default_reference, is_stablecoin, normalize_asset
from yield_analytics.scoring.liquidity import NEUTRAL_SLIPPAGE_FACTOR, estimate_slippage

MIN_POOL_TVL = 1_000_000
MAX_POOL_APY = 500
MIN_NET_SPREAD = 0.5
# Entering one pool and leaving the other: slippage is charged once per switch.
SLIPPAGE_WEIGHT = 0.5
BASE_DRIVEN_SHARE = 0.5
EQUAL_RISK_MULTIPLIER = 2

HIGH_CONFIDENCE_LIQUIDITY = 50_000_000
HIGH_CONFIDENCE_SPREAD = 2.0
MEDIUM_CONFIDENCE_LIQUIDITY = 10_000_000
MEDIUM_CONFIDENCE_SPREAD = 1.5

_SINGLE_ASSET_CATEGORIES = ("lending", "staking")
_SYMBOL_SEPARATORS = re.compile(r"[-/]")
_WHITESPACE = re.compile(r"\s+")


def is_single_asset_pool(pool: ProcessedPool) -> bool:
    if pool.il_risk == "no":
        return True
    category = (pool.category or "").lower()
    if any(c in category for c in _SINGLE_ASSET_CATEGORIES):
        return True
    return len(pool.underlying_assets) == 1


def primary_asset(pool: ProcessedPool, reference: ReferenceConfig | None = None) -> str:
    if pool.underlying_assets:
        return normalize_asset(pool.underlying_assets[0], reference)
    head = _SYMBOL_SEPARATORS.split(pool.symbol)[0]
    return normalize_asset(head, reference)


def _confidence(apy_spread: float, min_liquidity: float, base_driven: bool) -> Confidence:
    if (
        min_liquidity >= HIGH_CONFIDENCE_LIQUIDITY
        and base_driven
        and apy_spread >= HIGH_CONFIDENCE_SPREAD
    ):
        return "high"
    if min_liquidity >= MEDIUM_CONFIDENCE_LIQUIDITY and apy_spread >= MEDIUM_CONFIDENCE_SPREAD:
        return "medium"
    return "low"


def _pool_info(pool: ProcessedPool) -> PoolInfo:
    return PoolInfo(
        id=pool.id,
        protocol=pool.project,
        symbol=pool.symbol,
        apy=round_half_up(pool.apy),
        apy_base=round_half_up(pool.apy_base),
        apy_reward=round_half_up(pool.apy_reward),
        tvl=pool.tvl_usd,
        risk_score=pool.risk_score,
        risk_level=pool.risk_level,
    )


def _spread_id(asset: str, high: ProcessedPool, low: ProcessedPool) -> str:
    return _WHITESPACE.sub("-", f"{asset}-{high.project}-{low.project}".lower())


def _compare(
    asset: str,
    high: ProcessedPool,
    low: ProcessedPool,
    *,
    min_spread: float,
    position_size: float,
    detected_at: datetime,
    reference: ReferenceConfig,
) -> YieldSpread | None:
    apy_spread = high.apy - low.apy
    if apy_spread < min_spread:
        return None

    base_spread = high.apy_base - low.apy_base
    base_driven = apy_spread > 0 and base_spread >= apy_spread * BASE_DRIVEN_SHARE

    risk_diff = abs(high.risk_score - low.risk_score)
    risk_adjusted = apy_spread / risk_diff if risk_diff > 0 else apy_spread * EQUAL_RISK_MULTIPLIER

    min_liquidity = min(high.tvl_usd, low.tvl_usd)
    slippage = estimate_slippage(position_size, min_liquidity, NEUTRAL_SLIPPAGE_FACTOR)
    net_spread = apy_spread - slippage * SLIPPAGE_WEIGHT
    if net_spread < MIN_NET_SPREAD:
        return None

    return YieldSpread(
        id=_spread_id(asset, high, low),
        asset=asset,
        asset_type="stablecoin" if is_stablecoin(asset, reference) else "volatile",
        high_pool=_pool_info(high),
        low_pool=_pool_info(low),
        apy_spread=round_half_up(apy_spread),
        apy_spread_percent=round_half_up(apy_spread / low.apy * 100),
        risk_adjusted_spread=round_half_up(risk_adjusted),
        base_apy_spread=round_half_up(base_spread),
        is_base_apy_driven=base_driven,
        min_liquidity=min_liquidity,
        estimated_slippage=slippage,
        net_spread=round_half_up(net_spread),
        confidence=_confidence(apy_spread, min_liquidity, base_driven),
        detected_at=detected_at,
    )


def detect_yield_spreads(
    pools: Sequence[ProcessedPool],
    *,
    chain: str | None = None,
    min_spread: float = 1.0,
    asset: str | None = None,
    position_size: float = 10_000,
    top_n: int = 5,
    reference: ReferenceConfig | None = None,
) -> SpreadDetectionResult:
    """Find APY differentials for the same asset across protocols."""
    ref = reference or default_reference()
    target = normalize_asset(asset, ref) if asset else None

    candidates = []
    for pool in pools:
        if not is_single_asset_pool(pool):
            continue
        if chain and pool.chain != chain:
            continue
        if pool.tvl_usd < MIN_POOL_TVL:
            continue
        if not 0 < pool.apy <= MAX_POOL_APY:
            continue
        if target and primary_asset(pool, ref) != target:
            continue
        candidates.append(pool)

    by_asset: dict[str, list[ProcessedPool]] = {}
    for pool in candidates:
        by_asset.setdefault(primary_asset(pool, ref), []).append(pool)

    now = datetime.now(timezone.utc)
    spreads: list[YieldSpread] = []
    for symbol, group in by_asset.items():
        if len(group) < 2 or len({p.project for p in group}) < 2:
            continue
        ranked = sorted(group, key=lambda p: p.apy, reverse=True)
        high = ranked[0]
        for low in ranked[1:]:
            if low.project == high.project:
                continue
            spread = _compare(
                symbol,
                high,
                low,
                min_spread=min_spread,
                position_size=position_size,
                detected_at=now,
                reference=ref,
            )
            if spread is not None:
                spreads.append(spread)

    spreads.sort(key=lambda s: s.net_spread, reverse=True)
    return SpreadDetectionResult(
        spreads=spreads,
        top_opportunities=spreads[:top_n],
        assets_analyzed=len(by_asset),
        pools_compared=len(candidates),
        spreads_found=len(spreads),
        generated_at=now,
    )
