"""Cross-protocol yield spread models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from yield_analytics.models.base import WireModel
from yield_analytics.models.pool import RiskLevel

Confidence = Literal["high", "medium", "low"]


class PoolInfo(WireModel):
    """The slice of a processed pool shown on either side of a spread."""

    id: str
    protocol: str
    symbol: str
    apy: float
    apy_base: float
    apy_reward: float
    tvl: float
    risk_score: int
    risk_level: RiskLevel


class YieldSpread(WireModel):
    id: str
    asset: str
    asset_type: Literal["stablecoin", "volatile"]
    high_pool: PoolInfo
    low_pool: PoolInfo
    apy_spread: float
    apy_spread_percent: float
    risk_adjusted_spread: float
    base_apy_spread: float
    is_base_apy_driven: bool
    min_liquidity: float
    estimated_slippage: float
    net_spread: float
    confidence: Confidence
    detected_at: datetime


class SpreadDetectionResult(WireModel):
    spreads: list[YieldSpread] = []
    top_opportunities: list[YieldSpread] = []
    assets_analyzed: int = 0
    pools_compared: int = 0
    spreads_found: int = 0
    generated_at: datetime
