"""Pool models: raw aggregator records and the processed, risk-annotated form."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator

from yield_analytics.models.base import WireModel
from yield_analytics.models.history import ApyStability
from yield_analytics.numeric import to_float_or_none

RiskLevel = Literal["low", "medium", "high", "very_high"]
ExitabilityRating = Literal["excellent", "good", "moderate", "poor", "very_poor"]
DependencyType = Literal["protocol", "asset", "oracle", "chain"]
DependencyRisk = Literal["low", "medium", "high"]


class RawPool(WireModel):
    """A pool record as served by the yields aggregator.

    The aggregator keys the identifier as ``pool``; ``id`` is accepted too so
    that processed records round-trip.
    """

    id: str = Field(validation_alias=AliasChoices("pool", "id"), serialization_alias="id")
    chain: str = ""
    project: str = ""
    symbol: str = ""
    tvl_usd: float | None = None
    apy: float | None = None
    apy_base: float | None = None
    apy_reward: float | None = None
    stablecoin: bool | None = None
    il_risk: str | None = None
    exposure: str | None = None
    underlying_tokens: list[str] | None = None
    pool_meta: str | None = None
    category: str | None = None

    @field_validator("tvl_usd", "apy", "apy_base", "apy_reward", mode="before")
    @classmethod
    def _lenient_number(cls, value):
        return to_float_or_none(value)


class RiskBreakdown(WireModel):
    tvl_score: int = 0
    apy_score: int = 0
    stable_score: int = 0
    il_score: int = 0
    protocol_score: int = 0

    @property
    def total(self) -> int:
        return (
            self.tvl_score
            + self.apy_score
            + self.stable_score
            + self.il_score
            + self.protocol_score
        )


class SlippageEstimates(WireModel):
    """Slippage percent at fixed notional position sizes."""

    at_100k: float = Field(alias="at100k")
    at_500k: float = Field(alias="at500k")
    at_1m: float = Field(alias="at1m")
    at_5m: float = Field(alias="at5m")
    at_10m: float = Field(alias="at10m")


class LiquidityRisk(WireModel):
    score: int
    pool_tvl: float
    max_safe_allocation: float
    safe_allocation_percent: float
    slippage_estimates: SlippageEstimates
    exitability_rating: ExitabilityRating


class PoolDependency(WireModel):
    type: DependencyType
    name: str
    risk: DependencyRisk


class ProcessedPool(RawPool):
    """A pool after normalization, risk scoring and liquidity modeling."""

    tvl_usd: float
    apy: float
    apy_base: float = 0.0
    apy_reward: float = 0.0
    stablecoin: bool = False
    il_risk: str = "unknown"

    project_slug: str
    underlying_assets: list[str] = []
    risk_score: int
    risk_level: RiskLevel
    risk_breakdown: RiskBreakdown
    liquidity_risk: LiquidityRisk
    dependencies: list[PoolDependency] = []
    apy_stability: ApyStability | None = None
