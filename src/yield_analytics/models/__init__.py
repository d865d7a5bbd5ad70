"""Pydantic domain models."""

from yield_analytics.models.dataset import DatasetMetadata, DefiDataset
from yield_analytics.models.history import ApyStability, HistoryPoint
from yield_analytics.models.pool import (
    LiquidityRisk,
    PoolDependency,
    ProcessedPool,
    RawPool,
    RiskBreakdown,
    SlippageEstimates,
)
from yield_analytics.models.protocol import ProtocolRecord, ProtocolRelationship
from yield_analytics.models.spread import PoolInfo, SpreadDetectionResult, YieldSpread

__all__ = [
    "ApyStability",
    "DatasetMetadata",
    "DefiDataset",
    "HistoryPoint",
    "LiquidityRisk",
    "PoolDependency",
    "PoolInfo",
    "ProcessedPool",
    "ProtocolRecord",
    "ProtocolRelationship",
    "RawPool",
    "RiskBreakdown",
    "SlippageEstimates",
    "SpreadDetectionResult",
    "YieldSpread",
]
