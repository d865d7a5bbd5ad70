"""The persisted dataset: protocols, relationships and processed yields."""

from __future__ import annotations

from datetime import datetime

from yield_analytics.models.base import WireModel
from yield_analytics.models.pool import ProcessedPool
from yield_analytics.models.protocol import ProtocolRecord, ProtocolRelationship


class DatasetMetadata(WireModel):
    fetched_at: datetime
    total_protocols: int
    total_relationships: int
    total_yield_pools: int
    categories: list[str] = []
    chains: list[str] = []


class DefiDataset(WireModel):
    protocols: dict[str, ProtocolRecord] = {}
    relationships: list[ProtocolRelationship] = []
    yields: list[ProcessedPool] = []
    metadata: DatasetMetadata
