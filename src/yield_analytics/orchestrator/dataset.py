"""Dataset assembly: bundle protocols, edges and processed yields with metadata."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from yield_analytics.models.dataset import DatasetMetadata, DefiDataset
from yield_analytics.models.pool import ProcessedPool
from yield_analytics.models.protocol import ProtocolRecord, ProtocolRelationship


def build_dataset(
    protocols: Sequence[ProtocolRecord],
    relationships: Sequence[ProtocolRelationship],
    yields: Sequence[ProcessedPool],
    fetched_at: datetime | None = None,
) -> DefiDataset:
    categories = sorted({p.category for p in protocols if p.category})
    chains = sorted({y.chain for y in yields if y.chain})
    return DefiDataset(
        protocols={p.slug: p for p in protocols},
        relationships=list(relationships),
        yields=list(yields),
        metadata=DatasetMetadata(
            fetched_at=fetched_at or datetime.now(timezone.utc),
            total_protocols=len(protocols),
            total_relationships=len(relationships),
            total_yield_pools=len(yields),
            categories=categories,
            chains=chains,
        ),
    )
