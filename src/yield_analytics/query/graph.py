"""Protocol graph view: filtered protocols, their edges, and render-ready nodes / links."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from yield_analytics.models.base import WireModel
from yield_analytics.models.dataset import DefiDataset
from yield_analytics.models.protocol import ProtocolRecord, ProtocolRelationship, RelationshipType


class GraphQuery(BaseModel):
    category: str | None = None
    chain: str | None = None
    type: RelationshipType | None = None
    min_tvl: float = 0.0
    limit: int = Field(default=100, ge=0)


class GraphNode(WireModel):
    id: str
    name: str
    category: str | None = None
    chains: list[str] = []
    tvl: float
    symbol: str | None = None
    logo: str | None = None
    val: float


class GraphLink(WireModel):
    source: str
    target: str
    type: RelationshipType
    weight: float
    evidence: str


class GraphView(WireModel):
    protocols: list[ProtocolRecord] = []
    relationships: list[ProtocolRelationship] = []
    nodes: list[GraphNode] = []
    links: list[GraphLink] = []


def node_size(tvl: float) -> float:
    """Log-scaled node radius: log10(tvl + 1) * 2."""
    return math.log10(max(tvl, 0) + 1) * 2


def build_graph_view(dataset: DefiDataset, query: GraphQuery) -> GraphView:
    protocols = list(dataset.protocols.values())
    if query.category:
        category = query.category.lower()
        protocols = [p for p in protocols if (p.category or "").lower() == category]
    if query.chain:
        chain = query.chain.lower()
        protocols = [p for p in protocols if any(c.lower() == chain for c in p.chains)]
    if query.min_tvl > 0:
        protocols = [p for p in protocols if p.tvl >= query.min_tvl]
    protocols = sorted(protocols, key=lambda p: p.tvl, reverse=True)[: query.limit]

    slugs = {p.slug for p in protocols}
    rels = [r for r in dataset.relationships if r.source in slugs or r.target in slugs]
    if query.type:
        rels = [r for r in rels if r.type == query.type]

    nodes = [
        GraphNode(
            id=p.slug,
            name=p.name,
            category=p.category,
            chains=p.chains,
            tvl=p.tvl,
            symbol=p.symbol,
            logo=p.logo,
            val=node_size(p.tvl),
        )
        for p in protocols
    ]
    links = [
        GraphLink(source=r.source, target=r.target, type=r.type, weight=r.weight, evidence=r.evidence)
        for r in rels
        if r.source in slugs and r.target in slugs
    ]
    return GraphView(protocols=protocols, relationships=rels, nodes=nodes, links=links)
