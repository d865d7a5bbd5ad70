"""Protocol records and the edges between them."""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator

from yield_analytics.models.base import WireModel
from yield_analytics.numeric import to_float

RelationshipType = Literal["parent_child", "yield_source", "same_ecosystem", "integration"]


class ProtocolRecord(WireModel):
    slug: str
    name: str = ""
    category: str | None = None
    chains: list[str] = []
    tvl: float = 0.0
    symbol: str | None = None
    parent_protocol: str | None = None
    url: str | None = None
    logo: str | None = None
    twitter: str | None = None

    @field_validator("tvl", mode="before")
    @classmethod
    def _lenient_tvl(cls, value):
        return to_float(value)

    @field_validator("chains", mode="before")
    @classmethod
    def _none_chains(cls, value):
        return [] if value is None else value


class ProtocolRelationship(WireModel):
    source: str
    target: str
    type: RelationshipType
    weight: float
    chain: str | None = None
    evidence: str
