"""Relationship graph builder: protocol-to-protocol edges.

Three edge sources: the parent field on each protocol record, a curated
table of known integrations, and co-membership of the largest protocols in
the same (category, chain) ecosystem.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from itertools import combinations
from typing import Any

from pydantic import ValidationError

from yield_analytics.config.schema import ReferenceConfig
from yield_analytics.logging.setup import get_logger
from yield_analytics.models.protocol import ProtocolRecord, ProtocolRelationship
from yield_analytics.scoring.assets import default_reference

log = get_logger(__name__)

DEFAULT_MIN_PROTOCOL_TVL = 1_000_000
ECOSYSTEM_MIN_TVL = 10_000_000
ECOSYSTEM_TOP_N = 5
_PARENT_PREFIX = "parent#"


def select_defi_protocols(
    raw_protocols: Iterable[ProtocolRecord | Mapping[str, Any]],
    min_tvl: float = DEFAULT_MIN_PROTOCOL_TVL,
    reference: ReferenceConfig | None = None,
) -> list[ProtocolRecord]:
    """Parse protocol records, keeping TVL above *min_tvl* outside CEX / Chain."""
    ref = reference or default_reference()
    selected: list[ProtocolRecord] = []
    invalid = 0
    for item in raw_protocols:
        if isinstance(item, ProtocolRecord):
            record = item
        else:
            try:
                record = ProtocolRecord.model_validate(item)
            except ValidationError:
                invalid += 1
                continue
        if record.tvl <= min_tvl:
            continue
        if record.category in ref.excluded_protocol_categories:
            continue
        selected.append(record)
    if invalid:
        log.warning("protocol_records_invalid", count=invalid)
    log.info("protocols_selected", count=len(selected))
    return selected


def build_parent_child_relationships(protocols: Sequence[ProtocolRecord]) -> list[ProtocolRelationship]:
    rels = []
    for protocol in protocols:
        if not protocol.parent_protocol:
            continue
        parent = protocol.parent_protocol.replace(_PARENT_PREFIX, "", 1)
        rels.append(
            ProtocolRelationship(
                source=protocol.slug,
                target=parent,
                type="parent_child",
                weight=protocol.tvl,
                evidence=f"{protocol.name} is a version/fork of {parent}",
            )
        )
    return rels


def build_known_integrations(
    protocols: Sequence[ProtocolRecord],
    reference: ReferenceConfig | None = None,
) -> list[ProtocolRelationship]:
    """Curated integrations whose two endpoints are both present."""
    ref = reference or default_reference()
    by_slug = {p.slug: p for p in protocols}
    rels = []
    for known in ref.known_integrations:
        if known.source not in by_slug or known.target not in by_slug:
            continue
        rels.append(
            ProtocolRelationship(
                source=known.source,
                target=known.target,
                type=known.type,
                weight=by_slug[known.source].tvl,
                evidence=known.evidence,
            )
        )
    return rels


def build_same_ecosystem_relationships(
    protocols: Sequence[ProtocolRecord],
    reference: ReferenceConfig | None = None,
) -> list[ProtocolRelationship]:
    """Pair up the top protocols of each (category, chain) group."""
    ref = reference or default_reference()
    groups: dict[tuple[str, str], list[ProtocolRecord]] = {}
    for protocol in protocols:
        if protocol.category not in ref.ecosystem_categories:
            continue
        for chain in protocol.chains:
            groups.setdefault((protocol.category, chain), []).append(protocol)

    rels = []
    for (category, chain), members in groups.items():
        top = sorted(
            (p for p in members if p.tvl > ECOSYSTEM_MIN_TVL),
            key=lambda p: p.tvl,
            reverse=True,
        )[:ECOSYSTEM_TOP_N]
        for first, second in combinations(top, 2):
            rels.append(
                ProtocolRelationship(
                    source=first.slug,
                    target=second.slug,
                    type="same_ecosystem",
                    weight=min(first.tvl, second.tvl),
                    chain=chain,
                    evidence=f"Both are {category} protocols on {chain}",
                )
            )
    return rels


def deduplicate_relationships(rels: Iterable[ProtocolRelationship]) -> list[ProtocolRelationship]:
    """One edge per (source, target); a strictly heavier edge replaces the kept one."""
    kept: dict[tuple[str, str], ProtocolRelationship] = {}
    for rel in rels:
        key = (rel.source, rel.target)
        existing = kept.get(key)
        if existing is None or rel.weight > existing.weight:
            kept[key] = rel
    return list(kept.values())


def build_relationship_graph(
    protocols: Sequence[ProtocolRecord],
    reference: ReferenceConfig | None = None,
) -> list[ProtocolRelationship]:
    parent_child = build_parent_child_relationships(protocols)
    integrations = build_known_integrations(protocols, reference)
    ecosystem = build_same_ecosystem_relationships(protocols, reference)
    rels = deduplicate_relationships([*parent_child, *integrations, *ecosystem])
    log.info(
        "relationships_built",
        parent_child=len(parent_child),
        integrations=len(integrations),
        same_ecosystem=len(ecosystem),
        total=len(rels),
    )
    return rels
