"""Protocol relationship graph."""

from yield_analytics.graph.relationships import (
    build_known_integrations,
    build_parent_child_relationships,
    build_relationship_graph,
    build_same_ecosystem_relationships,
    deduplicate_relationships,
    select_defi_protocols,
)

__all__ = [
    "build_known_integrations",
    "build_parent_child_relationships",
    "build_relationship_graph",
    "build_same_ecosystem_relationships",
    "deduplicate_relationships",
    "select_defi_protocols",
]
