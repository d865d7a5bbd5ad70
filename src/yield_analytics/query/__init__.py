"""Read-side filtering over a persisted dataset."""

from yield_analytics.query.graph import GraphLink, GraphNode, GraphQuery, GraphView, build_graph_view
from yield_analytics.query.yields import YieldQuery, filter_yields

__all__ = [
    "GraphLink",
    "GraphNode",
    "GraphQuery",
    "GraphView",
    "YieldQuery",
    "build_graph_view",
    "filter_yields",
]
