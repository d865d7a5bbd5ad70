"""Upstream data sources."""

from yield_analytics.sources.defillama import DataSourceError, DefiLlamaClient

__all__ = ["DataSourceError", "DefiLlamaClient"]
