"""Pool processing pipeline."""

from yield_analytics.processing.pools import attach_stability, process_pool, process_pools, project_slug_for

__all__ = ["attach_stability", "process_pool", "process_pools", "project_slug_for"]
