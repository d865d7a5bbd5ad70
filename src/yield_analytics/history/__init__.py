"""APY history retrieval and stability analysis."""

from yield_analytics.history.fetcher import (
    HistoryFetchResult,
    HistorySource,
    fetch_stability_for_pools,
    select_history_targets,
)
from yield_analytics.history.stability import calculate_apy_stability

__all__ = [
    "HistoryFetchResult",
    "HistorySource",
    "calculate_apy_stability",
    "fetch_stability_for_pools",
    "select_history_targets",
]
