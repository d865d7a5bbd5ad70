"""Dataset summaries and API result caching."""

from yield_analytics.metrics.cache import ResultCache
from yield_analytics.metrics.summary import DatasetSummary, summarize_dataset

__all__ = ["DatasetSummary", "ResultCache", "summarize_dataset"]
