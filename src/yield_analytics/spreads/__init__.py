"""Cross-protocol yield spread detection."""

from yield_analytics.spreads.detector import detect_yield_spreads, is_single_asset_pool, primary_asset

__all__ = ["detect_yield_spreads", "is_single_asset_pool", "primary_asset"]
