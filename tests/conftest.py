"""Shared test fixtures."""

from __future__ import annotations

import pytest

from yield_analytics.models import HistoryPoint, RawPool
from yield_analytics.processing.pools import process_pool


def _raw_pool(**overrides) -> dict:
    """Aggregator-shaped pool record with sane defaults."""
    record = {
        "pool": "pool-1",
        "chain": "Ethereum",
        "project": "aave-v3",
        "symbol": "USDC",
        "tvlUsd": 250_000_000,
        "apy": 4.0,
        "apyBase": 4.0,
        "apyReward": 0.0,
        "stablecoin": True,
        "ilRisk": "no",
        "exposure": "single",
    }
    record.update(overrides)
    return record


@pytest.fixture
def raw_pool():
    """Factory for raw wire dicts: ``raw_pool(apy=12, symbol="ETH")``."""
    return _raw_pool


@pytest.fixture
def make_pool():
    """Factory for ProcessedPools built through the real processor."""

    def _make(**overrides):
        return process_pool(RawPool.model_validate(_raw_pool(**overrides)))

    return _make


@pytest.fixture
def history():
    """Factory turning a list of APY values into chart points."""

    def _history(apys):
        return [
            HistoryPoint(timestamp=f"2025-01-{i + 1:02d}T00:00:00Z", apy=a, tvl_usd=1e7)
            for i, a in enumerate(apys)
        ]

    return _history
