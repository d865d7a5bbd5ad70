"""Tests for dataset summaries and the TTL result cache."""

from __future__ import annotations

import pytest

from yield_analytics.metrics import ResultCache, summarize_dataset
from yield_analytics.metrics.summary import curator_score, stability_bucket
from yield_analytics.models import ApyStability


def _with_stability(pool, score):
    stability = ApyStability(
        score=score, volatility=0.0, avg_apy=pool.apy, min_apy=pool.apy, max_apy=pool.apy,
        trend="stable", data_points=30,
    )
    return pool.model_copy(update={"apy_stability": stability})


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestStabilityBucket:
    def test_boundaries(self):
        assert stability_bucket(100) == "high"
        assert stability_bucket(80) == "high"
        assert stability_bucket(79) == "medium"
        assert stability_bucket(50) == "medium"
        assert stability_bucket(20) == "low"
        assert stability_bucket(19) == "volatile"


class TestSummarizeDataset:
    def test_empty(self):
        summary = summarize_dataset([])
        assert summary.total_pools == 0
        assert summary.risk_distribution.low == 0
        assert summary.top_apy == []

    def test_distributions(self, make_pool):
        pools = [
            _with_stability(make_pool(pool="a", apy=6), 90),
            _with_stability(make_pool(pool="b", apy=4), 55),
            make_pool(pool="c", apy=3),
            make_pool(pool="d", project="memefarm", tvlUsd=2e6, apy=60, apyReward=55, stablecoin=False, symbol="PEPE"),
        ]
        summary = summarize_dataset(pools)
        assert summary.total_pools == 4
        assert summary.pools_with_stability == 2
        assert summary.risk_distribution.low == 3
        assert summary.risk_distribution.very_high == 1
        assert summary.stability_distribution.high == 1
        assert summary.stability_distribution.medium == 1
        assert summary.stability_distribution.volatile == 0

    def test_ranked_picks(self, make_pool):
        steady = _with_stability(make_pool(pool="steady", apy=6), 90)
        jumpy = _with_stability(make_pool(pool="jumpy", apy=12), 40)
        modest = _with_stability(make_pool(pool="modest", apy=3.5), 95)
        tiny = make_pool(pool="tiny", apy=40, tvlUsd=5e6)
        summary = summarize_dataset([steady, jumpy, modest, tiny])

        assert [p.id for p in summary.top_apy] == ["jumpy", "steady", "modest"]
        assert [p.id for p in summary.stable_high_apy] == ["steady"]
        assert [p.id for p in summary.curator_picks] == ["steady", "modest"]
        assert "tiny" not in {p.id for p in summary.safest}

    def test_curator_score(self, make_pool):
        pool = _with_stability(make_pool(apy=5), 80)
        assert curator_score(pool) == 5 * 80 * (100 - pool.risk_score)
        assert curator_score(make_pool(apy=5)) == 0

    def test_wire_keys(self, make_pool):
        wire = summarize_dataset([make_pool()]).to_wire()
        assert {"totalPools", "riskDistribution", "stabilityDistribution", "curatorPicks"} <= set(wire)
        assert wire["riskDistribution"]["veryHigh"] == 0


class TestResultCache:
    def test_set_and_get(self):
        cache = ResultCache(ttl_seconds=10)
        cache.set("k", 42)
        assert cache.get("k") == 42
        assert cache.get("missing") is None

    def test_expires_after_ttl(self):
        clock = FakeClock()
        cache = ResultCache(ttl_seconds=10, clock=clock)
        cache.set("k", "v")
        clock.now = 10
        assert cache.get("k") == "v"
        clock.now = 10.5
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_get_or_compute_calls_once(self):
        calls = []
        cache = ResultCache(ttl_seconds=60, clock=FakeClock())

        def compute():
            calls.append(1)
            return "result"

        assert cache.get_or_compute(("a", 1), compute) == "result"
        assert cache.get_or_compute(("a", 1), compute) == "result"
        assert len(calls) == 1

    def test_expired_entries_purged_on_write(self):
        clock = FakeClock()
        cache = ResultCache(ttl_seconds=10, clock=clock)
        for i in range(5):
            cache.set(("old", i), i)
        clock.now = 11
        cache.set("fresh", 1)
        assert len(cache) == 1

    def test_bounded_by_max_entries(self):
        clock = FakeClock()
        cache = ResultCache(ttl_seconds=60, max_entries=3, clock=clock)
        for i in range(100):
            clock.now = i * 0.01
            cache.set(("minSpread", 1 + i / 1000), i)
        assert len(cache) == 3
        # oldest entries go first
        assert cache.get(("minSpread", 1 + 99 / 1000)) == 99
        assert cache.get(("minSpread", 1.0)) is None

    def test_rewrite_refreshes_position(self):
        cache = ResultCache(ttl_seconds=60, max_entries=2, clock=FakeClock())
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 3)
        cache.set("c", 4)
        assert cache.get("a") == 3
        assert cache.get("b") is None

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            ResultCache(max_entries=0)

    def test_clear(self):
        cache = ResultCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0
