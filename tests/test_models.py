"""Tests for wire-format handling of the domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from yield_analytics.models import ApyStability, ProtocolRecord, RawPool, SlippageEstimates


class TestRawPool:
    def test_reads_aggregator_keys(self, raw_pool):
        pool = RawPool.model_validate(raw_pool(poolMeta="v2", underlyingTokens=["0xabc"]))
        assert pool.id == "pool-1"
        assert pool.tvl_usd == 250_000_000
        assert pool.il_risk == "no"
        assert pool.pool_meta == "v2"
        assert pool.underlying_tokens == ["0xabc"]

    def test_serializes_id_not_pool(self, raw_pool):
        wire = RawPool.model_validate(raw_pool()).to_wire()
        assert wire["id"] == "pool-1"
        assert "pool" not in wire
        assert "tvlUsd" in wire

    def test_accepts_id_key(self):
        assert RawPool.model_validate({"id": "x"}).id == "x"

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            RawPool.model_validate({"apy": 3})

    @pytest.mark.parametrize("value, expected", [
        ("12.5", 12.5),
        ("n/a", None),
        (True, None),
        (None, None),
        (7, 7.0),
    ])
    def test_lenient_numbers(self, value, expected):
        assert RawPool.model_validate({"pool": "p", "apy": value}).apy == expected

    def test_unknown_keys_ignored(self):
        pool = RawPool.model_validate({"pool": "p", "predictions": {"binnedConfidence": 2}})
        assert not hasattr(pool, "predictions")

    def test_frozen(self, raw_pool):
        pool = RawPool.model_validate(raw_pool())
        with pytest.raises(ValidationError):
            pool.apy = 99


class TestProcessedPoolWire:
    def test_nested_camel_case(self, make_pool):
        wire = make_pool().to_wire()
        assert wire["projectSlug"] == "aave-v3"
        assert wire["underlyingAssets"] == ["USDC"]
        assert set(wire["riskBreakdown"]) == {"tvlScore", "apyScore", "stableScore", "ilScore", "protocolScore"}
        assert set(wire["liquidityRisk"]["slippageEstimates"]) == {"at100k", "at500k", "at1m", "at5m", "at10m"}
        assert wire["apyStability"] is None

    def test_slippage_estimates_by_name_or_alias(self):
        by_alias = SlippageEstimates.model_validate({"at100k": 0.1, "at500k": 0.5, "at1m": 1, "at5m": 5, "at10m": 10})
        by_name = SlippageEstimates(at_100k=0.1, at_500k=0.5, at_1m=1, at_5m=5, at_10m=10)
        assert by_alias == by_name


class TestApyStability:
    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            ApyStability(score=101, volatility=0, avg_apy=1, min_apy=1, max_apy=1, trend="up", data_points=7)

    def test_trend_literal(self):
        with pytest.raises(ValidationError):
            ApyStability(score=50, volatility=0, avg_apy=1, min_apy=1, max_apy=1, trend="sideways", data_points=7)


class TestProtocolRecord:
    def test_nulls_tolerated(self):
        record = ProtocolRecord.model_validate({"slug": "x", "chains": None, "tvl": None, "parentProtocol": "parent#y"})
        assert record.chains == []
        assert record.tvl == 0.0
        assert record.parent_protocol == "parent#y"
