"""Tests for asset normalization, risk scoring, liquidity modeling and dependencies."""

from __future__ import annotations

import pytest

from yield_analytics.config import ReferenceConfig
from yield_analytics.models import RawPool
from yield_analytics.scoring.assets import (
    is_blue_chip,
    is_stablecoin,
    normalize_asset,
    parse_underlying_assets,
)
from yield_analytics.scoring.dependencies import pool_dependencies
from yield_analytics.scoring.liquidity import (
    assess_liquidity,
    estimate_slippage,
    exitability_for,
    safe_allocation_percent,
    slippage_factor_for,
)
from yield_analytics.scoring.risk import apy_score, il_score, risk_level_for, score_risk

REF = ReferenceConfig()


# ---------------------------------------------------------------------------
# Asset normalizer
# ---------------------------------------------------------------------------


class TestNormalizeAsset:
    @pytest.mark.parametrize("symbol", ["WETH", "stETH", "wstETH", "cbETH", "weETH", "rETH"])
    def test_eth_variants(self, symbol):
        assert normalize_asset(symbol) == "ETH"

    @pytest.mark.parametrize("symbol", ["WBTC", "cbBTC", "tBTC", "sBTC"])
    def test_btc_variants(self, symbol):
        assert normalize_asset(symbol) == "BTC"

    @pytest.mark.parametrize("symbol", ["WSOL", "mSOL", "JitoSOL", "bSOL", "jitoVSOL"])
    def test_sol_variants(self, symbol):
        assert normalize_asset(symbol) == "SOL"

    def test_unknown_symbol_is_upper_cased(self):
        assert normalize_asset("bonk") == "BONK"

    def test_custom_variant_map(self):
        ref = ReferenceConfig(asset_variants={"USDC.E": "USDC"})
        assert normalize_asset("usdc.e", ref) == "USDC"
        assert normalize_asset("WETH", ref) == "WETH"


class TestParseUnderlyingAssets:
    def test_fee_suffix_stripped(self):
        assert parse_underlying_assets("WETH-USDC-0.05%") == ["ETH", "USDC"]

    def test_slash_separator_and_dedupe(self):
        assert parse_underlying_assets("stETH/ETH") == ["ETH"]

    def test_parentheses_and_whitespace(self):
        assert parse_underlying_assets("(USDC - USDT)") == ["USDC", "USDT"]

    def test_order_of_first_appearance(self):
        assert parse_underlying_assets("DAI-USDC-DAI") == ["DAI", "USDC"]

    def test_empty_symbol(self):
        assert parse_underlying_assets("") == []
        assert parse_underlying_assets("--") == []


class TestAssetClasses:
    def test_stablecoin(self):
        assert is_stablecoin("usdc")
        assert is_stablecoin("crvUSD")
        assert not is_stablecoin("ETH")

    def test_blue_chip_includes_stables(self):
        assert is_blue_chip("ETH")
        assert is_blue_chip("USDT")
        assert not is_blue_chip("PEPE")


# ---------------------------------------------------------------------------
# Risk scorer
# ---------------------------------------------------------------------------


def _pool(**kw) -> RawPool:
    base = {"pool": "p", "chain": "Ethereum", "project": "x", "symbol": "X", "tvlUsd": 1.0, "apy": 1.0}
    base.update(kw)
    return RawPool.model_validate(base)


class TestRiskScore:
    def test_blue_chip_stable_lending_pool_scores_zero(self):
        pool = _pool(tvlUsd=2e9, apy=4, apyBase=4, apyReward=0, stablecoin=True, ilRisk="no", project="aave-v3")
        result = score_risk(pool, "aave-v3", ["USDC"])
        assert result.breakdown.model_dump() == {
            "tvl_score": 0,
            "apy_score": 0,
            "stable_score": 0,
            "il_score": 0,
            "protocol_score": 0,
        }
        assert result.score == 0
        assert result.level == "low"

    def test_small_farm_reaches_105(self):
        pool = _pool(tvlUsd=500_000, apy=85, apyBase=15, apyReward=70, ilRisk="yes", exposure="multi")
        result = score_risk(pool, "bonk-farm", ["BONK", "SOL"])
        assert result.breakdown.tvl_score == 30
        assert result.breakdown.apy_score == 30
        assert result.breakdown.stable_score == 20
        assert result.breakdown.il_score == 15
        assert result.breakdown.protocol_score == 10
        assert result.score == 105
        assert result.level == "very_high"

    def test_score_equals_breakdown_total(self):
        pool = _pool(tvlUsd=40_000_000, apy=18, apyReward=2, ilRisk="yes")
        result = score_risk(pool, "unknown-dex", ["ETH", "USDC"])
        assert result.score == result.breakdown.total

    def test_deterministic(self):
        pool = _pool(tvlUsd=3e7, apy=22, apyReward=20)
        assert score_risk(pool, "x", ["ETH"]) == score_risk(pool, "x", ["ETH"])

    @pytest.mark.parametrize(
        "tvl,expected",
        [(1e9, 0), (999_999_999, 10), (1e8, 10), (1e7, 20), (9_999_999, 30), (0, 30)],
    )
    def test_tvl_tiers(self, tvl, expected):
        assert score_risk(_pool(tvlUsd=tvl), "x", ["ETH"]).breakdown.tvl_score == expected

    @pytest.mark.parametrize(
        "apy,reward,expected",
        [(50.01, 0, 25), (50, 0, 15), (20.5, 0, 15), (10.5, 0, 10), (10, 0, 0), (0.5, 0.8, 5), (12, 9, 15)],
    )
    def test_apy_tiers_and_reward_penalty(self, apy, reward, expected):
        assert apy_score(apy, reward) == expected

    def test_reward_ratio_uses_floor_of_one(self):
        # 0.6 / max(0.5, 1) = 0.6 -> no penalty
        assert apy_score(0.5, 0.6) == 0

    def test_stable_score_tiers(self):
        def stable(assets, flag=False):
            return score_risk(_pool(stablecoin=flag), "x", assets).breakdown.stable_score

        assert stable(["ETH"], flag=True) == 0
        assert stable(["USDC", "DAI"]) == 0
        assert stable(["USDC", "ETH"]) == 5
        assert stable(["ETH", "BTC"]) == 10
        assert stable(["ETH", "PEPE"]) == 20
        assert stable([]) == 0

    def test_il_rules(self):
        assert il_score("no", "multi", ["ETH", "PEPE"], REF) == 0
        assert il_score("yes", "multi", ["ETH"], REF) == 0
        assert il_score("yes", "single", ["ETH", "PEPE"], REF) == 0
        assert il_score("yes", "multi", ["USDC", "USDT"], REF) == 5
        assert il_score("yes", "multi", ["ETH", "USDC"], REF) == 15
        assert il_score("yes", "multi", ["ETH", "USDC", "DAI"], REF) == 15
        assert il_score(None, None, ["ETH", "USDC", "DAI"], REF) == 15

    def test_protocol_score(self):
        assert score_risk(_pool(tvlUsd=1e6), "lido", ["ETH"]).breakdown.protocol_score == 0
        assert score_risk(_pool(tvlUsd=2e8), "newcomer", ["ETH"]).breakdown.protocol_score == 3
        assert score_risk(_pool(tvlUsd=1e8), "newcomer", ["ETH"]).breakdown.protocol_score == 10

    def test_malformed_numbers_count_as_zero(self):
        pool = _pool(tvlUsd="not-a-number", apy=None, apyReward=float("nan"))
        result = score_risk(pool, "x", ["ETH"])
        assert result.breakdown.tvl_score == 30
        assert result.breakdown.apy_score == 0

    def test_injected_reference(self):
        ref = ReferenceConfig(established_protocols=["my-dex"])
        pool = _pool(tvlUsd=5e6)
        assert score_risk(pool, "my-dex", ["ETH"], ref).breakdown.protocol_score == 0
        assert score_risk(pool, "aave-v3", ["ETH"], ref).breakdown.protocol_score == 10

    @pytest.mark.parametrize(
        "score,level",
        [(0, "low"), (20, "low"), (21, "medium"), (40, "medium"), (41, "high"), (60, "high"), (61, "very_high"), (105, "very_high")],
    )
    def test_level_bands(self, score, level):
        assert risk_level_for(score) == level


# ---------------------------------------------------------------------------
# Liquidity modeler
# ---------------------------------------------------------------------------


class TestSlippage:
    def test_formula(self):
        # ratio 0.01 -> 0.01 * 100 * 1.0 * 1.02 = 1.02
        assert estimate_slippage(1_000_000, 100_000_000) == 1.02

    def test_factor_applied(self):
        assert estimate_slippage(1_000_000, 100_000_000, 0.5) == 0.51

    def test_zero_tvl_is_total_loss(self):
        assert estimate_slippage(10_000, 0) == 100.0

    def test_capped_at_100(self):
        assert estimate_slippage(10_000_000, 1_000_000) == 100.0

    def test_rounds_half_up(self):
        # ratio 0.0005 -> 0.05 * 1.001 = 0.05005 -> 0.05
        assert estimate_slippage(5_000, 10_000_000) == 0.05

    def test_tiny_positive_tvl_is_capped(self):
        # ratio overflows the quadratic term to inf
        assert estimate_slippage(1_000_000, 1e-300) == 100.0


class TestLiquidityRisk:
    def test_archetype_factors(self):
        assert slippage_factor_for("aave-v3") == 0.5
        assert slippage_factor_for("lido") == 0.3
        assert slippage_factor_for("jito-liquid-staking") == 0.3
        assert slippage_factor_for("uniswap-v3") == 1.0

    def test_safe_allocation_tiers(self):
        assert safe_allocation_percent(2e9) == 5
        assert safe_allocation_percent(2e8) == 3
        assert safe_allocation_percent(2e7) == 2
        assert safe_allocation_percent(2e6) == 1
        assert safe_allocation_percent(2e9, lending=True) == 10

    def test_large_lending_pool(self):
        risk = assess_liquidity(2e9, "aave-v3")
        assert risk.safe_allocation_percent == 10
        assert risk.max_safe_allocation == pytest.approx(2e8)
        # base 5, -10 lending -> 0, deep slippage keeps it at 0
        assert risk.score == 0
        assert risk.exitability_rating == "excellent"
        assert risk.pool_tvl == 2e9

    def test_small_dex_pool(self):
        risk = assess_liquidity(500_000, "tiny-dex")
        # base 90, $1M slippage way above 5% -> 100
        assert risk.score == 100
        assert risk.exitability_rating == "very_poor"
        assert risk.slippage_estimates.at_10m == 100.0

    def test_mid_pool_without_adjustment(self):
        risk = assess_liquidity(60_000_000, "uniswap-v3")
        # $1M slippage: ratio 1/60 -> ~1.72%, inside [0.5, 5]
        assert risk.score == 30
        assert risk.exitability_rating == "good"

    def test_score_bounds(self):
        for tvl in (0, 1, 1e5, 1e6, 5e6, 1e7, 5e7, 1e8, 5e8, 1e9, 1e11):
            for slug in ("aave-v3", "lido", "other"):
                assert 0 <= assess_liquidity(tvl, slug).score <= 100

    @pytest.mark.parametrize("slug", ["aave-v3", "lido", "curve-dex"])
    def test_monotonic_in_tvl(self, slug):
        tvls = [1e5, 5e5, 1e6, 3e6, 1e7, 4e7, 1e8, 6e8, 1e9, 5e9]
        results = [assess_liquidity(t, slug) for t in tvls]
        allocations = [r.max_safe_allocation for r in results]
        slippages = [r.slippage_estimates.at_1m for r in results]
        assert allocations == sorted(allocations)
        assert slippages == sorted(slippages, reverse=True)

    @pytest.mark.parametrize(
        "score,rating",
        [(15, "excellent"), (16, "good"), (30, "good"), (50, "moderate"), (70, "poor"), (71, "very_poor")],
    )
    def test_exitability_bands(self, score, rating):
        assert exitability_for(score) == rating


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


class TestPoolDependencies:
    def test_ordering_and_risk(self):
        deps = pool_dependencies("morpho", "Ethereum", ["USDC", "PEPE"])
        assert [(d.type, d.name, d.risk) for d in deps] == [
            ("chain", "Ethereum", "low"),
            ("protocol", "aave-v3", "low"),
            ("protocol", "compound-v3", "low"),
            ("oracle", "chainlink", "low"),
            ("asset", "USDC", "low"),
            ("asset", "PEPE", "high"),
        ]

    def test_unlisted_chain_and_upstream(self):
        deps = pool_dependencies("kamino-finance", "Sui", [])
        assert deps[0].risk == "medium"
        meteora = next(d for d in deps if d.name == "meteora")
        assert meteora.risk == "medium"
