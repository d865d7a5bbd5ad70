"""Pool processor: raw aggregator records to risk-annotated ProcessedPools."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from yield_analytics.config.schema import ReferenceConfig
from yield_analytics.logging.setup import get_logger
from yield_analytics.models.history import ApyStability
from yield_analytics.models.pool import ProcessedPool, RawPool
from yield_analytics.scoring.assets import default_reference, parse_underlying_assets
from yield_analytics.scoring.dependencies import pool_dependencies
from yield_analytics.scoring.liquidity import assess_liquidity
from yield_analytics.scoring.risk import score_risk

log = get_logger(__name__)

DEFAULT_MIN_TVL = 100_000
DEFAULT_MAX_APY = 10_000

_WHITESPACE = re.compile(r"\s+")


def project_slug_for(project: str) -> str:
    """'Aave V3' -> 'aave-v3'."""
    return _WHITESPACE.sub("-", project.lower())


def _passes_filters(raw: RawPool, min_tvl: float, max_apy: float) -> bool:
    tvl, apy = raw.tvl_usd, raw.apy
    if tvl is None or not math.isfinite(tvl) or tvl < 0 or tvl < min_tvl:
        return False
    if apy is None or not math.isfinite(apy):
        return False
    return 0 < apy <= max_apy


def process_pool(
    raw: RawPool,
    *,
    protocol_categories: Mapping[str, str] | None = None,
    reference: ReferenceConfig | None = None,
) -> ProcessedPool:
    """Annotate a single pool. Filtering is the caller's concern."""
    ref = reference or default_reference()
    slug = project_slug_for(raw.project)
    assets = parse_underlying_assets(raw.symbol, ref)
    risk = score_risk(raw, slug, assets, ref)

    category = raw.category
    if category is None and protocol_categories:
        category = protocol_categories.get(slug)

    fields = raw.model_dump(exclude={"category"})
    fields.update(
        apy_base=raw.apy_base or 0.0,
        apy_reward=raw.apy_reward or 0.0,
        stablecoin=bool(raw.stablecoin),
        il_risk=raw.il_risk or "unknown",
        category=category.lower() if category else None,
        project_slug=slug,
        underlying_assets=assets,
        risk_score=risk.score,
        risk_level=risk.level,
        risk_breakdown=risk.breakdown,
        liquidity_risk=assess_liquidity(raw.tvl_usd, slug, ref),
        dependencies=pool_dependencies(slug, raw.chain, assets, ref),
    )
    return ProcessedPool.model_validate(fields)


def process_pools(
    raw_items: Iterable[RawPool | Mapping[str, Any]],
    *,
    min_tvl: float = DEFAULT_MIN_TVL,
    max_apy: float = DEFAULT_MAX_APY,
    protocol_categories: Mapping[str, str] | None = None,
    reference: ReferenceConfig | None = None,
) -> list[ProcessedPool]:
    """Validate, filter and score a raw pool list; result is TVL descending.

    Records that fail validation are dropped with a warning. Pools below
    *min_tvl*, with non-positive APY, or APY above *max_apy* are skipped.
    """
    processed: list[ProcessedPool] = []
    invalid = 0
    filtered = 0

    for item in raw_items:
        if isinstance(item, RawPool):
            raw = item
        else:
            try:
                raw = RawPool.model_validate(item)
            except ValidationError as exc:
                invalid += 1
                pool_id = item.get("pool") if isinstance(item, Mapping) else None
                log.warning("pool_record_invalid", pool=pool_id, errors=exc.error_count())
                continue

        if not _passes_filters(raw, min_tvl, max_apy):
            filtered += 1
            continue

        processed.append(
            process_pool(raw, protocol_categories=protocol_categories, reference=reference)
        )

    processed.sort(key=lambda p: p.tvl_usd, reverse=True)
    log.info("pools_processed", kept=len(processed), invalid=invalid, filtered=filtered)
    return processed


def attach_stability(
    pools: Iterable[ProcessedPool],
    stability_by_id: Mapping[str, ApyStability],
) -> list[ProcessedPool]:
    """Return fresh copies with ``apy_stability`` filled where known."""
    out: list[ProcessedPool] = []
    for pool in pools:
        stability = stability_by_id.get(pool.id)
        if stability is None:
            out.append(pool.model_copy())
        else:
            out.append(pool.model_copy(update={"apy_stability": stability}))
    return out
