"""Historical fetcher: batched, rate-limited APY history retrieval.

Pools are fetched in fixed-size batches. Within a batch every fetch runs
concurrently; between batches the fetcher pauses so the upstream chart
endpoint is not hammered. A failure for one pool never aborts its batch.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Literal, Protocol

from yield_analytics.history.stability import DEFAULT_WINDOW, calculate_apy_stability
from yield_analytics.logging.setup import get_logger
from yield_analytics.models.history import ApyStability, HistoryPoint
from yield_analytics.models.pool import ProcessedPool

log = get_logger(__name__)

HistoryOutcome = Literal["ok", "insufficient_data", "no_history", "failed"]
ProgressCallback = Callable[[int, int, int], None]


class HistorySource(Protocol):
    async def get_pool_history(self, pool_id: str) -> list[HistoryPoint]: ...


@dataclass
class HistoryFetchResult:
    """Stability per pool plus per-pool outcomes and run counters."""

    stability: dict[str, ApyStability] = field(default_factory=dict)
    outcomes: dict[str, HistoryOutcome] = field(default_factory=dict)
    requested: int = 0
    processed: int = 0
    with_data: int = 0
    failed: int = 0


class _Accumulator:
    """Collects per-pool results from concurrent tasks under a lock."""

    def __init__(self, requested: int) -> None:
        self._lock = asyncio.Lock()
        self.result = HistoryFetchResult(requested=requested)

    async def record(
        self,
        pool_id: str,
        outcome: HistoryOutcome,
        stability: ApyStability | None = None,
    ) -> None:
        async with self._lock:
            res = self.result
            res.outcomes[pool_id] = outcome
            res.processed += 1
            if stability is not None:
                res.stability[pool_id] = stability
                res.with_data += 1
            if outcome == "failed":
                res.failed += 1


def select_history_targets(
    pools: Sequence[ProcessedPool],
    min_tvl: float,
    max_pools: int,
) -> list[ProcessedPool]:
    """Pools at or above *min_tvl*, first *max_pools* in caller order."""
    return [p for p in pools if p.tvl_usd >= min_tvl][:max_pools]


async def _fetch_one(
    pool: ProcessedPool,
    source: HistorySource,
    window: int,
    acc: _Accumulator,
) -> None:
    try:
        history = await source.get_pool_history(pool.id)
    except Exception as exc:
        log.warning("history_fetch_failed", pool=pool.id, error=str(exc))
        await acc.record(pool.id, "failed")
        return

    if not history:
        await acc.record(pool.id, "no_history")
        return

    try:
        stability = calculate_apy_stability(history, window)
    except Exception as exc:
        log.warning("history_analysis_failed", pool=pool.id, error=str(exc))
        await acc.record(pool.id, "failed")
        return

    if stability is None:
        await acc.record(pool.id, "insufficient_data")
    else:
        await acc.record(pool.id, "ok", stability)


async def fetch_stability_for_pools(
    pools: Sequence[ProcessedPool],
    source: HistorySource,
    *,
    min_tvl: float = 1_000_000,
    max_pools: int = 500,
    batch_size: int = 10,
    batch_delay_s: float = 0.5,
    window: int = DEFAULT_WINDOW,
    progress_every: int = 100,
    on_progress: ProgressCallback | None = None,
) -> HistoryFetchResult:
    """Fetch history for the top pools and compute their APY stability.

    *on_progress* is called after every batch with
    ``(processed, total, with_data)``.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    if progress_every < 1:
        raise ValueError("progress_every must be >= 1")

    targets = select_history_targets(pools, min_tvl, max_pools)
    total = len(targets)
    acc = _Accumulator(requested=total)
    log.info("history_fetch_started", pools=total, batch_size=batch_size)

    last_reported = 0
    for start in range(0, total, batch_size):
        batch = targets[start:start + batch_size]
        await asyncio.gather(*(_fetch_one(p, source, window, acc) for p in batch))

        res = acc.result
        if on_progress is not None:
            on_progress(res.processed, total, res.with_data)
        crossed = res.processed // progress_every > last_reported // progress_every
        if crossed or res.processed == total:
            log.info(
                "history_progress",
                processed=res.processed,
                total=total,
                with_data=res.with_data,
            )
            last_reported = res.processed

        if start + batch_size < total:
            await asyncio.sleep(batch_delay_s)

    res = acc.result
    log.info(
        "history_fetch_finished",
        requested=res.requested,
        with_data=res.with_data,
        failed=res.failed,
    )
    return res
