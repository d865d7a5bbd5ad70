"""Orchestrator runner: one full fetch, score and persist cycle."""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass

from yield_analytics.config.loader import load_config
from yield_analytics.config.schema import AppConfig
from yield_analytics.graph.relationships import build_relationship_graph, select_defi_protocols
from yield_analytics.history.fetcher import HistoryFetchResult, fetch_stability_for_pools
from yield_analytics.logging.setup import get_logger, setup_logging
from yield_analytics.models.dataset import DefiDataset
from yield_analytics.models.spread import SpreadDetectionResult
from yield_analytics.orchestrator.dataset import build_dataset
from yield_analytics.orchestrator.persistence import save_dataset
from yield_analytics.processing.pools import attach_stability, process_pools
from yield_analytics.sources.defillama import DataSourceError, DefiLlamaClient
from yield_analytics.spreads.detector import detect_yield_spreads

log = get_logger("orchestrator")


@dataclass
class CycleResult:
    dataset: DefiDataset
    spreads: SpreadDetectionResult
    history: HistoryFetchResult | None = None


async def run_cycle(config: AppConfig, client: DefiLlamaClient) -> CycleResult:
    """Fetch, score and assemble one dataset. Bulk fetch failures propagate."""
    raw_protocols, raw_pools = await asyncio.gather(
        client.get_protocols(),
        client.get_pools(),
    )

    ref = config.reference
    protocols = select_defi_protocols(raw_protocols, config.processing.min_protocol_tvl, ref)
    relationships = build_relationship_graph(protocols, ref)
    categories = {p.slug: p.category for p in protocols if p.category}

    pools = process_pools(
        raw_pools,
        min_tvl=config.processing.min_tvl,
        max_apy=config.processing.max_apy,
        protocol_categories=categories,
        reference=ref,
    )

    history: HistoryFetchResult | None = None
    if config.history.enabled:
        hc = config.history
        history = await fetch_stability_for_pools(
            pools,
            client,
            min_tvl=hc.min_tvl,
            max_pools=hc.max_pools,
            batch_size=hc.batch_size,
            batch_delay_s=hc.batch_delay_s,
            window=hc.window,
            progress_every=hc.progress_every,
        )
        pools = attach_stability(pools, history.stability)

    sc = config.spreads
    spreads = detect_yield_spreads(
        pools,
        min_spread=sc.min_spread,
        position_size=sc.position_size,
        top_n=sc.top_n,
        reference=ref,
    )
    dataset = build_dataset(protocols, relationships, pools)

    log.info(
        "cycle_complete",
        protocols=len(protocols),
        relationships=len(relationships),
        pools=len(pools),
        with_stability=history.with_data if history else 0,
        spreads=spreads.spreads_found,
    )
    return CycleResult(dataset=dataset, spreads=spreads, history=history)


async def run(config: AppConfig) -> CycleResult:
    async with DefiLlamaClient.from_config(config.source) as client:
        result = await run_cycle(config, client)
    path = save_dataset(result.dataset, config.output.dataset_path)
    log.info("dataset_saved", path=str(path))
    return result


def main(
    config_path: str | None = None,
    output: str | None = None,
    skip_history: bool = False,
) -> int:
    """Entry point. Load config, set up logging, run one cycle. Returns an exit code."""
    config = load_config(config_path)
    updates = {}
    if output:
        updates["output"] = config.output.model_copy(update={"dataset_path": output})
    if skip_history:
        updates["history"] = config.history.model_copy(update={"enabled": False})
    if updates:
        config = config.model_copy(update=updates)

    setup_logging(level=config.logging.level, log_format=config.logging.format)
    try:
        asyncio.run(run(config))
    except DataSourceError:
        log.exception("cycle_failed")
        return 1
    return 0


def cli(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Fetch and score DeFi yield pools")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--output", default=None, help="Dataset JSON path (overrides config)")
    parser.add_argument("--skip-history", action="store_true", help="Skip the APY history fetch")
    args = parser.parse_args(argv)
    sys.exit(main(config_path=args.config, output=args.output, skip_history=args.skip_history))
