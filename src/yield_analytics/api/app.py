"""FastAPI application serving the processed yield dataset."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from yield_analytics.config.loader import load_config
from yield_analytics.config.schema import AppConfig
from yield_analytics.metrics.cache import ResultCache
from yield_analytics.metrics.summary import summarize_dataset
from yield_analytics.models.dataset import DefiDataset
from yield_analytics.orchestrator.persistence import load_dataset
from yield_analytics.query.graph import GraphQuery, build_graph_view
from yield_analytics.query.yields import YieldQuery, filter_yields
from yield_analytics.spreads.detector import detect_yield_spreads

logger = structlog.get_logger()

MISSING_DATASET_MESSAGE = "Dataset not found. Run 'yield-analytics' to fetch data."


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the API. The dataset file is re-read on every request."""
    cfg = config or load_config()
    dataset_path = cfg.output.dataset_path
    spread_cache = ResultCache(
        ttl_seconds=cfg.spreads.cache_ttl_s,
        max_entries=cfg.spreads.cache_max_entries,
    )

    app = FastAPI(
        title="Yield Analytics API",
        description="Risk, liquidity and stability annotated DeFi yield pools",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.state.spread_cache = spread_cache

    def _dataset() -> DefiDataset | None:
        dataset = load_dataset(dataset_path)
        if dataset is None:
            logger.warning("dataset_missing", path=dataset_path)
        return dataset

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/api/yields")
    async def list_yields(
        chain: Optional[str] = None,
        min_apy: float = Query(0.0, alias="minApy"),
        max_apy: Optional[float] = Query(None, alias="maxApy"),
        stablecoin_only: bool = Query(False, alias="stablecoinOnly"),
        risk_level: Optional[str] = Query(None, alias="riskLevel"),
        max_risk_score: Optional[int] = Query(None, alias="maxRiskScore"),
        min_tvl: float = Query(0.0, alias="minTvl"),
        stable_only: bool = Query(False, alias="stableOnly"),
        min_stability: int = Query(0, alias="minStability"),
        trend: Optional[str] = None,
        sort_by: str = Query("tvl", alias="sortBy"),
        limit: int = Query(100, ge=0),
    ):
        """Processed yield pools, filtered and sorted."""
        try:
            query = YieldQuery(
                chain=chain,
                min_apy=min_apy,
                max_apy=max_apy,
                stablecoin_only=stablecoin_only,
                risk_level=risk_level,
                max_risk_score=max_risk_score,
                min_tvl=min_tvl,
                stable_only=stable_only,
                min_stability=min_stability,
                trend=trend,
                sort_by=sort_by,
                limit=limit,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
        dataset = _dataset()
        if dataset is None:
            return {"yields": [], "total": 0, "message": MISSING_DATASET_MESSAGE}
        pools = filter_yields(dataset.yields, query)
        return {
            "yields": [p.to_wire() for p in pools],
            "total": len(pools),
            "fetchedAt": dataset.metadata.fetched_at.isoformat(),
        }

    @app.get("/api/spreads")
    async def list_spreads(
        chain: Optional[str] = None,
        min_spread: float = Query(1.0, alias="minSpread", ge=0),
        asset: Optional[str] = None,
    ):
        """Cross-protocol yield spreads over the stored pools."""
        dataset = _dataset()
        filters = {"chain": chain or "all", "minSpread": min_spread, "asset": asset or "all"}
        if dataset is None:
            return {"spreads": [], "topOpportunities": [], "filters": filters, "message": MISSING_DATASET_MESSAGE}

        key = (dataset.metadata.fetched_at, chain, min_spread, (asset or "").upper())
        result = spread_cache.get_or_compute(
            key,
            lambda: detect_yield_spreads(
                dataset.yields,
                chain=chain,
                min_spread=min_spread,
                asset=asset,
                position_size=cfg.spreads.position_size,
                top_n=cfg.spreads.top_n,
                reference=cfg.reference,
            ),
        )
        return {**result.to_wire(), "filters": filters}

    @app.get("/api/relationships")
    async def relationships(
        category: Optional[str] = None,
        chain: Optional[str] = None,
        rel_type: Optional[str] = Query(None, alias="type"),
        min_tvl: float = Query(0.0, alias="minTvl"),
        limit: int = Query(100, ge=0),
    ):
        """Protocol graph: filtered protocols, edges, nodes and links."""
        try:
            query = GraphQuery(category=category, chain=chain, type=rel_type, min_tvl=min_tvl, limit=limit)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
        dataset = _dataset()
        if dataset is None:
            return {
                "protocols": [],
                "relationships": [],
                "nodes": [],
                "links": [],
                "message": MISSING_DATASET_MESSAGE,
            }
        view = build_graph_view(dataset, query)
        return {
            **view.to_wire(),
            "metadata": {
                "totalProtocols": len(view.protocols),
                "totalRelationships": len(view.relationships),
                "categories": dataset.metadata.categories,
                "chains": dataset.metadata.chains,
                "fetchedAt": dataset.metadata.fetched_at.isoformat(),
            },
        }

    @app.get("/api/summary")
    async def summary():
        """Risk and stability distributions plus ranked picks."""
        dataset = _dataset()
        if dataset is None:
            return {"totalPools": 0, "message": MISSING_DATASET_MESSAGE}
        return summarize_dataset(dataset.yields).to_wire()

    return app
