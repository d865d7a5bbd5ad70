"""Infrastructure a pool relies on: its chain, upstream protocols, oracle and assets."""

from __future__ import annotations

from yield_analytics.config.schema import ReferenceConfig
from yield_analytics.models.pool import PoolDependency
from yield_analytics.scoring.assets import default_reference, is_blue_chip

DEFAULT_ORACLE = "chainlink"


def pool_dependencies(
    project_slug: str,
    chain: str,
    underlying_assets: list[str],
    reference: ReferenceConfig | None = None,
) -> list[PoolDependency]:
    ref = reference or default_reference()
    deps = [
        PoolDependency(
            type="chain",
            name=chain,
            risk="low" if chain in ref.low_risk_chains else "medium",
        )
    ]
    for upstream in ref.protocol_dependencies.get(project_slug, []):
        deps.append(
            PoolDependency(
                type="protocol",
                name=upstream,
                risk="low" if upstream in ref.established_protocols else "medium",
            )
        )
    deps.append(PoolDependency(type="oracle", name=DEFAULT_ORACLE, risk="low"))
    for asset in underlying_assets:
        deps.append(
            PoolDependency(
                type="asset",
                name=asset,
                risk="low" if is_blue_chip(asset, ref) else "high",
            )
        )
    return deps
