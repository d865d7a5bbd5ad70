"""Configuration schema: Pydantic models for config.yaml."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from yield_analytics.config import defaults


class SourceConfig(BaseModel):
    yields_url: str = "https://yields.llama.fi"
    protocols_url: str = "https://api.llama.fi"
    timeout_s: float = 30.0
    # Bulk list retries only; per-pool history is single-attempt.
    retry_attempts: int = Field(default=3, ge=1)
    retry_backoff_s: float = Field(default=1.0, ge=0.0)


class ProcessingConfig(BaseModel):
    min_tvl: float = Field(default=100_000, ge=0)
    max_apy: float = Field(default=10_000, gt=0)
    min_protocol_tvl: float = Field(default=1_000_000, ge=0)


class HistoryConfig(BaseModel):
    enabled: bool = True
    min_tvl: float = Field(default=1_000_000, ge=0)
    max_pools: int = Field(default=500, ge=0)
    batch_size: int = Field(default=10, ge=1)
    batch_delay_s: float = Field(default=0.5, ge=0.0)
    window: int = Field(default=30, ge=7)
    progress_every: int = Field(default=100, ge=1)


class SpreadConfig(BaseModel):
    min_spread: float = Field(default=1.0, ge=0.0)
    position_size: float = Field(default=10_000, gt=0)
    top_n: int = Field(default=5, ge=0)
    cache_ttl_s: float = 300.0
    cache_max_entries: int = Field(default=128, ge=1)


class KnownIntegration(BaseModel):
    source: str
    target: str
    type: Literal["parent_child", "yield_source", "same_ecosystem", "integration"]
    evidence: str


class ReferenceConfig(BaseModel):
    """Allow-lists and lookup tables consumed by the scorers."""

    stablecoins: frozenset[str] = frozenset(defaults.STABLECOINS)
    blue_chip_assets: frozenset[str] = frozenset(defaults.BLUE_CHIP_ASSETS)
    established_protocols: frozenset[str] = frozenset(defaults.ESTABLISHED_PROTOCOLS)
    lending_protocols: tuple[str, ...] = defaults.LENDING_PROTOCOLS
    liquid_staking_protocols: tuple[str, ...] = defaults.LIQUID_STAKING_PROTOCOLS
    asset_variants: dict[str, str] = Field(default_factory=lambda: dict(defaults.ASSET_VARIANTS))
    low_risk_chains: frozenset[str] = frozenset(defaults.LOW_RISK_CHAINS)
    protocol_dependencies: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in defaults.PROTOCOL_DEPENDENCIES.items()}
    )
    known_integrations: list[KnownIntegration] = Field(
        default_factory=lambda: [KnownIntegration(**row) for row in defaults.KNOWN_INTEGRATIONS]
    )
    ecosystem_categories: frozenset[str] = frozenset(defaults.ECOSYSTEM_CATEGORIES)
    excluded_protocol_categories: frozenset[str] = frozenset(defaults.EXCLUDED_PROTOCOL_CATEGORIES)

    @field_validator("stablecoins", "blue_chip_assets", mode="after")
    @classmethod
    def _upper_assets(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(s.upper() for s in value)

    @field_validator("asset_variants", mode="after")
    @classmethod
    def _upper_variants(cls, value: dict[str, str]) -> dict[str, str]:
        return {k.upper(): v.upper() for k, v in value.items()}

    @property
    def blue_chip_or_stable(self) -> frozenset[str]:
        return self.blue_chip_assets | self.stablecoins


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class OutputConfig(BaseModel):
    dataset_path: str = "data/defi-relationships.json"


class AppConfig(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    spreads: SpreadConfig = Field(default_factory=SpreadConfig)
    reference: ReferenceConfig = Field(default_factory=ReferenceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
