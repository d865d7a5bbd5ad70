"""Asset normalizer: canonical token symbols from free-text pool symbols."""

from __future__ import annotations

import re

from yield_analytics.config.schema import ReferenceConfig

_PARENS = re.compile(r"[()]")
# Fee tier suffix, e.g. "WETH-USDC-0.05%"
_FEE_SUFFIX = re.compile(r"-\d+(\.\d+)?%")
_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[-/]")

_DEFAULT_REFERENCE = ReferenceConfig()


def default_reference() -> ReferenceConfig:
    return _DEFAULT_REFERENCE


def normalize_asset(symbol: str, reference: ReferenceConfig | None = None) -> str:
    """Collapse wrapped / staked variants onto their base asset (WSTETH -> ETH)."""
    ref = reference or _DEFAULT_REFERENCE
    upper = symbol.strip().upper()
    return ref.asset_variants.get(upper, upper)


def parse_underlying_assets(symbol: str, reference: ReferenceConfig | None = None) -> list[str]:
    """Split a pool symbol into canonical assets, first appearance wins.

    >>> parse_underlying_assets("WETH-USDC-0.05%")
    ['ETH', 'USDC']
    """
    if not symbol:
        return []
    cleaned = _PARENS.sub("", symbol)
    cleaned = _FEE_SUFFIX.sub("", cleaned)
    cleaned = _WHITESPACE.sub("", cleaned)

    assets: list[str] = []
    for part in _SEPARATORS.split(cleaned):
        if not part:
            continue
        asset = normalize_asset(part, reference)
        if asset not in assets:
            assets.append(asset)
    return assets


def is_stablecoin(asset: str, reference: ReferenceConfig | None = None) -> bool:
    ref = reference or _DEFAULT_REFERENCE
    return asset.upper() in ref.stablecoins


def is_blue_chip(asset: str, reference: ReferenceConfig | None = None) -> bool:
    """Blue-chip includes every stablecoin."""
    ref = reference or _DEFAULT_REFERENCE
    return asset.upper() in ref.blue_chip_or_stable
