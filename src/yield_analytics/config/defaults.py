"""Default reference tables used by the scorers.

These are the production allow-lists. They are only defaults: every table
can be replaced from the ``reference:`` section of config.yaml.
"""

from __future__ import annotations

STABLECOINS: tuple[str, ...] = (
    "USDC", "USDT", "DAI", "FRAX", "LUSD", "GUSD", "BUSD", "TUSD", "USDP",
    "USDD", "PYUSD", "GHO", "CRVUSD", "DOLA", "MIM", "UST", "SUSD", "RAI",
    "USDS", "SUSDS", "USD0", "EURC", "EURT", "EURS",
)

# Stablecoins are blue-chip too; the scorer unions the two sets.
BLUE_CHIP_ASSETS: tuple[str, ...] = (
    "ETH", "WETH", "STETH", "WSTETH", "RETH", "CBETH", "WEETH",
    "BTC", "WBTC", "CBBTC", "TBTC",
    "SOL", "WSOL", "MSOL", "JITOSOL", "BSOL",
)

ESTABLISHED_PROTOCOLS: tuple[str, ...] = (
    "aave-v3", "aave", "compound-v3", "compound", "maker", "lido", "rocket-pool",
    "uniswap-v3", "uniswap", "curve-dex", "convex-finance", "yearn-finance",
    "balancer", "frax", "instadapp", "morpho", "spark", "sky-lending",
    "jito-liquid-staking", "marinade-finance", "raydium", "orca", "jupiter",
)

LENDING_PROTOCOLS: tuple[str, ...] = (
    "aave", "aave-v3", "compound", "compound-v3", "morpho", "spark",
    "maker", "sky-lending", "maple", "euler", "radiant", "benqi", "venus",
)

LIQUID_STAKING_PROTOCOLS: tuple[str, ...] = (
    "lido", "rocket-pool", "jito", "marinade", "ether.fi", "frax-ether",
)

# Wrapped / staked variant -> canonical base asset.
ASSET_VARIANTS: dict[str, str] = {
    "WETH": "ETH",
    "STETH": "ETH",
    "WSTETH": "ETH",
    "CBETH": "ETH",
    "WEETH": "ETH",
    "RETH": "ETH",
    "WBTC": "BTC",
    "CBBTC": "BTC",
    "TBTC": "BTC",
    "SBTC": "BTC",
    "WSOL": "SOL",
    "MSOL": "SOL",
    "JITOSOL": "SOL",
    "BSOL": "SOL",
    "JITOVSOL": "SOL",
}

LOW_RISK_CHAINS: tuple[str, ...] = ("Ethereum", "Solana", "Arbitrum", "Base", "Optimism")

PROTOCOL_DEPENDENCIES: dict[str, list[str]] = {
    "morpho": ["aave-v3", "compound-v3"],
    "pendle": ["lido", "rocket-pool", "aave-v3"],
    "sommelier": ["aave-v3", "uniswap-v3", "compound-v3"],
    "beefy": ["curve-dex", "convex-finance", "aave-v3"],
    "yearn-finance": ["curve-dex", "aave-v3", "compound-v3"],
    "convex-finance": ["curve-dex"],
    "gearbox": ["curve-dex", "lido", "convex-finance"],
    "eigenlayer": ["lido", "rocket-pool"],
    "ether.fi-stake": ["eigenlayer"],
    "kamino-finance": ["raydium", "orca", "meteora"],
    "kamino-lend": ["kamino-finance"],
    "marginfi": ["solend"],
    "aerodrome": ["velodrome"],
    "extra-finance": ["aerodrome", "velodrome"],
}

KNOWN_INTEGRATIONS: list[dict[str, str]] = [
    {"source": "morpho", "target": "aave-v3", "type": "yield_source", "evidence": "Morpho optimizes Aave lending"},
    {"source": "morpho", "target": "compound-v3", "type": "yield_source", "evidence": "Morpho optimizes Compound lending"},
    {"source": "pendle", "target": "lido", "type": "yield_source", "evidence": "Pendle tokenizes Lido stETH yield"},
    {"source": "pendle", "target": "rocket-pool", "type": "yield_source", "evidence": "Pendle tokenizes rETH yield"},
    {"source": "pendle", "target": "aave-v3", "type": "yield_source", "evidence": "Pendle tokenizes Aave yields"},
    {"source": "sommelier", "target": "aave-v3", "type": "yield_source", "evidence": "Sommelier vaults use Aave"},
    {"source": "sommelier", "target": "uniswap-v3", "type": "yield_source", "evidence": "Sommelier vaults use Uniswap"},
    {"source": "sommelier", "target": "compound-v3", "type": "yield_source", "evidence": "Sommelier vaults use Compound"},
    {"source": "beefy", "target": "curve-dex", "type": "yield_source", "evidence": "Beefy vaults farm Curve pools"},
    {"source": "beefy", "target": "convex-finance", "type": "yield_source", "evidence": "Beefy uses Convex for Curve boosting"},
    {"source": "beefy", "target": "aave-v3", "type": "yield_source", "evidence": "Beefy leverages Aave markets"},
    {"source": "yearn-finance", "target": "curve-dex", "type": "yield_source", "evidence": "Yearn vaults farm Curve"},
    {"source": "yearn-finance", "target": "aave-v3", "type": "yield_source", "evidence": "Yearn strategies use Aave"},
    {"source": "yearn-finance", "target": "compound-v3", "type": "yield_source", "evidence": "Yearn strategies use Compound"},
    {"source": "convex-finance", "target": "curve-dex", "type": "yield_source", "evidence": "Convex boosts Curve rewards"},
    {"source": "gearbox", "target": "curve-dex", "type": "yield_source", "evidence": "Gearbox leveraged strategies on Curve"},
    {"source": "gearbox", "target": "lido", "type": "yield_source", "evidence": "Gearbox leveraged stETH strategies"},
    {"source": "gearbox", "target": "convex-finance", "type": "yield_source", "evidence": "Gearbox leveraged Convex strategies"},
    {"source": "eigenlayer", "target": "lido", "type": "yield_source", "evidence": "EigenLayer restakes stETH"},
    {"source": "eigenlayer", "target": "rocket-pool", "type": "yield_source", "evidence": "EigenLayer restakes rETH"},
    {"source": "kamino-finance", "target": "raydium", "type": "yield_source", "evidence": "Kamino optimizes Raydium LP"},
    {"source": "kamino-finance", "target": "orca", "type": "yield_source", "evidence": "Kamino optimizes Orca LP"},
    {"source": "kamino-finance", "target": "meteora", "type": "yield_source", "evidence": "Kamino integrates Meteora"},
    {"source": "marinade-finance", "target": "solend", "type": "yield_source", "evidence": "mSOL used in Solend"},
    {"source": "aerodrome", "target": "velodrome", "type": "parent_child", "evidence": "Aerodrome is Base fork of Velodrome"},
    {"source": "layerzero", "target": "stargate", "type": "integration", "evidence": "Stargate built on LayerZero"},
]

ECOSYSTEM_CATEGORIES: tuple[str, ...] = (
    "Lending", "Dexes", "Yield", "Yield Aggregator", "Liquid Staking", "Derivatives", "CDP",
)

EXCLUDED_PROTOCOL_CATEGORIES: tuple[str, ...] = ("CEX", "Chain")
