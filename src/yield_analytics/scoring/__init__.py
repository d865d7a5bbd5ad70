"""Pure scoring functions: assets, risk, liquidity and dependencies."""
