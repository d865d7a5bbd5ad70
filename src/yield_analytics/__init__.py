"""Yield pool risk, liquidity and APY stability analytics."""

__version__ = "0.1.0"
