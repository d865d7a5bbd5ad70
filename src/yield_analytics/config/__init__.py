"""Configuration system."""

from yield_analytics.config.loader import load_config
from yield_analytics.config.schema import AppConfig, ReferenceConfig

__all__ = ["AppConfig", "ReferenceConfig", "load_config"]
