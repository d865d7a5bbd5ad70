"""Config loader: reads YAML, applies YIELD_* env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from yield_analytics.config.schema import AppConfig

# env var -> (section, key)
_ENV_OVERRIDES = {
    "YIELD_LOG_LEVEL": ("logging", "level"),
    "YIELD_LOG_FORMAT": ("logging", "format"),
    "YIELD_DATASET_PATH": ("output", "dataset_path"),
    "YIELD_YIELDS_URL": ("source", "yields_url"),
    "YIELD_PROTOCOLS_URL": ("source", "protocols_url"),
}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        YIELD_LOG_LEVEL      -> logging.level
        YIELD_LOG_FORMAT     -> logging.format
        YIELD_DATASET_PATH   -> output.dataset_path
        YIELD_YIELDS_URL     -> source.yields_url
        YIELD_PROTOCOLS_URL  -> source.protocols_url
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data.setdefault(section, {})[key] = value

    return AppConfig.model_validate(data)
