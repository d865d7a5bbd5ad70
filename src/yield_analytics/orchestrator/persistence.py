"""Dataset persistence: the processed dataset as one camelCase JSON file."""

from __future__ import annotations

import json
from pathlib import Path

from yield_analytics.models.dataset import DefiDataset


def save_dataset(dataset: DefiDataset, path: str | Path) -> Path:
    """Write *dataset* to *path*, creating parent directories. Returns the path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with open(tmp, "w") as f:
        json.dump(dataset.to_wire(), f, indent=2)
    tmp.replace(p)
    return p


def load_dataset(path: str | Path) -> DefiDataset | None:
    """Read a dataset written by :func:`save_dataset`; ``None`` if absent."""
    p = Path(path)
    if not p.exists():
        return None
    with open(p) as f:
        return DefiDataset.model_validate(json.load(f))
