"""
Saving and restoring regularizers.

A regularizer is archived as `{"class": <name>, "config": <get_config()>}`.
Only settings are stored; regularizers carry no other state.
"""
import json
from pathlib import Path

import yaml

from LpReg.errors import InvalidConfiguration


def _registry():
    from LpReg.nn.regularizers import (
        CompositeRegularizer, ElasticNet, LRegularizer, L1Regularizer, L2Regularizer
    )
    return {
        cls.__name__: cls
        for cls in (CompositeRegularizer, ElasticNet, LRegularizer, L1Regularizer, L2Regularizer)
    }


def to_dict(regularizer) -> dict:
    """Return the structured archive for `regularizer`."""
    return {"class": type(regularizer).__name__, "config": regularizer.get_config()}


def from_dict(archive: dict):
    """Rebuild a regularizer from an archive produced by `to_dict`."""
    if not isinstance(archive, dict) or "class" not in archive:
        raise InvalidConfiguration(f"not a regularizer archive: {archive!r}")
    name = archive["class"]
    registry = _registry()
    if name not in registry:
        raise InvalidConfiguration(
            f"unknown regularizer class '{name}'. Known: {sorted(registry)}"
        )
    cfg = archive.get("config") or {}
    if not isinstance(cfg, dict):
        raise InvalidConfiguration(f"config for {name} must be a mapping, got {type(cfg).__name__}")
    try:
        return registry[name].from_config(cfg)
    except TypeError as e:
        raise InvalidConfiguration(f"bad config for {name}: {e}") from e


def save(regularizer, filepath):
    """Save a regularizer to a .yaml/.yml or .json file."""
    path = Path(filepath)
    archive = to_dict(regularizer)
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with open(path, "w") as f:
            yaml.safe_dump(archive, f, sort_keys=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(archive, f, indent=4)
    else:
        raise ValueError(f"Unsupported file type '{suffix}'. Use .yaml, .yml or .json")
    print(f"[LpReg] Saved {archive['class']} to {path}")


def load(filepath):
    """Load a regularizer saved with `save`."""
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with open(path, "r") as f:
            archive = yaml.safe_load(f)
    elif suffix == ".json":
        with open(path, "r") as f:
            archive = json.load(f)
    else:
        raise ValueError(f"Unsupported file type '{suffix}'. Use .yaml, .yml or .json")
    return from_dict(archive)
