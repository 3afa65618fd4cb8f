"""Example fleets — YAML presets shipped with the package."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml

from fleet_roi.config.inputs import merge_with_defaults

PRESET_DIR = Path(__file__).resolve().parent.parent / "presets"


def list_presets() -> list[str]:
    """Names of the bundled presets, sorted."""
    return sorted(p.stem for p in PRESET_DIR.glob("*.yaml"))


def read_preset(name: str) -> dict[str, Any]:
    """Raw preset document: ``name``, ``description`` and ``inputs`` overrides."""
    path = PRESET_DIR / f"{name}.yaml"
    if not path.is_file():
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(list_presets())}")
    with open(path) as f:
        return yaml.safe_load(f)


def load_preset(name: str, today: date | None = None) -> dict[str, Any]:
    """Preset overrides merged onto the default inputs (python field names)."""
    return merge_with_defaults(read_preset(name).get("inputs", {}), today)
