"""Local persistence — last-used inputs in a JSON file."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from fleet_roi.config.inputs import CalculatorInputs, merge_with_defaults

logger = logging.getLogger(__name__)


class InputStore:
    """Reads and writes one inputs file.  No integrity guarantees."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self, today: date | None = None) -> dict[str, Any]:
        """Stored values merged onto defaults; defaults alone if the file is unusable."""
        if not self.path.is_file():
            return merge_with_defaults(None, today)
        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load inputs from %s: %s", self.path, exc)
            return merge_with_defaults(None, today)
        if not isinstance(stored, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return merge_with_defaults(None, today)
        return merge_with_defaults(stored, today)

    def save(self, inputs: CalculatorInputs) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(inputs.model_dump(by_alias=True), indent=2),
            encoding="utf-8",
        )
        logger.info("Saved inputs to %s", self.path)
