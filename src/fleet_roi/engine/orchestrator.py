"""Orchestrator — engine selection and the validate → scenario → engine cycle.

Entry points:
  - ``run_engine(inputs, mode)`` routes validated inputs to one engine:
      ``"full"``               → ramped monthly timeline (``cashflow.calculate_roi``)
      ``"straight_line"``      → ceil(initial / net monthly) fast path
      ``"straight_line_lean"`` → fast path without hardware capex
  - ``recompute(raw, scenario, mode)`` runs one complete cycle from a raw
    record.  Validation errors stop the cycle before any engine runs.

Every call is a pure function of its arguments; nothing is cached.
"""

from __future__ import annotations

import logging
import typing
from datetime import date
from typing import Any, Mapping

from fleet_roi.config.inputs import CalculatorInputs
from fleet_roi.engine.cashflow import calculate_roi
from fleet_roi.engine.scenario import apply_scenario, normalize_scenario
from fleet_roi.engine.straight_line import calculate_straight_line
from fleet_roi.engine.validation import validate_inputs
from fleet_roi.models.results import EngineMode, EngineResult, Recompute

logger = logging.getLogger(__name__)

ENGINE_MODES: tuple[str, ...] = typing.get_args(EngineMode)


def run_engine(inputs: CalculatorInputs, mode: str = "full") -> EngineResult:
    """Run the engine selected by ``mode`` on validated inputs."""
    if mode == "full":
        return calculate_roi(inputs)
    if mode == "straight_line":
        return calculate_straight_line(inputs, include_hardware=True)
    if mode == "straight_line_lean":
        return calculate_straight_line(inputs, include_hardware=False)
    raise ValueError(f"Unknown engine mode '{mode}'. Expected one of: {', '.join(ENGINE_MODES)}")


def recompute(
    raw: Mapping[str, Any],
    scenario: str | None = "base",
    mode: str = "full",
    today: date | None = None,
) -> Recompute:
    """Validate ``raw``, apply ``scenario`` and run the ``mode`` engine.

    Returns the validation result alongside the engine output so callers can
    redisplay coerced values and per-field errors when ``result`` is None.
    """
    if mode not in ENGINE_MODES:
        raise ValueError(f"Unknown engine mode '{mode}'. Expected one of: {', '.join(ENGINE_MODES)}")

    scenario_name = normalize_scenario(scenario)
    validation = validate_inputs(raw, today)
    if not validation.is_valid or validation.inputs is None:
        return Recompute(scenario=scenario_name, mode=mode, validation=validation)

    adjusted = apply_scenario(validation.inputs, scenario_name)
    result = run_engine(adjusted, mode)
    logger.debug(
        "Recomputed scenario=%s mode=%s payback=%s roi=%.2f",
        scenario_name, mode, result.payback_months, result.roi_simple_pct,
    )
    return Recompute(
        scenario=scenario_name,
        mode=mode,
        validation=validation,
        adjusted_inputs=adjusted,
        result=result,
    )
