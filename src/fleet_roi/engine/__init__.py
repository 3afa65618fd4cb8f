"""Engine — validation, scenario adjustment and ROI computation."""

from fleet_roi.engine.validation import (
    validate_inputs,
    format_validation_errors,
    can_calculate,
    validation_summary,
)
from fleet_roi.engine.scenario import apply_scenario, SCENARIOS, SCENARIO_MULTIPLIERS
from fleet_roi.engine.savings import compute_savings, compute_program_costs, compute_simple_roi
from fleet_roi.engine.cashflow import build_timeline, calculate_roi, find_payback_month
from fleet_roi.engine.straight_line import calculate_straight_line
from fleet_roi.engine.orchestrator import run_engine, recompute, ENGINE_MODES

__all__ = [
    "validate_inputs",
    "format_validation_errors",
    "can_calculate",
    "validation_summary",
    "apply_scenario",
    "SCENARIOS",
    "SCENARIO_MULTIPLIERS",
    "compute_savings",
    "compute_program_costs",
    "compute_simple_roi",
    "build_timeline",
    "calculate_roi",
    "find_payback_month",
    "calculate_straight_line",
    # Orchestration
    "run_engine",
    "recompute",
    "ENGINE_MODES",
]
