"""Scenario adjuster — scale the program-effect assumptions up or down."""

from __future__ import annotations

from typing import Literal

from fleet_roi.config.inputs import CalculatorInputs
from fleet_roi.config.schema import SENSITIVITY_FIELDS

ScenarioName = Literal["conservative", "base", "aggressive"]

SCENARIO_MULTIPLIERS: dict[str, float] = {
    "conservative": 0.75,
    "base": 1.0,
    "aggressive": 1.25,
}

SCENARIOS: tuple[ScenarioName, ...] = ("conservative", "base", "aggressive")


def normalize_scenario(scenario: str | None) -> ScenarioName:
    """Known scenario name, or ``"base"`` for anything else."""
    return scenario if scenario in SCENARIO_MULTIPLIERS else "base"  # type: ignore[return-value]


def apply_scenario(inputs: CalculatorInputs, scenario: str | None) -> CalculatorInputs:
    """Copy of ``inputs`` with the sensitivity fields scaled for ``scenario``.

    Unrecognised scenarios behave as ``base`` and return ``inputs`` unchanged.
    The copy skips re-validation: an aggressive 50% fuel saving becomes 62.5%.
    """
    multiplier = SCENARIO_MULTIPLIERS[normalize_scenario(scenario)]
    if multiplier == 1.0:
        return inputs
    return inputs.model_copy(
        update={name: getattr(inputs, name) * multiplier for name in SENSITIVITY_FIELDS},
    )
