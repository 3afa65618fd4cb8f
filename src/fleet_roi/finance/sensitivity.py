"""Scenario comparison and sensitivity / tornado analysis.

Scenario comparison runs the conservative, base and aggressive scenarios on
the same validated inputs.

Sensitivity varies one input at a time and measures the ROI swing.
Default sweep set:
  - fuel_price_per_litre              ± 20%
  - fuel_savings_pct                  ± 25%
  - accident_reduction_pct            ± 25%
  - adoption_pct                      ± 20%
  - subscription_per_vehicle_per_month ± 15%
  - hardware_cost_per_vehicle         ± 15%

Swept values are clamped to the field's validation range.  A scenario is
applied after each swept value is set, so the sweep runs on the validated
inputs and the scenario multipliers never push a base value out of range.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fleet_roi.config.inputs import CalculatorInputs
from fleet_roi.config.schema import FIELD_RULES
from fleet_roi.engine.orchestrator import run_engine
from fleet_roi.engine.scenario import SCENARIOS, apply_scenario
from fleet_roi.models.results import EngineResult


@dataclass(frozen=True)
class ScenarioOutcome:
    """One scenario's headline numbers plus its full result."""

    scenario: str
    payback_months: int | None
    payback_achieved: bool
    roi_simple_pct: float
    total_savings_annual: float
    result: EngineResult


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    """Human-readable parameter name."""

    field_name: str
    """Input field that was swept."""

    base_value: float
    low_value: float
    high_value: float

    roi_at_low: float
    roi_at_high: float

    payback_at_low: int | None
    payback_at_high: int | None
    """None when the swept scenario never pays back."""

    delta_roi: float
    """abs(roi_at_high − roi_at_low) — total swing width in ROI points."""


@dataclass
class SensitivityResult:
    """Complete sensitivity analysis output."""

    base_roi: float
    base_payback: int | None
    bars: list[TornadoBar] = field(default_factory=list)
    """Tornado bars sorted by delta_roi (descending)."""


DEFAULT_SWEEPS: list[tuple[str, str, float, float]] = [
    ("Fuel price", "fuel_price_per_litre", -0.20, 0.20),
    ("Fuel savings %", "fuel_savings_pct", -0.25, 0.25),
    ("Accident reduction %", "accident_reduction_pct", -0.25, 0.25),
    ("Adoption rate %", "adoption_pct", -0.20, 0.20),
    ("Subscription per vehicle", "subscription_per_vehicle_per_month", -0.15, 0.15),
    ("Hardware cost per vehicle", "hardware_cost_per_vehicle", -0.15, 0.15),
]


def compare_scenarios(inputs: CalculatorInputs, mode: str = "full") -> list[ScenarioOutcome]:
    """Run every named scenario on the same inputs, conservative first."""
    outcomes: list[ScenarioOutcome] = []
    for name in SCENARIOS:
        result = run_engine(apply_scenario(inputs, name), mode)
        outcomes.append(ScenarioOutcome(
            scenario=name,
            payback_months=result.payback_months if result.payback_achieved else None,
            payback_achieved=result.payback_achieved,
            roi_simple_pct=result.roi_simple_pct,
            total_savings_annual=result.total_savings_annual,
            result=result,
        ))
    return outcomes


def _swept_value(field_name: str, base: float, pct: float) -> float:
    """``base × (1 + pct)`` clamped to the field range; ints are rounded."""
    rule = FIELD_RULES[field_name]
    value = base * (1 + pct)
    if rule.minimum is not None:
        value = max(value, rule.minimum)
    if rule.maximum is not None:
        value = min(value, rule.maximum)
    if rule.kind == "integer":
        value = round(value)
    return value


def _headline(inputs: CalculatorInputs, mode: str, scenario: str) -> tuple[float, int | None]:
    result = run_engine(apply_scenario(inputs, scenario), mode)
    payback = result.payback_months if result.payback_achieved else None
    return result.roi_simple_pct, payback


def run_sensitivity(
    inputs: CalculatorInputs,
    sweeps: list[tuple[str, str, float, float]] | None = None,
    mode: str = "full",
    scenario: str = "base",
) -> SensitivityResult:
    """Run a one-at-a-time sweep around ``inputs``.

    Parameters
    ----------
    inputs : CalculatorInputs
        Base (validated) inputs.
    sweeps : list[tuple[name, field, low_pct, high_pct]] | None
        Parameter sweeps. None = use DEFAULT_SWEEPS.
    mode : str
        Engine mode used for every run.
    scenario : str
        Scenario applied to every run, after the swept value is set.

    Returns
    -------
    SensitivityResult
        Tornado bars sorted by ROI impact.

    Raises
    ------
    KeyError
        If a sweep names a field that is not an input.
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS

    base_roi, base_payback = _headline(inputs, mode, scenario)
    bars: list[TornadoBar] = []

    for name, field_name, low_pct, high_pct in sweeps:
        if field_name not in FIELD_RULES or FIELD_RULES[field_name].kind not in ("integer", "number"):
            raise KeyError(f"'{field_name}' is not a numeric input field")

        base_val = float(getattr(inputs, field_name))
        low_val = _swept_value(field_name, base_val, low_pct)
        high_val = _swept_value(field_name, base_val, high_pct)

        roi_low, payback_low = _headline(inputs.model_copy(update={field_name: low_val}), mode, scenario)
        roi_high, payback_high = _headline(inputs.model_copy(update={field_name: high_val}), mode, scenario)

        bars.append(TornadoBar(
            param_name=name,
            field_name=field_name,
            base_value=round(base_val, 4),
            low_value=round(low_val, 4),
            high_value=round(high_val, 4),
            roi_at_low=round(roi_low, 2),
            roi_at_high=round(roi_high, 2),
            payback_at_low=payback_low,
            payback_at_high=payback_high,
            delta_roi=round(abs(roi_high - roi_low), 2),
        ))

    # Largest swing first
    bars.sort(key=lambda b: b.delta_roi, reverse=True)

    return SensitivityResult(base_roi=round(base_roi, 2), base_payback=base_payback, bars=bars)
