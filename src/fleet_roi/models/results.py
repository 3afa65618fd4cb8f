"""Result types — the contract between validation, engine and presentation.

All models are frozen: a result lives for one calculation call and is never
mutated afterwards.  Monetary values are in the input currency and are not
rounded, so the timeline identities hold exactly.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from fleet_roi.config.inputs import CalculatorInputs

EngineMode = Literal["full", "straight_line", "straight_line_lean"]


# ═══════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════

class ValidationResult(BaseModel):
    """Outcome of validating one raw input record."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
    """Field name → message.  Empty when valid."""

    coerced: dict[str, Any] = Field(default_factory=dict)
    """Best-effort typed value per field (None = absent), even on failure."""

    warnings: dict[str, str] = Field(default_factory=dict)
    """Advisory, non-blocking notes (e.g. start month in the past)."""

    inputs: CalculatorInputs | None = None
    """The validated record.  Set only when ``is_valid``."""


# ═══════════════════════════════════════════════════════════════════════════
# Engine building blocks
# ═══════════════════════════════════════════════════════════════════════════

class SavingsBreakdown(BaseModel):
    """Steady-state annual savings at the configured adoption rate."""

    model_config = ConfigDict(frozen=True)

    baseline_fuel_cost: float
    fuel_savings_annual: float
    accident_savings_annual: float
    insurance_savings_annual: float
    total_savings_annual: float


class ProgramCosts(BaseModel):
    """What the program costs the fleet."""

    model_config = ConfigDict(frozen=True)

    capex_hardware: float
    """vehicles × hardware cost, spent in month 1."""

    opex_subscription_annual: float
    """vehicles × monthly subscription × 12."""

    one_off: float
    """implementation + training, spent in month 1."""

    maintenance_annual: float
    """vehicles × maintenance per vehicle per year."""


class MonthlySnapshot(BaseModel):
    """One month of the program cash-flow timeline."""

    model_config = ConfigDict(frozen=True)

    month: int
    """1-indexed month number."""

    calendar_month: str
    """YYYY-MM, counted from the start month."""

    ramp_factor: float
    savings: float
    costs: float
    net_cash_flow: float
    cumulative_net: float


# ═══════════════════════════════════════════════════════════════════════════
# Engine results
# ═══════════════════════════════════════════════════════════════════════════

class ROIResult(BaseModel):
    """Full-fidelity result: ramped monthly timeline, payback and simple ROI."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["full"] = "full"
    currency: str = "EUR"

    baseline_fuel_cost: float
    fuel_savings_annual: float
    accident_savings_annual: float
    insurance_savings_annual: float
    total_savings_annual: float

    capex_hardware: float
    opex_subscription_annual: float
    one_off: float
    maintenance_annual: float

    timeline: list[MonthlySnapshot]
    total_months: int

    payback_months: int
    """First month with cumulative net ≥ 0.  Equals ``total_months`` when
    the program does not pay back within the horizon — check ``payback_achieved``."""

    payback_achieved: bool

    total_savings: float
    """Total annual savings × horizon years."""

    total_costs: float
    """capex + one-off + (subscription + maintenance) × horizon years."""

    roi_simple_pct: float
    """(total_savings − total_costs) / total_costs × 100; 0 when costs are 0."""

    @property
    def program_costs(self) -> ProgramCosts:
        return ProgramCosts(
            capex_hardware=self.capex_hardware,
            opex_subscription_annual=self.opex_subscription_annual,
            one_off=self.one_off,
            maintenance_annual=self.maintenance_annual,
        )

    @property
    def savings(self) -> SavingsBreakdown:
        return SavingsBreakdown(
            baseline_fuel_cost=self.baseline_fuel_cost,
            fuel_savings_annual=self.fuel_savings_annual,
            accident_savings_annual=self.accident_savings_annual,
            insurance_savings_annual=self.insurance_savings_annual,
            total_savings_annual=self.total_savings_annual,
        )


class StraightLineResult(BaseModel):
    """Low-fidelity result: no timeline, ramp, maintenance or resale.

    Payback is ``ceil(initial_costs / net_monthly_savings)`` and will differ
    from the full engine's ramped payback month.
    """

    model_config = ConfigDict(frozen=True)

    mode: Literal["straight_line", "straight_line_lean"]
    currency: str = "EUR"

    total_savings_annual: float
    subscription_annual: float
    initial_costs: float
    """Hardware capex (omitted in lean mode) + one-off costs."""

    net_monthly_savings: float
    payback_months: int | None
    """None = never pays back (net monthly savings ≤ 0)."""

    payback_achieved: bool
    total_savings: float
    total_costs: float
    roi_simple_pct: float


EngineResult = ROIResult | StraightLineResult


class Recompute(BaseModel):
    """One full recompute cycle: validation, scenario and engine output."""

    model_config = ConfigDict(frozen=True)

    scenario: str
    mode: EngineMode
    validation: ValidationResult
    adjusted_inputs: CalculatorInputs | None = None
    result: ROIResult | StraightLineResult | None = None
    """None when validation failed; the engine did not run."""
