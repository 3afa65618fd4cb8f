"""Monthly cash-flow timeline, payback and simple ROI — the full engine.

Month 1 carries the hardware capex and one-off costs.  Savings ramp linearly
over ``utilisation_ramp_months`` and are flat afterwards.  The final month
credits hardware resale when a recovery percentage is set.
"""

from __future__ import annotations

from fleet_roi.config.inputs import CalculatorInputs, parse_year_month
from fleet_roi.engine.savings import compute_program_costs, compute_savings, compute_simple_roi
from fleet_roi.models.results import MonthlySnapshot, ProgramCosts, ROIResult


def ramp_factor(month_index: int, ramp_months: int) -> float:
    """Share of steady-state savings realised in 0-indexed ``month_index``."""
    if ramp_months <= 0 or month_index >= ramp_months:
        return 1.0
    return (month_index + 1) / ramp_months


def _calendar_month(start_month: str, offset: int) -> str:
    year, month = parse_year_month(start_month) or (1, 1)
    index = year * 12 + (month - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def build_timeline(
    inputs: CalculatorInputs,
    total_savings_annual: float,
    costs: ProgramCosts,
) -> list[MonthlySnapshot]:
    """One snapshot per month over the whole horizon."""
    total_months = inputs.total_months
    ramp_months = inputs.utilisation_ramp_months
    recurring_cost = (costs.opex_subscription_annual + costs.maintenance_annual) / 12
    resale_credit = costs.capex_hardware * (inputs.resale_recovery_pct_hardware / 100)

    months: list[MonthlySnapshot] = []
    cumulative = 0.0

    for i in range(total_months):
        factor = ramp_factor(i, ramp_months)
        savings = (total_savings_annual / 12) * factor

        cost = recurring_cost
        if i == 0:
            cost += costs.capex_hardware + costs.one_off
        if i == total_months - 1 and inputs.resale_recovery_pct_hardware > 0:
            cost -= resale_credit

        net = savings - cost
        cumulative += net

        months.append(MonthlySnapshot(
            month=i + 1,
            calendar_month=_calendar_month(inputs.start_month, i),
            ramp_factor=factor,
            savings=savings,
            costs=cost,
            net_cash_flow=net,
            cumulative_net=cumulative,
        ))

    return months


def find_payback_month(cumulative_net: list[float]) -> int | None:
    """First 1-indexed month with cumulative net ≥ 0, or None."""
    for i, value in enumerate(cumulative_net):
        if value >= 0:
            return i + 1
    return None


def calculate_roi(inputs: CalculatorInputs) -> ROIResult:
    """Run the full-fidelity calculation for one validated input record.

    Never raises for validated inputs.  A program that does not pay back
    reports ``payback_months == total_months`` with ``payback_achieved=False``.
    """
    savings = compute_savings(inputs)
    costs = compute_program_costs(inputs)
    timeline = build_timeline(inputs, savings.total_savings_annual, costs)

    total_months = inputs.total_months
    payback = find_payback_month([s.cumulative_net for s in timeline])

    years = inputs.time_horizon_years
    total_costs = (
        costs.capex_hardware
        + costs.one_off
        + (costs.opex_subscription_annual + costs.maintenance_annual) * years
    )
    total_savings = savings.total_savings_annual * years

    return ROIResult(
        currency=inputs.currency,
        **savings.model_dump(),
        **costs.model_dump(),
        timeline=timeline,
        total_months=total_months,
        payback_months=payback if payback is not None else total_months,
        payback_achieved=payback is not None,
        total_savings=total_savings,
        total_costs=total_costs,
        roi_simple_pct=compute_simple_roi(total_savings, total_costs),
    )
