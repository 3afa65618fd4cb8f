"""Straight-line fast path — payback without a monthly timeline.

Ignores the utilisation ramp, maintenance and hardware resale.  Payback is
``ceil(initial_costs / net_monthly_savings)``; a non-positive monthly net
means the program never pays back (``payback_months is None``).  The lean
variant also leaves hardware capex out of the initial costs.

Labelled as its own engine mode: the number it produces is not the full
engine's payback month and must not be presented as one.
"""

from __future__ import annotations

import math

from fleet_roi.config.inputs import CalculatorInputs
from fleet_roi.engine.savings import compute_program_costs, compute_savings, compute_simple_roi
from fleet_roi.models.results import StraightLineResult


def straight_line_payback(initial_costs: float, net_monthly_savings: float) -> int | None:
    if net_monthly_savings <= 0:
        return None
    return math.ceil(initial_costs / net_monthly_savings)


def calculate_straight_line(
    inputs: CalculatorInputs,
    include_hardware: bool = True,
) -> StraightLineResult:
    savings = compute_savings(inputs)
    costs = compute_program_costs(inputs)

    subscription_annual = costs.opex_subscription_annual
    initial_costs = costs.one_off + (costs.capex_hardware if include_hardware else 0.0)
    net_monthly = savings.total_savings_annual / 12 - subscription_annual / 12
    payback = straight_line_payback(initial_costs, net_monthly)

    years = inputs.time_horizon_years
    total_costs = initial_costs + subscription_annual * years
    total_savings = savings.total_savings_annual * years

    return StraightLineResult(
        mode="straight_line" if include_hardware else "straight_line_lean",
        currency=inputs.currency,
        total_savings_annual=savings.total_savings_annual,
        subscription_annual=subscription_annual,
        initial_costs=initial_costs,
        net_monthly_savings=net_monthly,
        payback_months=payback,
        payback_achieved=payback is not None,
        total_savings=total_savings,
        total_costs=total_costs,
        roi_simple_pct=compute_simple_roi(total_savings, total_costs),
    )
