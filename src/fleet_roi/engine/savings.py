"""Annual savings streams and program costs.

Pure arithmetic: validated inputs → SavingsBreakdown / ProgramCosts.
Percent inputs are on a 0–100 scale.
"""

from __future__ import annotations

from fleet_roi.config.inputs import CalculatorInputs
from fleet_roi.models.results import ProgramCosts, SavingsBreakdown


def compute_baseline_fuel_cost(inputs: CalculatorInputs) -> float:
    """Annual fleet fuel spend before the program."""
    litres = (
        inputs.vehicle_count
        * inputs.annual_km_per_vehicle
        * (inputs.fuel_consumption_l_per_100km / 100)
    )
    return litres * inputs.fuel_price_per_litre


def compute_fuel_savings(inputs: CalculatorInputs, baseline_fuel_cost: float) -> float:
    return baseline_fuel_cost * (inputs.fuel_savings_pct / 100) * (inputs.adoption_pct / 100)


def compute_accident_savings(inputs: CalculatorInputs) -> float:
    accidents_avoided = (
        inputs.baseline_accidents_per_year
        * (inputs.accident_reduction_pct / 100)
        * (inputs.adoption_pct / 100)
    )
    return accidents_avoided * inputs.avg_accident_cost


def compute_insurance_savings(inputs: CalculatorInputs) -> float:
    return (
        inputs.annual_insurance_premium
        * (inputs.insurance_reduction_pct / 100)
        * (inputs.adoption_pct / 100)
    )


def compute_savings(inputs: CalculatorInputs) -> SavingsBreakdown:
    """All three steady-state savings streams and their total."""
    baseline = compute_baseline_fuel_cost(inputs)
    fuel = compute_fuel_savings(inputs, baseline)
    accident = compute_accident_savings(inputs)
    insurance = compute_insurance_savings(inputs)

    return SavingsBreakdown(
        baseline_fuel_cost=baseline,
        fuel_savings_annual=fuel,
        accident_savings_annual=accident,
        insurance_savings_annual=insurance,
        total_savings_annual=fuel + accident + insurance,
    )


def compute_program_costs(inputs: CalculatorInputs) -> ProgramCosts:
    n = inputs.vehicle_count
    return ProgramCosts(
        capex_hardware=n * inputs.hardware_cost_per_vehicle,
        opex_subscription_annual=n * inputs.subscription_per_vehicle_per_month * 12,
        one_off=inputs.implementation_one_off + inputs.training_one_off,
        maintenance_annual=n * inputs.maintenance_per_vehicle_per_year,
    )


def compute_simple_roi(total_savings: float, total_costs: float) -> float:
    """Simple ROI in percent; 0 when there is no cost to return on."""
    if total_costs == 0:
        return 0.0
    return (total_savings - total_costs) / total_costs * 100
