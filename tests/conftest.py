"""Shared test fixtures — the courier reference fleet."""

from __future__ import annotations

import pytest

from fleet_roi.config import CalculatorInputs

# Far enough ahead that the past-start advisory never fires.
FUTURE_START = "2099-01"


@pytest.fixture
def reference_raw() -> dict[str, object]:
    """Raw record under wire names, as a form or share link would send it."""
    return {
        "vehicleCount": 50,
        "annualKmPerVehicle": 45000,
        "fuelConsumptionLPer100km": 10.5,
        "fuelPricePerLitre": 1.90,
        "baselineAccidentsPerYear": 12,
        "avgAccidentCost": 6500,
        "annualInsurancePremium": 120000,
        "fuelSavingsPct": 6,
        "accidentReductionPct": 30,
        "insuranceReductionPct": 8,
        "adoptionPct": 90,
        "hardwareCostPerVehicle": 350,
        "subscriptionPerVehiclePerMonth": 35,
        "implementationOneOff": 2500,
        "trainingOneOff": 1500,
        "timeHorizonYears": 3,
        "discountRatePct": 8,
        "currency": "EUR",
        "startMonth": FUTURE_START,
        "utilisationRampMonths": 2,
        "resaleRecoveryPctHardware": 0,
        "maintenancePerVehiclePerYear": 0,
    }


@pytest.fixture
def form_raw(reference_raw: dict[str, object]) -> dict[str, object]:
    """Same record with every value as the string a browser form submits."""
    return {key: str(value) for key, value in reference_raw.items()}


@pytest.fixture
def reference_inputs() -> CalculatorInputs:
    return CalculatorInputs(
        vehicle_count=50,
        annual_km_per_vehicle=45_000,
        fuel_consumption_l_per_100km=10.5,
        fuel_price_per_litre=1.90,
        baseline_accidents_per_year=12,
        avg_accident_cost=6_500,
        annual_insurance_premium=120_000,
        fuel_savings_pct=6,
        accident_reduction_pct=30,
        insurance_reduction_pct=8,
        adoption_pct=90,
        hardware_cost_per_vehicle=350,
        subscription_per_vehicle_per_month=35,
        implementation_one_off=2_500,
        training_one_off=1_500,
        time_horizon_years=3,
        discount_rate_pct=8,
        currency="EUR",
        start_month=FUTURE_START,
        utilisation_ramp_months=2,
        resale_recovery_pct_hardware=0,
        maintenance_per_vehicle_per_year=0,
    )


@pytest.fixture
def losing_inputs(reference_inputs: CalculatorInputs) -> CalculatorInputs:
    """Subscription alone costs more than the program saves."""
    return reference_inputs.model_copy(update={"subscription_per_vehicle_per_month": 200.0})


@pytest.fixture
def free_inputs(reference_inputs: CalculatorInputs) -> CalculatorInputs:
    """A program that costs nothing at all."""
    return reference_inputs.model_copy(update={
        "hardware_cost_per_vehicle": 0.0,
        "subscription_per_vehicle_per_month": 0.0,
        "implementation_one_off": 0.0,
        "training_one_off": 0.0,
        "maintenance_per_vehicle_per_year": 0.0,
    })
