"""Calculator inputs — fleet, risk, program-effect and cost assumptions.

Every field carries its closed ``[ge, le]`` range and a human ``title``;
``fleet_roi.config.schema`` derives the validation rules from these, so the
bounds live in exactly one place.

Python code uses snake_case names.  Forms, share links and stored JSON use the
camelCase wire names, which are accepted as aliases.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Currency = Literal["EUR", "USD", "GBP"]

_YEAR_MONTH = re.compile(r"^\d{4}-\d{2}$")


def current_month(today: date | None = None) -> str:
    """Current calendar month as ``YYYY-MM``."""
    today = today or date.today()
    return f"{today.year:04d}-{today.month:02d}"


def parse_year_month(value: str) -> tuple[int, int] | None:
    """Split ``YYYY-MM`` into ``(year, month)``; None if not a real month."""
    if not isinstance(value, str) or not _YEAR_MONTH.match(value):
        return None
    year, month = (int(part) for part in value.split("-"))
    if year < 1 or not 1 <= month <= 12:
        return None
    return year, month


class CalculatorInputs(BaseModel):
    """One complete, range-checked input record for a calculation run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # --- Fleet & usage ---
    vehicle_count: int = Field(
        default=50, ge=1, le=10_000, alias="vehicleCount",
        title="Number of Vehicles", description="Vehicles in the fleet",
    )
    annual_km_per_vehicle: float = Field(
        default=45_000.0, ge=1_000, le=200_000, alias="annualKmPerVehicle",
        title="Annual KM per Vehicle", description="Distance driven per vehicle per year (km)",
    )
    fuel_consumption_l_per_100km: float = Field(
        default=10.5, ge=5, le=50, alias="fuelConsumptionLPer100km",
        title="Fuel Consumption", description="Average consumption (L/100km)",
    )
    fuel_price_per_litre: float = Field(
        default=1.90, ge=0.5, le=5, alias="fuelPricePerLitre",
        title="Fuel Price per Litre", description="Pump price per litre",
    )

    # --- Risk & insurance ---
    baseline_accidents_per_year: float = Field(
        default=12.0, ge=0, le=1_000, alias="baselineAccidentsPerYear",
        title="Baseline Accidents per Year", description="Fleet accidents per year before the program",
    )
    avg_accident_cost: float = Field(
        default=6_500.0, ge=100, le=100_000, alias="avgAccidentCost",
        title="Average Accident Cost", description="Average all-in cost of one accident",
    )
    annual_insurance_premium: float = Field(
        default=120_000.0, ge=1_000, le=10_000_000, alias="annualInsurancePremium",
        title="Annual Insurance Premium", description="Fleet insurance premium per year",
    )

    # --- Program effect (percent, 0–100 scale) ---
    fuel_savings_pct: float = Field(
        default=6.0, ge=0, le=50, alias="fuelSavingsPct",
        title="Fuel Savings %", description="Fuel saved by vehicles using the product",
    )
    accident_reduction_pct: float = Field(
        default=30.0, ge=0, le=100, alias="accidentReductionPct",
        title="Accident Reduction %", description="Accidents avoided by vehicles using the product",
    )
    insurance_reduction_pct: float = Field(
        default=8.0, ge=0, le=50, alias="insuranceReductionPct",
        title="Insurance Reduction %", description="Premium reduction negotiated with the insurer",
    )
    adoption_pct: float = Field(
        default=90.0, ge=0, le=100, alias="adoptionPct",
        title="Adoption Rate %", description="Share of the fleet actually using the product",
    )

    # --- Program costs ---
    hardware_cost_per_vehicle: float = Field(
        default=350.0, ge=0, le=5_000, alias="hardwareCostPerVehicle",
        title="Hardware Cost per Vehicle", description="One-off device cost per vehicle",
    )
    subscription_per_vehicle_per_month: float = Field(
        default=35.0, ge=0, le=200, alias="subscriptionPerVehiclePerMonth",
        title="Subscription per Vehicle per Month", description="Licence fee per vehicle per month",
    )
    implementation_one_off: float = Field(
        default=2_500.0, ge=0, le=50_000, alias="implementationOneOff",
        title="Implementation Cost", description="One-off rollout cost",
    )
    training_one_off: float = Field(
        default=1_500.0, ge=0, le=50_000, alias="trainingOneOff",
        title="Training Cost", description="One-off driver and staff training cost",
    )
    maintenance_per_vehicle_per_year: float = Field(
        default=0.0, ge=0, le=1_000, alias="maintenancePerVehiclePerYear",
        title="Maintenance per Vehicle per Year", description="Device upkeep per vehicle per year",
    )
    resale_recovery_pct_hardware: float = Field(
        default=0.0, ge=0, le=100, alias="resaleRecoveryPctHardware",
        title="Hardware Resale Recovery %",
        description="Share of hardware spend recovered by resale at horizon end",
    )

    # --- Timeline ---
    time_horizon_years: int = Field(
        default=3, ge=1, le=10, alias="timeHorizonYears",
        title="Time Horizon", description="Evaluation horizon (years)",
    )
    utilisation_ramp_months: int = Field(
        default=2, ge=0, le=24, alias="utilisationRampMonths",
        title="Utilisation Ramp",
        description="Months for savings to ramp linearly to steady state. 0 = full savings from month 1.",
    )
    start_month: str = Field(
        default_factory=current_month, alias="startMonth",
        title="Start Month", description="First month of the program (YYYY-MM)",
        json_schema_extra={"kind": "date"},
    )
    discount_rate_pct: float = Field(
        default=8.0, ge=0, le=20, alias="discountRatePct",
        title="Discount Rate %",
        description="Reserved. Kept for saved links and files; not used by any calculation.",
    )
    currency: Currency = Field(
        default="EUR", alias="currency",
        title="Currency", description="Display currency. Symbol only, no conversion.",
    )

    @field_validator("start_month")
    @classmethod
    def _real_calendar_month(cls, value: str) -> str:
        if parse_year_month(value) is None:
            raise ValueError("Start month must be a valid date in YYYY-MM format")
        return value

    @model_validator(mode="after")
    def _ramp_within_horizon(self) -> "CalculatorInputs":
        if self.utilisation_ramp_months > self.time_horizon_years * 12:
            raise ValueError("Utilisation ramp cannot exceed the time horizon")
        return self

    @property
    def total_months(self) -> int:
        return self.time_horizon_years * 12


def default_inputs(today: date | None = None) -> dict[str, Any]:
    """Every schema field at its documented default, keyed by python name."""
    defaults = CalculatorInputs().model_dump()
    defaults["start_month"] = current_month(today)
    return defaults


def field_name(key: str) -> str | None:
    """Resolve a python or wire name to the python field name."""
    fields = CalculatorInputs.model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if info.alias == key:
            return name
    return None


def merge_with_defaults(
    overrides: Mapping[str, Any] | None = None,
    today: date | None = None,
) -> dict[str, Any]:
    """Defaults first, then every override whose key is a schema field.

    Keys may be python or wire names; unknown keys are dropped.  Values are
    not coerced or validated here.
    """
    merged = default_inputs(today)
    for key, value in (overrides or {}).items():
        name = field_name(key)
        if name is not None:
            merged[name] = value
    return merged
