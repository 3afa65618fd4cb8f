"""Export — timeline as a DataFrame / CSV and a plain-text summary report."""

from __future__ import annotations

import csv
from datetime import date

import pandas as pd

from fleet_roi.config.inputs import CalculatorInputs
from fleet_roi.config.schema import FIELD_RULES
from fleet_roi.models.results import EngineResult, ROIResult
from fleet_roi.presentation.formatting import (
    format_currency,
    format_number,
    format_payback,
    format_percentage,
)

CSV_COLUMNS = ["Month", "Savings Monthly", "Costs Monthly", "Net Monthly", "Cumulative Net"]


def timeline_frame(result: ROIResult) -> pd.DataFrame:
    """Numeric timeline, one row per month, indexed from 1."""
    return pd.DataFrame(
        {
            "Month": [s.month for s in result.timeline],
            "Calendar Month": [s.calendar_month for s in result.timeline],
            "Ramp Factor": [s.ramp_factor for s in result.timeline],
            "Savings Monthly": [s.savings for s in result.timeline],
            "Costs Monthly": [s.costs for s in result.timeline],
            "Net Monthly": [s.net_cash_flow for s in result.timeline],
            "Cumulative Net": [s.cumulative_net for s in result.timeline],
        },
    )


def timeline_to_csv(result: ROIResult) -> str:
    """Spreadsheet-friendly CSV: grouped 2-decimal amounts, every cell quoted."""
    frame = timeline_frame(result)[CSV_COLUMNS].copy()
    for column in CSV_COLUMNS[1:]:
        frame[column] = frame[column].map(lambda v: format_number(v, 2))
    return frame.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


def render_summary(
    result: EngineResult,
    inputs: CalculatorInputs,
    scenario: str = "base",
    generated: date | None = None,
) -> str:
    """Printable report: headline KPIs, savings breakdown and the inputs used."""
    cur = inputs.currency
    generated = generated or date.today()
    lines = [
        "Fleet Telematics ROI Analysis",
        f"Generated: {generated.isoformat()}    Scenario: {scenario}    Engine: {result.mode}",
        "",
        "Key results",
        f"  Payback period:        {format_payback(result)}",
        f"  Simple ROI:            {format_percentage(result.roi_simple_pct)}",
        f"  Annual savings:        {format_currency(result.total_savings_annual, cur)}",
        f"  Total savings:         {format_currency(result.total_savings, cur)}",
        f"  Total costs:           {format_currency(result.total_costs, cur)}",
    ]

    if isinstance(result, ROIResult):
        lines += [
            "",
            "Annual savings breakdown",
            f"  Baseline fuel cost:    {format_currency(result.baseline_fuel_cost, cur)}",
            f"  Fuel savings:          {format_currency(result.fuel_savings_annual, cur)}",
            f"  Accident savings:      {format_currency(result.accident_savings_annual, cur)}",
            f"  Insurance savings:     {format_currency(result.insurance_savings_annual, cur)}",
        ]

    lines += ["", "Inputs"]
    values = inputs.model_dump()
    for name, rule in FIELD_RULES.items():
        if name == "discount_rate_pct":
            continue
        value = values[name]
        shown = format_number(value, 2).rstrip("0").rstrip(".") if isinstance(value, float) else str(value)
        lines.append(f"  {rule.label + ':':<36}{shown}")

    lines += [
        "",
        "Estimates only. Savings depend on driver adoption, fuel prices and insurer terms.",
    ]
    return "\n".join(lines) + "\n"
