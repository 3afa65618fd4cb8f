"""Fleet ROI Estimator — Streamlit dashboard.

Run with:
    streamlit run src/fleet_roi/dashboard/app.py

Layout: sidebar inputs (preset, scenario, engine mode, all input fields) →
main area with KPI cards, cash-flow charts, scenario comparison, the
sensitivity tornado and the monthly table with CSV download.
Every widget change reruns the script, which recomputes from scratch.
"""

from __future__ import annotations

import streamlit as st

from fleet_roi.config.inputs import default_inputs
from fleet_roi.config.presets import list_presets, load_preset
from fleet_roi.config.schema import FIELD_RULES
from fleet_roi.core.settings import settings
from fleet_roi.dashboard.charts import (
    cumulative_cash_flow_figure,
    monthly_net_figure,
    savings_breakdown_figure,
    scenario_comparison_figure,
    tornado_figure,
)
from fleet_roi.engine.orchestrator import ENGINE_MODES, recompute
from fleet_roi.engine.scenario import SCENARIOS
from fleet_roi.engine.validation import format_validation_errors, validate_inputs
from fleet_roi.finance.sensitivity import compare_scenarios, run_sensitivity
from fleet_roi.models.results import ROIResult
from fleet_roi.presentation.export import render_summary, timeline_frame, timeline_to_csv
from fleet_roi.presentation.formatting import format_currency, format_payback, format_percentage
from fleet_roi.state.storage import InputStore
from fleet_roi.state.url import serialize_query

st.set_page_config(page_title="Fleet ROI Estimator", page_icon="🚚", layout="wide")
st.title("Fleet Telematics ROI Estimator")

_MODE_LABELS = {
    "full": "Full (ramped monthly timeline)",
    "straight_line": "Straight-line estimate",
    "straight_line_lean": "Straight-line, no hardware",
}

# Fields laid out in the sidebar, in groups.
_GROUPS: list[tuple[str, list[str]]] = [
    ("Fleet", [
        "vehicle_count", "annual_km_per_vehicle",
        "fuel_consumption_l_per_100km", "fuel_price_per_litre",
    ]),
    ("Risk & insurance", [
        "baseline_accidents_per_year", "avg_accident_cost", "annual_insurance_premium",
    ]),
    ("Program effect", [
        "fuel_savings_pct", "accident_reduction_pct", "insurance_reduction_pct", "adoption_pct",
    ]),
    ("Costs", [
        "hardware_cost_per_vehicle", "subscription_per_vehicle_per_month",
        "implementation_one_off", "training_one_off",
        "maintenance_per_vehicle_per_year", "resale_recovery_pct_hardware",
    ]),
    ("Timeline", ["time_horizon_years", "utilisation_ramp_months"]),
]


# ---------------------------------------------------------------------------
# SIDEBAR — Inputs
# ---------------------------------------------------------------------------
st.sidebar.header("Inputs")

store = InputStore(settings.storage_path)

_PRESETS = ["(last used)"] + list_presets()
preset = st.sidebar.selectbox("Example fleet", _PRESETS)


def _start_values(name: str) -> dict[str, object]:
    if name != "(last used)":
        return load_preset(name)
    # A hand-edited or stale file falls back to the defaults.
    stored = validate_inputs(store.load())
    return stored.inputs.model_dump() if stored.inputs else default_inputs()


start_values = _start_values(preset)

_SCENARIOS = list(SCENARIOS)
scenario = st.sidebar.radio(
    "Scenario", _SCENARIOS,
    index=_SCENARIOS.index(settings.default_scenario) if settings.default_scenario in _SCENARIOS else 1,
    horizontal=True,
    help="Conservative ×0.75 / aggressive ×1.25 on fuel, accident and insurance percentages",
)
_MODES = list(ENGINE_MODES)
mode = st.sidebar.selectbox(
    "Engine", _MODES,
    index=_MODES.index(settings.default_mode) if settings.default_mode in _MODES else 0,
    format_func=lambda m: _MODE_LABELS.get(m, m),
)

raw: dict[str, object] = {}
for group, names in _GROUPS:
    with st.sidebar.expander(group, expanded=group == "Fleet"):
        for name in names:
            rule = FIELD_RULES[name]
            if rule.kind == "integer":
                raw[name] = st.number_input(
                    rule.label, int(rule.minimum), int(rule.maximum), int(start_values[name]), 1,
                    key=f"{preset}_{name}",
                )
            else:
                raw[name] = st.number_input(
                    rule.label, float(rule.minimum), float(rule.maximum), float(start_values[name]),
                    key=f"{preset}_{name}",
                )

with st.sidebar.expander("Display"):
    _CURRENCIES = list(FIELD_RULES["currency"].allowed or ())
    raw["currency"] = st.selectbox("Currency", _CURRENCIES, index=_CURRENCIES.index(start_values["currency"]))
    raw["start_month"] = st.text_input("Start month (YYYY-MM)", start_values["start_month"])
    raw["discount_rate_pct"] = start_values["discount_rate_pct"]


# ---------------------------------------------------------------------------
# Recompute
# ---------------------------------------------------------------------------
outcome = recompute(raw, scenario, mode)
validation = outcome.validation

for message in validation.warnings.values():
    st.warning(message)

if outcome.result is None:
    st.error("Some inputs need attention:\n\n" + "\n".join(f"- {m}" for m in format_validation_errors(validation.errors)))
    st.stop()

result = outcome.result
inputs = outcome.adjusted_inputs
cur = inputs.currency

if st.sidebar.button("Save as last used"):
    store.save(validation.inputs)
    st.sidebar.success("Inputs saved")

# ---------------------------------------------------------------------------
# KPIs
# ---------------------------------------------------------------------------
c1, c2, c3, c4 = st.columns(4)
c1.metric("Payback", format_payback(result))
c2.metric("Simple ROI", format_percentage(result.roi_simple_pct))
c3.metric("Annual savings", format_currency(result.total_savings_annual, cur))
c4.metric("Total costs", format_currency(result.total_costs, cur))

if mode != "full":
    st.caption("Straight-line estimate: no ramp, maintenance or resale. Not comparable with the full payback month.")

# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------
if isinstance(result, ROIResult):
    left, right = st.columns(2)
    left.plotly_chart(cumulative_cash_flow_figure(result), use_container_width=True)
    right.plotly_chart(monthly_net_figure(result), use_container_width=True)
    st.plotly_chart(savings_breakdown_figure(result), use_container_width=True)

tab_scen, tab_sens, tab_table = st.tabs(["Scenarios", "Sensitivity", "Monthly table"])

with tab_scen:
    base_inputs = validation.inputs
    outcomes = compare_scenarios(base_inputs, mode)
    st.plotly_chart(scenario_comparison_figure(outcomes), use_container_width=True)
    st.dataframe(
        [
            {
                "Scenario": o.scenario,
                "Payback": format_payback(o.result),
                "ROI": format_percentage(o.roi_simple_pct),
                "Annual savings": format_currency(o.total_savings_annual, cur),
            }
            for o in outcomes
        ],
        hide_index=True,
    )

with tab_sens:
    st.plotly_chart(tornado_figure(run_sensitivity(validation.inputs, mode=mode, scenario=scenario)), use_container_width=True)

with tab_table:
    if isinstance(result, ROIResult):
        st.dataframe(timeline_frame(result), hide_index=True, use_container_width=True)
        st.download_button(
            "Download CSV",
            data=timeline_to_csv(result),
            file_name="fleet-roi-analysis.csv",
            mime="text/csv",
        )
    else:
        st.info("The monthly table needs the full engine.")
    st.download_button(
        "Download summary",
        data=render_summary(result, inputs, scenario),
        file_name="fleet-roi-summary.txt",
        mime="text/plain",
    )
    st.text_input("Share link query", "?" + serialize_query(validation.inputs))
