"""Tests for dashboard/charts.py — figures build without Streamlit."""

from __future__ import annotations

from fleet_roi.dashboard.charts import (
    cumulative_cash_flow_figure,
    monthly_net_figure,
    savings_breakdown_figure,
    scenario_comparison_figure,
    tornado_figure,
)
from fleet_roi.engine.cashflow import calculate_roi
from fleet_roi.finance.sensitivity import compare_scenarios, run_sensitivity


def test_cumulative_cash_flow(reference_inputs):
    fig = cumulative_cash_flow_figure(calculate_roi(reference_inputs))
    assert len(fig.data) == 1
    assert len(fig.data[0].y) == 36
    assert fig.layout.title.text == "Cumulative cash flow"
    assert fig.layout.yaxis.title.text == "Cumulative net (€)"


def test_payback_marker(reference_inputs, losing_inputs):
    # break-even line, plus the payback line only when payback happens
    assert len(cumulative_cash_flow_figure(calculate_roi(reference_inputs)).layout.shapes) == 2
    assert len(cumulative_cash_flow_figure(calculate_roi(losing_inputs)).layout.shapes) == 1


def test_monthly_net_colours(reference_inputs):
    fig = monthly_net_figure(calculate_roi(reference_inputs))
    colours = fig.data[0].marker.color
    assert colours[0] == "#e17055"
    assert colours[1] == "#00b894"


def test_savings_breakdown(reference_inputs):
    fig = savings_breakdown_figure(calculate_roi(reference_inputs))
    assert list(fig.data[0].x) == ["Fuel", "Accidents", "Insurance"]


def test_scenario_comparison(reference_inputs):
    fig = scenario_comparison_figure(compare_scenarios(reference_inputs))
    assert list(fig.data[0].x) == ["Conservative", "Base", "Aggressive"]


def test_tornado(reference_inputs):
    fig = tornado_figure(run_sensitivity(reference_inputs))
    assert len(fig.data) == 2
    assert len(fig.data[0].y) == 6
