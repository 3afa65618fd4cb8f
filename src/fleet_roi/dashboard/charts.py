"""Plotly figures for the dashboard.

Kept free of Streamlit so they can be built (and tested) anywhere.
"""

from __future__ import annotations

import plotly.graph_objects as go

from fleet_roi.finance.sensitivity import ScenarioOutcome, SensitivityResult
from fleet_roi.models.results import ROIResult
from fleet_roi.presentation.formatting import currency_symbol

_POSITIVE = "#00b894"
_NEGATIVE = "#e17055"
_ACCENT = "#6c5ce7"


def _layout(fig: go.Figure, title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        title=title,
        template="plotly_dark",
        height=360,
        margin=dict(l=40, r=20, t=50, b=40),
        yaxis_title=y_title,
        legend=dict(orientation="h", y=-0.2),
    )
    return fig


def cumulative_cash_flow_figure(result: ROIResult) -> go.Figure:
    """Cumulative net line with the break-even axis and payback marker."""
    months = [s.month for s in result.timeline]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=months,
        y=[s.cumulative_net for s in result.timeline],
        mode="lines",
        name="Cumulative net",
        line=dict(color=_ACCENT, width=3),
    ))
    fig.add_hline(y=0, line=dict(color="rgba(255,255,255,0.4)", dash="dot"))
    if result.payback_achieved:
        fig.add_vline(
            x=result.payback_months,
            line=dict(color=_POSITIVE, dash="dash"),
            annotation_text=f"Payback: month {result.payback_months}",
        )
    symbol = currency_symbol(result.currency) or ""
    fig.update_xaxes(title="Month")
    return _layout(fig, "Cumulative cash flow", f"Cumulative net ({symbol})")


def monthly_net_figure(result: ROIResult) -> go.Figure:
    """Monthly net cash flow bars, green above zero and red below."""
    nets = [s.net_cash_flow for s in result.timeline]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[s.month for s in result.timeline],
        y=nets,
        name="Net monthly",
        marker_color=[_POSITIVE if v >= 0 else _NEGATIVE for v in nets],
    ))
    symbol = currency_symbol(result.currency) or ""
    fig.update_xaxes(title="Month")
    return _layout(fig, "Monthly net cash flow", f"Net ({symbol})")


def savings_breakdown_figure(result: ROIResult) -> go.Figure:
    """Annual savings split into fuel, accidents and insurance."""
    labels = ["Fuel", "Accidents", "Insurance"]
    values = [
        result.fuel_savings_annual,
        result.accident_savings_annual,
        result.insurance_savings_annual,
    ]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=values, marker_color=[_ACCENT, _POSITIVE, "#fdcb6e"]))
    symbol = currency_symbol(result.currency) or ""
    return _layout(fig, "Annual savings by source", f"Savings per year ({symbol})")


def scenario_comparison_figure(outcomes: list[ScenarioOutcome]) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[o.scenario.capitalize() for o in outcomes],
        y=[o.roi_simple_pct for o in outcomes],
        marker_color=_ACCENT,
        text=[f"{o.roi_simple_pct:,.0f}%" for o in outcomes],
        textposition="outside",
    ))
    return _layout(fig, "ROI by scenario", "Simple ROI (%)")


def tornado_figure(sensitivity: SensitivityResult) -> go.Figure:
    """Horizontal bars: ROI at the low and high value of each swept input."""
    bars = list(reversed(sensitivity.bars))
    names = [b.param_name for b in bars]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=names,
        x=[b.roi_at_low - sensitivity.base_roi for b in bars],
        orientation="h",
        name="Low",
        marker_color=_NEGATIVE,
    ))
    fig.add_trace(go.Bar(
        y=names,
        x=[b.roi_at_high - sensitivity.base_roi for b in bars],
        orientation="h",
        name="High",
        marker_color=_POSITIVE,
    ))
    fig.update_layout(barmode="overlay")
    fig.update_xaxes(title=f"ROI change vs base ({sensitivity.base_roi:,.1f}%) in points")
    return _layout(fig, "Sensitivity", "")
