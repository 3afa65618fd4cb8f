"""Presentation helpers — formatting and export."""

from fleet_roi.presentation.formatting import (
    CURRENCY_SYMBOLS,
    currency_symbol,
    format_currency,
    format_number,
    format_payback,
    format_percentage,
)
from fleet_roi.presentation.export import render_summary, timeline_frame, timeline_to_csv

__all__ = [
    "CURRENCY_SYMBOLS",
    "currency_symbol",
    "format_currency",
    "format_number",
    "format_payback",
    "format_percentage",
    "render_summary",
    "timeline_frame",
    "timeline_to_csv",
]
