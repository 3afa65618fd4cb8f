"""Configuration models — calculator inputs, validation schema and presets."""

from fleet_roi.config.inputs import (
    CalculatorInputs,
    Currency,
    current_month,
    default_inputs,
    merge_with_defaults,
)
from fleet_roi.config.schema import FIELD_RULES, SENSITIVITY_FIELDS, FieldRule, field_label
from fleet_roi.config.presets import list_presets, load_preset

__all__ = [
    "CalculatorInputs",
    "Currency",
    "current_month",
    "default_inputs",
    "merge_with_defaults",
    "FIELD_RULES",
    "SENSITIVITY_FIELDS",
    "FieldRule",
    "field_label",
    "list_presets",
    "load_preset",
]
