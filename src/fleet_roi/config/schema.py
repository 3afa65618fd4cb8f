"""Validation schema — one rule per input field, derived from ``CalculatorInputs``."""

from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Literal

from pydantic.fields import FieldInfo

from fleet_roi.config.inputs import CalculatorInputs

FieldKind = Literal["integer", "number", "string", "date"]


@dataclass(frozen=True)
class FieldRule:
    """How one raw field is coerced and checked."""

    name: str
    """Python field name."""

    alias: str
    """Wire name used by forms, share links and stored JSON."""

    label: str
    """Human label used in messages."""

    kind: FieldKind
    minimum: float | None = None
    maximum: float | None = None
    allowed: tuple[str, ...] | None = None

    @property
    def range_message(self) -> str:
        return f"{self.label} must be between {format_bound(self.minimum)} and {format_bound(self.maximum)}"


def format_bound(value: float | None) -> str:
    """1 → '1', 10000 → '10,000', 0.5 → '0.5'."""
    if value is None:
        return ""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def _kind(info: FieldInfo) -> FieldKind:
    extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
    if extra.get("kind") == "date":
        return "date"
    if info.annotation is int:
        return "integer"
    if info.annotation is float:
        return "number"
    return "string"


def _rule(name: str, info: FieldInfo) -> FieldRule:
    minimum = maximum = None
    for constraint in info.metadata:
        if getattr(constraint, "ge", None) is not None:
            minimum = constraint.ge
        if getattr(constraint, "le", None) is not None:
            maximum = constraint.le

    allowed = None
    if typing.get_origin(info.annotation) is Literal:
        allowed = tuple(typing.get_args(info.annotation))

    return FieldRule(
        name=name,
        alias=info.alias or name,
        label=info.title or name,
        kind=_kind(info),
        minimum=minimum,
        maximum=maximum,
        allowed=allowed,
    )


FIELD_RULES: dict[str, FieldRule] = {
    name: _rule(name, info) for name, info in CalculatorInputs.model_fields.items()
}

# Inputs scaled by the conservative / aggressive scenarios.
SENSITIVITY_FIELDS: tuple[str, ...] = (
    "fuel_savings_pct",
    "accident_reduction_pct",
    "insurance_reduction_pct",
)


def field_label(name: str) -> str:
    """Display label for a python or wire field name; unknown names pass through."""
    rule = FIELD_RULES.get(name)
    if rule is None:
        rule = next((r for r in FIELD_RULES.values() if r.alias == name), None)
    return rule.label if rule else name
