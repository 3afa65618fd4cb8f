"""Input validation — coerce raw form values and check them against the schema.

Raw values arrive as strings (forms, query strings) or JSON scalars.  Each
field is coerced to its declared kind; anything empty, missing or
unparseable becomes ``None`` and is reported as required.  Nothing is ever
replaced by a default here.

Per-field check order: presence → type → range (inclusive) → allowed values.
Then one cross-field rule: the utilisation ramp must fit in the horizon.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Mapping

from fleet_roi.config.inputs import CalculatorInputs, current_month, parse_year_month
from fleet_roi.config.schema import FIELD_RULES, FieldKind, FieldRule, field_label
from fleet_roi.models.results import ValidationResult

logger = logging.getLogger(__name__)

# Above this the accident-reduction assumption is flagged as optimistic.
ACCIDENT_REDUCTION_WARNING_PCT = 80.0


def coerce_value(value: Any, kind: FieldKind) -> Any:
    """Coerce one raw value to ``kind``; None when absent or unparseable."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None

    if kind in ("integer", "number"):
        if isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(number):
            return None
        if kind == "integer" and number.is_integer():
            return int(number)
        # Non-whole values stay floats so the type check can name them.
        return number

    if kind == "date":
        return value if parse_year_month(value) is not None else None

    return str(value)


def check_field(rule: FieldRule, value: Any) -> str | None:
    """First failing check for one coerced value, or None."""
    if value is None:
        return f"{rule.label} is required"

    if rule.kind == "integer" and not isinstance(value, int):
        return f"{rule.label} must be a whole number"
    if rule.kind == "number" and not isinstance(value, (int, float)):
        return f"{rule.label} must be a number"
    if rule.kind in ("string", "date") and not isinstance(value, str):
        return f"{rule.label} must be text"

    if isinstance(value, (int, float)):
        if rule.minimum is not None and value < rule.minimum:
            return rule.range_message
        if rule.maximum is not None and value > rule.maximum:
            return rule.range_message

    if rule.allowed is not None and value not in rule.allowed:
        return f"{rule.label} must be one of: {', '.join(rule.allowed)}"

    return None


def _raw_value(raw: Mapping[str, Any], rule: FieldRule) -> Any:
    if rule.name in raw:
        return raw[rule.name]
    return raw.get(rule.alias)


def _cross_field_errors(coerced: dict[str, Any], errors: dict[str, str]) -> dict[str, str]:
    ramp = coerced.get("utilisation_ramp_months")
    years = coerced.get("time_horizon_years")
    if "utilisation_ramp_months" in errors or ramp is None or years is None:
        return {}
    if ramp > years * 12:
        return {
            "utilisation_ramp_months": (
                f"{field_label('utilisation_ramp_months')} cannot exceed the time horizon "
                f"({years * 12:g} months)"
            ),
        }
    return {}


def _advisories(
    coerced: dict[str, Any],
    errors: dict[str, str],
    today: date | None,
) -> dict[str, str]:
    warnings: dict[str, str] = {}

    start = coerced.get("start_month")
    if start is not None and "start_month" not in errors:
        # YYYY-MM strings compare in calendar order.
        if start < current_month(today):
            warnings["start_month"] = (
                "Start month is in the past. Savings will be calculated from the specified month."
            )
            logger.warning("Start month %s is in the past", start)

    reduction = coerced.get("accident_reduction_pct")
    if (
        reduction is not None
        and "accident_reduction_pct" not in errors
        and reduction > ACCIDENT_REDUCTION_WARNING_PCT
    ):
        warnings["accident_reduction_pct"] = (
            f"Accident reduction above {ACCIDENT_REDUCTION_WARNING_PCT:g}% is rarely achieved in practice"
        )

    return warnings


def validate_inputs(raw: Mapping[str, Any], today: date | None = None) -> ValidationResult:
    """Validate and coerce every schema field of ``raw``.

    Keys may be python or wire (camelCase) names; unknown keys are ignored.
    ``today`` pins the current month for the past-start advisory.
    """
    errors: dict[str, str] = {}
    coerced: dict[str, Any] = {}

    for name, rule in FIELD_RULES.items():
        value = coerce_value(_raw_value(raw, rule), rule.kind)
        coerced[name] = value
        error = check_field(rule, value)
        if error:
            errors[name] = error

    errors.update(_cross_field_errors(coerced, errors))
    warnings = _advisories(coerced, errors, today)

    if errors:
        logger.debug("Validation failed for %d field(s): %s", len(errors), ", ".join(errors))
        return ValidationResult(is_valid=False, errors=errors, coerced=coerced, warnings=warnings)

    return ValidationResult(
        is_valid=True,
        coerced=coerced,
        warnings=warnings,
        inputs=CalculatorInputs.model_validate(coerced),
    )


def format_validation_errors(errors: Mapping[str, str]) -> list[str]:
    """``["Label: message", ...]`` for display."""
    return [f"{field_label(name)}: {message}" for name, message in errors.items()]


def can_calculate(raw: Mapping[str, Any]) -> bool:
    return validate_inputs(raw).is_valid


def validation_summary(raw: Mapping[str, Any], today: date | None = None) -> dict[str, Any]:
    """Counts and a one-line summary for a status banner."""
    result = validate_inputs(raw, today)
    count = len(result.errors)
    return {
        "is_valid": result.is_valid,
        "error_count": count,
        "errors": result.errors,
        "has_warnings": bool(result.warnings),
        "summary": "All inputs are valid" if result.is_valid else f"{count} input(s) need attention",
    }
