"""Share links — inputs ↔ URL query string.

Only schema fields are written, under their wire names, and only when the
value differs from the default, which keeps links short.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode

from fleet_roi.config.inputs import CalculatorInputs, default_inputs, field_name
from fleet_roi.config.schema import FIELD_RULES


def _wire_value(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def serialize_query(inputs: CalculatorInputs | Mapping[str, Any], today: date | None = None) -> str:
    """Query string (without ``?``) holding the non-default fields."""
    values = inputs.model_dump() if isinstance(inputs, CalculatorInputs) else inputs
    defaults = default_inputs(today)

    params: list[tuple[str, str]] = []
    for name, rule in FIELD_RULES.items():
        if name not in values or values[name] is None:
            continue
        if values[name] == defaults[name]:
            continue
        params.append((rule.alias, _wire_value(values[name])))
    return urlencode(params)


def parse_query(query: str | Mapping[str, str], today: date | None = None) -> dict[str, Any]:
    """Defaults overridden by the schema fields present in ``query``.

    Numeric values that do not parse keep their default.  Unknown keys are
    ignored.  The result still needs ``validate_inputs``.
    """
    pairs = parse_qsl(query.lstrip("?")) if isinstance(query, str) else list(query.items())
    values = default_inputs(today)

    for key, raw in pairs:
        name = field_name(key)
        if name is None:
            continue
        rule = FIELD_RULES[name]
        if rule.kind in ("integer", "number"):
            try:
                number = float(raw)
            except ValueError:
                continue
            values[name] = int(number) if rule.kind == "integer" and number.is_integer() else number
        else:
            values[name] = raw
    return values
