"""FastAPI server — HTTP access to the ROI estimator.

Run with:
    uvicorn fleet_roi.api.server:app --reload --port 8000

Or:
    fleet-roi-api

Endpoints:
    GET  /health               — liveness check
    GET  /schema               — JSON Schema of the calculator inputs
    GET  /defaults             — default inputs (wire names)
    GET  /presets              — bundled example fleets
    GET  /presets/{name}       — one preset merged onto the defaults
    POST /validate             — coerce + validate a raw record
    POST /calculate            — validate → scenario → engine
    POST /calculate/scenarios  — conservative / base / aggressive side by side
    POST /sensitivity          — one-at-a-time sweep → tornado data
    POST /export/csv           — monthly timeline as CSV
    POST /share                — share-link query string for a record
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from fleet_roi.config.inputs import CalculatorInputs, default_inputs, merge_with_defaults
from fleet_roi.config.presets import list_presets, load_preset, read_preset
from fleet_roi.core.logging import RequestLoggingMiddleware, setup_logging
from fleet_roi.core.settings import settings
from fleet_roi.engine.orchestrator import ENGINE_MODES, recompute
from fleet_roi.engine.validation import format_validation_errors, validate_inputs
from fleet_roi.finance.sensitivity import compare_scenarios, run_sensitivity
from fleet_roi.models.results import Recompute, ROIResult
from fleet_roi.presentation.export import timeline_to_csv
from fleet_roi.presentation.formatting import format_payback
from fleet_roi.state.url import serialize_query

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

setup_logging(settings.log_level, settings.log_json)

app = FastAPI(
    title=settings.app_name,
    version="1.0",
    description=(
        "Payback period, simple ROI and monthly cash flow for adopting a fleet "
        "telematics and safety program. Send a partial input record; missing "
        "fields are reported, never silently defaulted."
    ),
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class CalculateRequest(BaseModel):
    """Request body for /calculate and friends."""
    inputs: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw input record keyed by python or camelCase wire names. "
                    "Example: {'vehicleCount': 80, 'fuelPricePerLitre': '1.75'}",
    )
    scenario: str = Field(
        default=settings.default_scenario,
        description="'conservative', 'base' or 'aggressive'. Anything else behaves as 'base'.",
    )
    mode: str = Field(
        default=settings.default_mode,
        description="Engine mode: 'full' (ramped monthly timeline), 'straight_line' or "
                    "'straight_line_lean' (ceil(initial / net monthly) estimates).",
    )
    use_defaults: bool = Field(
        default=False,
        description="Fill missing fields from the documented defaults before validating.",
    )


class SensitivityRequest(CalculateRequest):
    """Request body for /sensitivity."""
    sweep_params: list[dict[str, Any]] | None = Field(
        default=None,
        description="Optional override of sweep parameters. "
                    "Format: [{'name': 'Fuel price', 'field': 'fuel_price_per_litre', "
                    "'low_pct': -0.2, 'high_pct': 0.2}]",
    )


class CalculateResponse(BaseModel):
    """Response from /calculate."""
    scenario: str
    mode: str
    payback_label: str
    warnings: dict[str, str]
    result: dict[str, Any]


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _raw_inputs(req: CalculateRequest) -> dict[str, Any]:
    if req.use_defaults:
        return merge_with_defaults(req.inputs)
    return req.inputs


def _run(req: CalculateRequest) -> Recompute:
    """Run one recompute cycle; invalid input becomes a 422 with per-field errors."""
    if req.mode not in ENGINE_MODES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown engine mode '{req.mode}'. Expected one of: {', '.join(ENGINE_MODES)}",
        )
    outcome = recompute(_raw_inputs(req), req.scenario, req.mode)
    if outcome.result is None:
        logger.info(
            "Rejected %d invalid field(s)", len(outcome.validation.errors),
            extra={"scenario": outcome.scenario, "mode": outcome.mode,
                   "error_count": len(outcome.validation.errors)},
        )
        raise HTTPException(
            status_code=422,
            detail={
                "errors": outcome.validation.errors,
                "messages": format_validation_errors(outcome.validation.errors),
                "coerced": outcome.validation.coerced,
            },
        )
    logger.info(
        "Calculated %s", format_payback(outcome.result),
        extra={"scenario": outcome.scenario, "mode": outcome.mode,
               "payback_months": outcome.result.payback_months},
    )
    return outcome


def _validated(req: CalculateRequest) -> CalculatorInputs:
    return _run(req).validation.inputs  # type: ignore[return-value]


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/schema")
def get_schema():
    """JSON Schema for the calculator inputs: types, defaults and ranges."""
    return CalculatorInputs.model_json_schema(by_alias=True)


@app.get("/defaults")
def get_defaults():
    """Default inputs under their wire names. Use as a starting point."""
    return CalculatorInputs.model_validate(default_inputs()).model_dump(by_alias=True)


@app.get("/presets")
def get_presets():
    presets = []
    for name in list_presets():
        doc = read_preset(name)
        presets.append({"id": name, "name": doc.get("name", name), "description": doc.get("description", "")})
    return {"presets": presets}


@app.get("/presets/{name}")
def get_preset(name: str):
    try:
        values = load_preset(name)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
    return CalculatorInputs.model_validate(values).model_dump(by_alias=True)


@app.post("/validate")
def validate(req: CalculateRequest):
    """Coerce and validate without calculating. Always 200; check ``is_valid``."""
    result = validate_inputs(_raw_inputs(req))
    return {
        "is_valid": result.is_valid,
        "errors": result.errors,
        "messages": format_validation_errors(result.errors),
        "warnings": result.warnings,
        "coerced": result.coerced,
    }


@app.post("/calculate", response_model=CalculateResponse)
def calculate(req: CalculateRequest):
    """Validate the record, apply the scenario and run the selected engine."""
    outcome = _run(req)
    return CalculateResponse(
        scenario=outcome.scenario,
        mode=outcome.mode,
        payback_label=format_payback(outcome.result),
        warnings=outcome.validation.warnings,
        result=outcome.result.model_dump(),
    )


@app.post("/calculate/scenarios")
def calculate_scenarios(req: CalculateRequest):
    """Run all three scenarios on the same validated inputs."""
    inputs = _validated(req)
    outcomes = compare_scenarios(inputs, req.mode)
    return {
        "mode": req.mode,
        "scenarios": [
            {
                "scenario": o.scenario,
                "payback_months": o.payback_months,
                "payback_achieved": o.payback_achieved,
                "payback_label": format_payback(o.result),
                "roi_simple_pct": o.roi_simple_pct,
                "total_savings_annual": o.total_savings_annual,
            }
            for o in outcomes
        ],
    }


@app.post("/sensitivity")
def sensitivity(req: SensitivityRequest):
    """One-at-a-time sweep; bars sorted by absolute ROI impact."""
    outcome = _run(req)

    try:
        sweeps = None
        if req.sweep_params:
            sweeps = [
                (sp.get("name", sp["field"]), sp["field"], sp.get("low_pct", -0.15), sp.get("high_pct", 0.15))
                for sp in req.sweep_params
            ]
        result = run_sensitivity(outcome.validation.inputs, sweeps, req.mode, outcome.scenario)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Bad sweep parameter: {exc.args[0]}") from exc
    except TypeError as exc:
        raise HTTPException(status_code=400, detail=f"Bad sweep parameter: {exc}") from exc

    return {
        "base_roi": result.base_roi,
        "base_payback": result.base_payback,
        "tornado_bars": [
            {
                "param_name": bar.param_name,
                "field": bar.field_name,
                "base_value": bar.base_value,
                "low_value": bar.low_value,
                "high_value": bar.high_value,
                "roi_at_low": bar.roi_at_low,
                "roi_at_high": bar.roi_at_high,
                "payback_at_low": bar.payback_at_low,
                "payback_at_high": bar.payback_at_high,
                "delta_roi": bar.delta_roi,
            }
            for bar in result.bars
        ],
    }


@app.post("/export/csv")
def export_csv(req: CalculateRequest):
    """Monthly timeline as CSV. Full engine only."""
    req = req.model_copy(update={"mode": "full"})
    outcome = _run(req)
    result: ROIResult = outcome.result  # type: ignore[assignment]
    return PlainTextResponse(
        timeline_to_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="fleet-roi-analysis.csv"'},
    )


@app.post("/share")
def share(req: CalculateRequest):
    """Compact query string holding only the non-default fields."""
    result = validate_inputs(_raw_inputs(req))
    if not result.is_valid:
        return JSONResponse(status_code=422, content={"errors": result.errors})
    return {"query": serialize_query(result.inputs)}


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "fleet_roi.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
    )


if __name__ == "__main__":
    main()
