"""Tests for the HTTP API.

Covers:
  - Schema / defaults / presets endpoints
  - /validate always answers 200 with per-field errors
  - /calculate: engines, scenarios, 422 on invalid input, 400 on unknown mode
  - /calculate/scenarios, /sensitivity, /export/csv, /share
  - Request ID header from the logging middleware
"""

from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from fleet_roi.api.server import app


client = TestClient(app)


# ═══════════════════════════════════════════════════════════════════════════
# Read-only endpoints
# ═══════════════════════════════════════════════════════════════════════════


class TestReadEndpoints:

    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_request_id_header(self):
        resp = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["X-Request-ID"] == "abc123"

    def test_schema_uses_wire_names(self):
        data = client.get("/schema").json()
        assert "vehicleCount" in data["properties"]
        assert data["properties"]["vehicleCount"]["maximum"] == 10000

    def test_defaults(self):
        data = client.get("/defaults").json()
        assert data["vehicleCount"] == 50
        assert data["currency"] == "EUR"
        assert len(data["startMonth"]) == 7

    def test_presets(self):
        data = client.get("/presets").json()
        assert [p["id"] for p in data["presets"]] == ["bus", "courier", "taxi"]
        assert data["presets"][0]["name"] == "Bus"

    def test_preset(self):
        data = client.get("/presets/bus").json()
        assert data["vehicleCount"] == 120

    def test_unknown_preset_404(self):
        assert client.get("/presets/tractor").status_code == 404


# ═══════════════════════════════════════════════════════════════════════════
# Validation and calculation
# ═══════════════════════════════════════════════════════════════════════════


class TestCalculate:

    def test_validate_reports_errors(self, reference_raw):
        reference_raw["vehicleCount"] = 0
        resp = client.post("/validate", json={"inputs": reference_raw})
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_valid"] is False
        assert data["errors"]["vehicle_count"] == "Number of Vehicles must be between 1 and 10,000"
        assert data["coerced"]["vehicle_count"] == 0

    def test_validate_ok(self, form_raw):
        data = client.post("/validate", json={"inputs": form_raw}).json()
        assert data["is_valid"] is True
        assert data["errors"] == {}

    def test_calculate_full(self, reference_raw):
        resp = client.post("/calculate", json={"inputs": reference_raw})
        assert resp.status_code == 200
        data = resp.json()
        assert data["scenario"] == "base"
        assert data["mode"] == "full"
        assert data["payback_label"] == "9 months"
        assert data["result"]["payback_months"] == 9
        assert len(data["result"]["timeline"]) == 36
        assert abs(data["result"]["roi_simple_pct"] - 91.4997) < 1e-3

    def test_calculate_straight_line(self, reference_raw):
        data = client.post(
            "/calculate", json={"inputs": reference_raw, "mode": "straight_line"},
        ).json()
        assert data["result"]["payback_months"] == 8
        assert data["payback_label"] == "~8 months (straight-line)"

    def test_calculate_scenario(self, reference_raw):
        data = client.post(
            "/calculate", json={"inputs": reference_raw, "scenario": "conservative"},
        ).json()
        assert data["scenario"] == "conservative"
        assert abs(data["result"]["total_savings_annual"] - 40454.4375) < 1e-6

    def test_missing_inputs_422(self):
        resp = client.post("/calculate", json={"inputs": {"vehicleCount": 10}})
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert "fuel_price_per_litre" in detail["errors"]
        assert "vehicle_count" not in detail["errors"]
        assert "Fuel Price per Litre: Fuel Price per Litre is required" in detail["messages"]

    def test_use_defaults_fills_gaps(self):
        resp = client.post(
            "/calculate", json={"inputs": {"vehicleCount": 80}, "use_defaults": True},
        )
        assert resp.status_code == 200
        assert resp.json()["result"]["capex_hardware"] == 80 * 350

    def test_unknown_mode_400(self, reference_raw):
        resp = client.post("/calculate", json={"inputs": reference_raw, "mode": "npv"})
        assert resp.status_code == 400

    def test_past_start_month_warning(self, reference_raw):
        reference_raw["startMonth"] = "2001-01"
        data = client.post("/calculate", json={"inputs": reference_raw}).json()
        assert "start_month" in data["warnings"]


# ═══════════════════════════════════════════════════════════════════════════
# Analysis and export
# ═══════════════════════════════════════════════════════════════════════════


class TestAnalysis:

    def test_scenarios(self, reference_raw):
        data = client.post("/calculate/scenarios", json={"inputs": reference_raw}).json()
        assert [s["scenario"] for s in data["scenarios"]] == ["conservative", "base", "aggressive"]
        assert data["scenarios"][1]["payback_months"] == 9

    def test_sensitivity_default_sweep(self, reference_raw):
        data = client.post("/sensitivity", json={"inputs": reference_raw}).json()
        bars = data["tornado_bars"]
        assert len(bars) == 6
        assert bars[0]["delta_roi"] >= bars[-1]["delta_roi"]

    def test_sensitivity_custom_sweep(self, reference_raw):
        data = client.post("/sensitivity", json={
            "inputs": reference_raw,
            "sweep_params": [{"name": "Fuel price", "field": "fuel_price_per_litre", "low_pct": -0.1, "high_pct": 0.1}],
        }).json()
        assert [b["field"] for b in data["tornado_bars"]] == ["fuel_price_per_litre"]

    def test_sensitivity_bad_field_400(self, reference_raw):
        resp = client.post("/sensitivity", json={
            "inputs": reference_raw,
            "sweep_params": [{"field": "currency"}],
        })
        assert resp.status_code == 400

    def test_export_csv(self, reference_raw):
        resp = client.post("/export/csv", json={"inputs": reference_raw, "mode": "straight_line"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        lines = resp.text.splitlines()
        assert lines[0].startswith('"Month"')
        assert len(lines) == 37

    def test_share(self, reference_raw):
        reference_raw["vehicleCount"] = 80
        data = client.post("/share", json={"inputs": reference_raw}).json()
        assert data["query"] == "vehicleCount=80&startMonth=2099-01"

    def test_share_invalid_422(self, reference_raw):
        reference_raw["currency"] = "JPY"
        resp = client.post("/share", json={"inputs": reference_raw})
        assert resp.status_code == 422
        assert "currency" in resp.json()["errors"]

    def test_sensitivity_sweep_without_field_400(self, reference_raw):
        resp = client.post("/sensitivity", json={
            "inputs": reference_raw,
            "sweep_params": [{"name": "Fuel price", "low_pct": -0.1}],
        })
        assert resp.status_code == 400

    def test_sensitivity_non_numeric_pct_400(self, reference_raw):
        resp = client.post("/sensitivity", json={
            "inputs": reference_raw,
            "sweep_params": [{"field": "fuel_price_per_litre", "low_pct": "lots", "high_pct": 0.1}],
        })
        assert resp.status_code == 400

    def test_sensitivity_uses_scenario(self, reference_raw):
        base = client.post("/sensitivity", json={"inputs": reference_raw}).json()
        aggressive = client.post(
            "/sensitivity", json={"inputs": reference_raw, "scenario": "aggressive"},
        ).json()
        assert aggressive["base_roi"] > base["base_roi"]


# ═══════════════════════════════════════════════════════════════════════════
# Oversized values and calculation logging
# ═══════════════════════════════════════════════════════════════════════════


class TestOversizedValues:

    def test_validate_huge_integer(self, reference_raw):
        reference_raw["vehicleCount"] = 10**400
        resp = client.post("/validate", json={"inputs": reference_raw})
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_valid"] is False
        assert data["errors"]["vehicle_count"] == "Number of Vehicles is required"

    def test_calculate_huge_integer_422(self, reference_raw):
        reference_raw["annualKmPerVehicle"] = 10**400
        resp = client.post("/calculate", json={"inputs": reference_raw})
        assert resp.status_code == 422
        assert "annual_km_per_vehicle" in resp.json()["detail"]["errors"]


class TestCalculationLogging:

    def test_calculation_logged_with_context(self, reference_raw, caplog):
        with caplog.at_level(logging.INFO, logger="fleet_roi.api.server"):
            client.post("/calculate", json={
                "inputs": reference_raw, "scenario": "aggressive", "mode": "straight_line",
            })
        record = next(r for r in caplog.records if r.name == "fleet_roi.api.server")
        assert record.scenario == "aggressive"
        assert record.mode == "straight_line"
        assert record.payback_months is not None

    def test_rejection_logged_with_error_count(self, caplog):
        with caplog.at_level(logging.INFO, logger="fleet_roi.api.server"):
            client.post("/calculate", json={"inputs": {"vehicleCount": 0}})
        record = next(r for r in caplog.records if r.name == "fleet_roi.api.server")
        assert record.error_count > 1
        assert record.scenario == "base"
