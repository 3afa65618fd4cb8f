"""Tests for state/ — share-link query strings and the local inputs file."""

from __future__ import annotations

import logging
from datetime import date

from fleet_roi.config import CalculatorInputs
from fleet_roi.engine.validation import validate_inputs
from fleet_roi.state.storage import InputStore
from fleet_roi.state.url import parse_query, serialize_query

TODAY = date(2026, 10, 19)


# ═══════════════════════════════════════════════════════════════════════════
# Share links
# ═══════════════════════════════════════════════════════════════════════════

class TestShareLinks:

    def test_defaults_serialise_to_empty(self):
        assert serialize_query(CalculatorInputs(start_month="2026-10"), TODAY) == ""

    def test_only_non_default_fields(self, reference_inputs):
        # The reference fleet matches every default apart from its start month.
        assert serialize_query(reference_inputs, TODAY) == "startMonth=2099-01"

    def test_wire_names_and_compact_numbers(self, reference_inputs):
        inputs = reference_inputs.model_copy(
            update={"vehicle_count": 80, "fuel_price_per_litre": 1.75, "annual_km_per_vehicle": 60000.0},
        )
        query = serialize_query(inputs, TODAY)
        assert query.startswith("vehicleCount=80&annualKmPerVehicle=60000&fuelPricePerLitre=1.75")

    def test_parse_fills_defaults(self):
        values = parse_query("?vehicleCount=80&currency=GBP", TODAY)
        assert values["vehicle_count"] == 80
        assert values["currency"] == "GBP"
        assert values["fuel_price_per_litre"] == 1.9
        assert values["start_month"] == "2026-10"

    def test_parse_skips_bad_numbers_and_unknown_keys(self):
        values = parse_query("fuelPricePerLitre=cheap&utm_source=mail", TODAY)
        assert values["fuel_price_per_litre"] == 1.9
        assert "utm_source" not in values

    def test_parse_accepts_mapping(self):
        assert parse_query({"timeHorizonYears": "5"}, TODAY)["time_horizon_years"] == 5

    def test_link_round_trip(self, reference_inputs):
        inputs = reference_inputs.model_copy(update={"vehicle_count": 120, "currency": "USD"})
        restored = validate_inputs(parse_query(serialize_query(inputs, TODAY), TODAY), TODAY)
        assert restored.inputs == inputs


# ═══════════════════════════════════════════════════════════════════════════
# Local inputs file
# ═══════════════════════════════════════════════════════════════════════════

class TestInputStore:

    def test_missing_file_gives_defaults(self, tmp_path):
        values = InputStore(tmp_path / "inputs.json").load(TODAY)
        assert values["vehicle_count"] == 50
        assert values["start_month"] == "2026-10"

    def test_save_then_load(self, tmp_path, reference_inputs):
        store = InputStore(tmp_path / "nested" / "inputs.json")
        inputs = reference_inputs.model_copy(update={"vehicle_count": 75})
        store.save(inputs)
        assert '"vehicleCount": 75' in store.path.read_text()
        assert validate_inputs(store.load(TODAY), TODAY).inputs == inputs

    def test_corrupt_file_logs_and_falls_back(self, tmp_path, caplog):
        path = tmp_path / "inputs.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="fleet_roi.state.storage"):
            values = InputStore(path).load(TODAY)
        assert values["vehicle_count"] == 50
        assert any("Failed to load" in r.getMessage() for r in caplog.records)

    def test_non_object_ignored(self, tmp_path):
        path = tmp_path / "inputs.json"
        path.write_text("[1, 2, 3]")
        assert InputStore(path).load(TODAY)["currency"] == "EUR"
