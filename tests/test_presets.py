"""Tests for config/presets.py — bundled example fleets."""

from __future__ import annotations

from datetime import date

import pytest

from fleet_roi.config.presets import list_presets, load_preset, read_preset
from fleet_roi.engine.validation import validate_inputs

TODAY = date(2026, 10, 19)


def test_bundled_presets():
    assert list_presets() == ["bus", "courier", "taxi"]


def test_read_preset_document():
    doc = read_preset("bus")
    assert doc["name"] == "Bus"
    assert doc["inputs"]["vehicleCount"] == 120


def test_load_preset_merges_onto_defaults():
    values = load_preset("taxi", TODAY)
    assert values["vehicle_count"] == 30
    assert values["fuel_savings_pct"] == 10
    # not in the preset
    assert values["subscription_per_vehicle_per_month"] == 35.0
    assert values["start_month"] == "2026-10"


@pytest.mark.parametrize("name", ["bus", "courier", "taxi"])
def test_every_preset_validates(name):
    assert validate_inputs(load_preset(name, TODAY), TODAY).is_valid


def test_unknown_preset():
    with pytest.raises(KeyError, match="Unknown preset"):
        read_preset("tractor")
