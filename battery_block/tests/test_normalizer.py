"""
Tests for the unit normalizer -- charge domain to energy domain.

Verifies the voltage-based conversion, pass-through of energy readings,
the documented no-voltage limitation, and that normalization leaves the
charge percentage unchanged.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging

import pytest
from battery_block.src.aggregator import charge_percentage
from battery_block.src.models import BatteryReading, BatteryStatus
from battery_block.src.normalizer import normalize


def _charge_reading(**overrides: object) -> BatteryReading:
    fields: dict[str, object] = {
        "status": BatteryStatus.DISCHARGING,
        "energy_remaining": 2_000_000.0,  # 2 Ah in µAh
        "energy_full": 4_000_000.0,
        "energy_full_design": 4_500_000.0,
        "present_rate": 1_000_000.0,  # 1 A in µA
        "voltage": 11_000_000.0,  # 11 V in µV
        "is_charge_unit": True,
    }
    fields.update(overrides)
    return BatteryReading(**fields)


class TestConversion:
    """Charge readings with a voltage are converted to mWh / mW."""

    def test_converts_all_fields(self) -> None:
        result = normalize(_charge_reading())
        # (11e6 / 1000) * (2e6 / 1000) = 11000 * 2000
        assert result.energy_remaining == pytest.approx(22_000_000.0)
        assert result.energy_full == pytest.approx(44_000_000.0)
        assert result.energy_full_design == pytest.approx(49_500_000.0)
        assert result.present_rate == pytest.approx(11_000_000.0)
        assert result.is_charge_unit is False

    def test_status_and_voltage_preserved(self) -> None:
        result = normalize(_charge_reading())
        assert result.status is BatteryStatus.DISCHARGING
        assert result.voltage == 11_000_000.0

    def test_absent_fields_stay_absent(self) -> None:
        result = normalize(_charge_reading(energy_full=None, present_rate=None))
        assert result.energy_full is None
        assert result.present_rate is None

    def test_input_not_mutated(self) -> None:
        reading = _charge_reading()
        normalize(reading)
        assert reading.is_charge_unit is True
        assert reading.energy_remaining == 2_000_000.0

    @pytest.mark.parametrize("voltage", [1.0, 3_700_000.0, 11_100_000.0, 16_800_000.0])
    def test_percentage_invariant(self, voltage: float) -> None:
        raw = _charge_reading(voltage=voltage)
        assert charge_percentage(normalize(raw)) == pytest.approx(
            charge_percentage(raw)
        )


class TestPassThrough:
    """Energy readings and voltage-less charge readings are unchanged."""

    def test_energy_reading_returned_as_is(self) -> None:
        reading = BatteryReading(energy_remaining=10.0, energy_full_design=20.0)
        assert normalize(reading) is reading

    @pytest.mark.parametrize("voltage", [None, 0.0])
    def test_missing_voltage_skips_conversion(
        self, voltage: float | None, caplog: pytest.LogCaptureFixture
    ) -> None:
        reading = _charge_reading(voltage=voltage)
        with caplog.at_level(logging.WARNING):
            result = normalize(reading)
        assert result is reading
        assert result.is_charge_unit is True
        assert "without voltage" in caplog.text
