"""
Pure normalizer converting charge-domain readings into the energy domain.

Batteries that report CHARGE_NOW / CURRENT_NOW (µAh / µA) are converted to
mWh / mW using the present voltage, so every reading downstream shares one
unit system:

    value_mWh = (voltage / 1000) * (value / 1000)

When the voltage is unknown the reading is returned unchanged in raw charge
units. Percentages stay correct (numerator and denominator share the unit),
but rate-based time estimates become unit-inconsistent. No fallback voltage
is invented.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging

from battery_block.src.models import BatteryReading

logger = logging.getLogger(__name__)

_CONVERTED_FIELDS = (
    "present_rate",
    "energy_remaining",
    "energy_full_design",
    "energy_full",
)


def _to_milli_watt(value: float | None, voltage: float) -> float | None:
    if value is None:
        return None
    return (voltage / 1000.0) * (value / 1000.0)


def normalize(reading: BatteryReading) -> BatteryReading:
    """Return *reading* expressed in energy units.

    Energy-domain readings are returned as-is. Charge-domain readings are
    converted when a non-zero voltage is known, otherwise returned as-is
    with a warning.
    """
    if not reading.is_charge_unit:
        return reading

    voltage = reading.voltage
    if not voltage:
        logger.warning(
            "Charge-unit reading without voltage (voltage=%s); "
            "leaving values unconverted",
            voltage,
        )
        return reading

    update: dict[str, float | bool | None] = {
        name: _to_milli_watt(getattr(reading, name), voltage)
        for name in _CONVERTED_FIELDS
    }
    update["is_charge_unit"] = False
    return reading.model_copy(update=update)
