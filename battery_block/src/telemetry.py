"""
Parser that turns ``uevent`` key/value records into a BatteryReading.

The kernel exposes each power supply as newline-separated ``KEY=VALUE``
records. Only a fixed set of keys is understood; everything else is ignored.
Values are kept in the source's raw units: no unit conversion happens here
(see ``normalizer``).

Parsing is permissive: a malformed numeric value becomes ``0`` rather than
an error, and an empty source produces a reading with every field absent.

CHANGELOG:
- 2026-10-18: Accept keys with or without the ``POWER_SUPPLY_`` prefix
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from battery_block.src.models import BatteryReading, BatteryStatus

logger = logging.getLogger(__name__)

_KEY_PREFIX = "POWER_SUPPLY_"

# ---------------------------------------------------------------------------
# Key -> BatteryReading field mapping
# ---------------------------------------------------------------------------

_ENERGY_KEYS: dict[str, str] = {
    "ENERGY_FULL_DESIGN": "energy_full_design",
    "ENERGY_FULL": "energy_full",
}
"""Capacity keys that map straight onto a field."""

_ABSOLUTE_KEYS: dict[str, str] = {
    "CURRENT_NOW": "present_rate",
    "POWER_NOW": "present_rate",
    "VOLTAGE_NOW": "voltage",
}
"""Keys whose absolute value is stored. Some drivers report signed values."""

_REMAINING_KEYS: dict[str, bool] = {
    "ENERGY_NOW": False,
    "CHARGE_NOW": True,
}
"""Remaining-energy keys -> resulting ``is_charge_unit`` flag."""

_STATUS_MAP: dict[str, BatteryStatus] = {
    "Charging": BatteryStatus.CHARGING,
    "Discharging": BatteryStatus.DISCHARGING,
}
"""Any other STATUS value (Full, Not charging, Unknown...) means plugged."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_number(key: str, raw: str) -> float:
    """Parse *raw* as a number, falling back to 0 for malformed input."""
    try:
        value = float(raw.strip())
    except ValueError:
        logger.debug("Non-numeric value for %s: %r, using 0", key, raw)
        return 0.0
    if not math.isfinite(value):
        logger.debug("Non-finite value for %s: %r, using 0", key, raw)
        return 0.0
    return value


def _strip_prefix(key: str) -> str:
    """Drop the kernel's ``POWER_SUPPLY_`` prefix if present."""
    if key.startswith(_KEY_PREFIX):
        return key[len(_KEY_PREFIX) :]
    return key


def parse_uevent_lines(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Split ``KEY=VALUE`` lines into ordered ``(key, value)`` pairs.

    Lines without ``=`` are skipped. Order is preserved because the
    ENERGY_NOW / CHARGE_NOW conflict is resolved by last occurrence.
    """
    records: list[tuple[str, str]] = []
    for line in lines:
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        records.append((key.strip(), value.strip()))
    return records


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_reading(
    records: Iterable[tuple[str, str]] | Mapping[str, str],
) -> BatteryReading:
    """Build a BatteryReading from telemetry records of one battery.

    Args:
        records: Ordered ``(key, value)`` pairs, or a mapping (iterated in
            insertion order). Keys may carry the ``POWER_SUPPLY_`` prefix.

    Returns:
        A BatteryReading in raw source units. Fields never present in
        *records* stay ``None``.
    """
    items = records.items() if isinstance(records, Mapping) else records
    fields: dict[str, Any] = {}

    for raw_key, raw_value in items:
        key = _strip_prefix(raw_key)

        if key in _REMAINING_KEYS:
            # Last of ENERGY_NOW / CHARGE_NOW wins, including the unit flag.
            fields["energy_remaining"] = _to_number(key, raw_value)
            fields["is_charge_unit"] = _REMAINING_KEYS[key]
        elif key in _ABSOLUTE_KEYS:
            fields[_ABSOLUTE_KEYS[key]] = abs(_to_number(key, raw_value))
        elif key in _ENERGY_KEYS:
            fields[_ENERGY_KEYS[key]] = _to_number(key, raw_value)
        elif key == "STATUS":
            fields["status"] = _STATUS_MAP.get(raw_value.strip(), BatteryStatus.PLUGGED)

    if not fields:
        logger.debug("No recognized telemetry fields in source")

    return BatteryReading(**fields)
