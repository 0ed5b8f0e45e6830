"""
Time-remaining estimate for a normalized reading.

Discharging: time until empty = remaining / rate.
Charging:    time until full  = (capacity - remaining) / rate.

Anything else (plugged, full, unknown status, or no measurable rate) has no
numeric estimate and is rendered as ``Full``.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import math

from battery_block.src.models import BatteryReading, BatteryStatus

FULL_MARKER = "Full"
"""Text shown instead of a duration when nothing is charging/discharging."""

_SECONDS_PER_HOUR = 3600


def remaining_seconds(reading: BatteryReading) -> float | None:
    """Return seconds until empty (discharging) or full (charging).

    Returns ``None`` when there is no active rate, the status implies no
    estimate, or the division overflows to a non-finite value.
    """
    rate = reading.present_rate
    remaining = reading.energy_remaining
    if rate is None or rate <= 0 or remaining is None:
        return None

    if reading.status is BatteryStatus.DISCHARGING:
        seconds = remaining / rate * _SECONDS_PER_HOUR
    elif reading.status is BatteryStatus.CHARGING and reading.capacity is not None:
        seconds = (reading.capacity - remaining) / rate * _SECONDS_PER_HOUR
    else:
        return None

    if math.isinf(seconds):
        return None
    return seconds


def format_duration(seconds: float) -> str:
    """Render *seconds* as zero-padded ``HH:MM``.

    Negative or non-finite values (possible with unconverted charge units)
    are clamped to ``00:00``.
    """
    if not math.isfinite(seconds) or seconds < 0:
        seconds = 0
    total = int(seconds)
    hours, rest = divmod(total, _SECONDS_PER_HOUR)
    minutes = rest // 60
    return f"{hours:02d}:{minutes:02d}"


def estimate_text(reading: BatteryReading) -> str:
    """Return the ``HH:MM`` estimate for *reading*, or ``Full``."""
    seconds = remaining_seconds(reading)
    if seconds is None:
        return FULL_MARKER
    return format_duration(seconds)
