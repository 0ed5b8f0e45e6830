"""
Aggregation of per-battery readings into a single displayed reading.

Either one battery is selected by (clamped) index, or all batteries are
combined:

- energies (remaining, full, full design) are summed over the batteries
  that report them; a total with no contributors stays absent,
- present rate and voltage take the maximum, since normally only one
  battery is active at a time and summing would double count,
- status is the most active one reported (see ``most_active_status``).

The result is checked for usability; an unusable reading is reported as
``None`` ("data unavailable") rather than raising.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence

from battery_block.src.models import BatteryReading, most_active_status

logger = logging.getLogger(__name__)

COMBINE_ALL = -1
"""Selector value meaning "combine every battery"."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _present(values: Sequence[float | None]) -> list[float]:
    return [v for v in values if v is not None]


def _fold(
    readings: Sequence[BatteryReading],
    field: str,
    op: Callable[[list[float]], float],
) -> float | None:
    """Apply *op* to the non-absent values of *field*, or return None."""
    values = _present([getattr(r, field) for r in readings])
    if not values:
        return None
    return op(values)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def clamp_index(index: int, count: int) -> int:
    """Clamp a battery selector to ``[COMBINE_ALL, count - 1]``.

    An index past the last battery silently selects the last one; with no
    batteries at all the result is COMBINE_ALL.
    """
    return max(COMBINE_ALL, min(index, count - 1))


def combine(readings: Sequence[BatteryReading]) -> BatteryReading:
    """Synthesize one reading from all *readings*. Order-independent."""
    energy_full = None
    if any(r.energy_full is not None for r in readings):
        # Batteries without a measured full capacity contribute their design
        # capacity, so the combined total covers every battery.
        energy_full = _fold(readings, "capacity", sum)

    return BatteryReading(
        status=most_active_status(r.status for r in readings),
        energy_remaining=_fold(readings, "energy_remaining", sum),
        energy_full=energy_full,
        energy_full_design=_fold(readings, "energy_full_design", sum),
        present_rate=_fold(readings, "present_rate", max),
        voltage=_fold(readings, "voltage", max),
        is_charge_unit=any(r.is_charge_unit for r in readings),
    )


def aggregate(
    readings: Sequence[BatteryReading],
    index: int = COMBINE_ALL,
) -> BatteryReading | None:
    """Select or combine *readings* and check the result is usable.

    Args:
        readings: Normalized per-battery readings, in device order.
        index: Zero-based battery index, or COMBINE_ALL.

    Returns:
        The selected / combined reading, or ``None`` when the remaining
        energy or capacity is absent (including when there are no
        batteries).
    """
    selected = clamp_index(index, len(readings))
    if selected != index:
        logger.debug(
            "Battery index %d clamped to %d (%d devices)",
            index,
            selected,
            len(readings),
        )

    if selected == COMBINE_ALL:
        result = combine(readings)
    else:
        result = readings[selected]

    if not result.is_usable:
        logger.warning(
            "Battery data unavailable (index=%d, devices=%d)",
            selected,
            len(readings),
        )
        return None
    return result


def charge_percentage(reading: BatteryReading) -> float:
    """Return remaining / capacity as a percentage.

    Zero capacity, or a ratio that overflows to a non-finite value, gives 0.
    """
    capacity = reading.capacity
    remaining = reading.energy_remaining
    if not capacity or remaining is None:
        return 0.0
    percentage = remaining / capacity * 100.0
    if not math.isfinite(percentage):
        return 0.0
    return percentage
