"""
Mapping from an i3blocks ``BLOCK_BUTTON`` click to a display mode.

Clicks never mutate stored state: each run re-resolves the mode from the
button id the status bar passes in the environment.

- 0 (no click): icon view with the configured battery selection.
- any other button: bare percentage view.
- 2 / 3 while combining all batteries: additionally report one specific
  battery, the highest-indexed one that still holds energy.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from battery_block.src.aggregator import COMBINE_ALL, clamp_index
from battery_block.src.models import BatteryReading

logger = logging.getLogger(__name__)

NO_BUTTON = 0
_SELECTING_BUTTONS = frozenset({2, 3})


@dataclass(frozen=True, slots=True)
class DisplayMode:
    """How a single run should render the block.

    Attributes:
        show_percentage: Show ``NN%`` instead of status + tier icon.
        index: Battery selector to aggregate with (COMBINE_ALL or index).
    """

    show_percentage: bool
    index: int


def _last_with_energy(readings: Sequence[BatteryReading]) -> int | None:
    """Scan from the highest index down for a battery with energy left."""
    for i in range(len(readings) - 1, -1, -1):
        if readings[i].energy_remaining:
            return i
    return None


def resolve_display(
    button: int,
    index: int,
    readings: Sequence[BatteryReading],
) -> DisplayMode:
    """Resolve the display mode for this run.

    Args:
        button: Click button id from ``BLOCK_BUTTON`` (0 = none).
        index: Configured battery selector.
        readings: Normalized per-battery readings, in device order.
    """
    if button == NO_BUTTON:
        return DisplayMode(show_percentage=False, index=index)

    selected = index
    if button in _SELECTING_BUTTONS and clamp_index(index, len(readings)) == COMBINE_ALL:
        found = _last_with_energy(readings)
        if found is not None:
            logger.debug("Button %d selected battery %d", button, found)
            selected = found

    return DisplayMode(show_percentage=True, index=selected)
