"""
Presentation of an aggregated reading as i3blocks output lines.

i3blocks reads up to three lines from a block command: full text, short
text and color. The color line is only emitted when the charge is at or
below the low-battery threshold.

Icon sets are immutable values built once per run from configuration and
passed explicitly; there are no module-level mutable icon tables.

CHANGELOG:
- 2026-10-18: Add heart preset and custom FULL,EMPTY ramps
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from battery_block.src.aggregator import charge_percentage
from battery_block.src.estimator import estimate_text
from battery_block.src.models import BatteryReading, BatteryStatus

LOW_COLOR = "#FF0000"

RAMP_WIDTH = 4

# Tier lower bounds, highest first. Anything below the last bound is tier 4.
TIER_BOUNDS: tuple[float, ...] = (95.0, 75.0, 50.0, 25.0)

# ---------------------------------------------------------------------------
# Icon sets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IconSet:
    """Glyphs used to render one block.

    Attributes:
        tiers: Five glyphs, fullest first (see ``icon_tier``).
        charging: Prefix shown while charging.
        discharging: Prefix shown while discharging.
        plugged: Prefix shown when on AC and not charging.
        placeholder: Text shown when no battery data is available.
    """

    tiers: tuple[str, str, str, str, str]
    charging: str = "\uf0e7"
    discharging: str = " "
    plugged: str = "\uf1e6"
    placeholder: str = "  "

    def status_glyph(self, status: BatteryStatus | None) -> str:
        """Return the prefix for *status*; a blank for an unknown status."""
        if status is BatteryStatus.CHARGING:
            return self.charging
        if status is BatteryStatus.DISCHARGING:
            return self.discharging
        if status is BatteryStatus.PLUGGED:
            return self.plugged
        return " "


def build_ramp(full: str, empty: str) -> tuple[str, str, str, str, str]:
    """Build a five-tier ramp mixing *full* and *empty* 4:0 down to 0:4."""

    def mix(n_empty: int) -> str:
        return full * (RAMP_WIDTH - n_empty) + empty * n_empty

    return (mix(0), mix(1), mix(2), mix(3), mix(4))


PRESETS: dict[str, IconSet] = {
    "battery": IconSet(tiers=("\uf240", "\uf241", "\uf242", "\uf243", "\uf244")),
    "heart": IconSet(tiers=build_ramp("♥", "♡")),
}
"""Named icon sets selectable with ``--type``."""


def custom_icon_set(full: str, empty: str) -> IconSet:
    """Return an IconSet whose tiers are a FULL/EMPTY character ramp."""
    return IconSet(tiers=build_ramp(full, empty))


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class BlockOutput(BaseModel):
    """The lines an i3blocks block command prints."""

    full_text: str
    short_text: str
    color: str | None = None

    def lines(self) -> list[str]:
        out = [self.full_text, self.short_text]
        if self.color is not None:
            out.append(self.color)
        return out


def icon_tier(percentage: float) -> int:
    """Map a percentage to a tier index, 0 (full) to 4 (empty).

    Each tier's lower bound is inclusive: 95.0 is tier 0, 24.9 is tier 4.
    """
    for tier, bound in enumerate(TIER_BOUNDS):
        if percentage >= bound:
            return tier
    return len(TIER_BOUNDS)


def compose(
    reading: BatteryReading,
    icons: IconSet,
    *,
    show_percentage: bool = False,
    threshold: float = 10.0,
) -> BlockOutput:
    """Render *reading* into a BlockOutput.

    Args:
        reading: A usable (aggregated) reading.
        icons: Glyphs to use.
        show_percentage: Render ``NN%`` instead of status and tier icon.
        threshold: Percentage at or below which the low color is set.
    """
    # Always finite; an overflowing ratio is reported as 0.
    percentage = charge_percentage(reading)
    estimate = estimate_text(reading)

    if show_percentage:
        text = f"{int(percentage)}% {estimate}"
    else:
        glyph = icons.status_glyph(reading.status)
        text = f"{glyph} {icons.tiers[icon_tier(percentage)]}  {estimate}"

    return BlockOutput(
        full_text=text,
        short_text=text,
        color=LOW_COLOR if percentage <= threshold else None,
    )


def unavailable(icons: IconSet) -> BlockOutput:
    """Placeholder block for when no usable battery data exists."""
    return BlockOutput(full_text=icons.placeholder, short_text=icons.placeholder)
