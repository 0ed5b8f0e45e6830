"""
Pydantic models for per-battery and aggregated telemetry readings.

A BatteryReading holds the fields parsed from one ``uevent`` file. Every
numeric field is optional: ``None`` means the field was absent from the
source and must never take part in arithmetic.

Status reconciliation across batteries uses an explicit priority table
rather than the enum's values, so reordering the enum cannot change which
status wins.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict


class BatteryStatus(str, Enum):
    """Charging state reported by a battery."""

    DISCHARGING = "Discharging"
    CHARGING = "Charging"
    PLUGGED = "Plugged"


_STATUS_PRIORITY: dict[BatteryStatus, int] = {
    BatteryStatus.DISCHARGING: 0,
    BatteryStatus.CHARGING: 1,
    BatteryStatus.PLUGGED: 2,
}
"""Lower value = more active. Discharging beats Charging beats Plugged."""


def status_priority(status: BatteryStatus) -> int:
    """Return the reconciliation priority of *status* (lower wins)."""
    return _STATUS_PRIORITY[status]


def most_active_status(
    statuses: Iterable[BatteryStatus | None],
) -> BatteryStatus | None:
    """Return the most active status present, ignoring unknown ones.

    If any battery is discharging the result is DISCHARGING, else if any is
    charging it is CHARGING, else PLUGGED. Returns ``None`` when no status
    is known at all.
    """
    known = [s for s in statuses if s is not None]
    if not known:
        return None
    return min(known, key=status_priority)


class BatteryReading(BaseModel):
    """A single battery (or combined) telemetry reading.

    Units are whatever the source used until the normalizer runs: either
    energy domain (µWh / µW, treated as mWh-like) or charge domain
    (µAh / µA) when ``is_charge_unit`` is true.

    Attributes:
        status: Charging state, or ``None`` if the source never reported one.
        energy_full_design: Design capacity.
        energy_full: Last measured full capacity (newer kernels only).
        energy_remaining: Energy (or charge) currently stored.
        present_rate: Absolute current draw / power, 0 when idle.
        voltage: Absolute present voltage.
        is_charge_unit: True if the values are still in charge units.
    """

    model_config = ConfigDict(frozen=True)

    status: BatteryStatus | None = None
    energy_full_design: float | None = None
    energy_full: float | None = None
    energy_remaining: float | None = None
    present_rate: float | None = None
    voltage: float | None = None
    is_charge_unit: bool = False

    @property
    def capacity(self) -> float | None:
        """Full capacity: measured ``energy_full`` if known, else design."""
        if self.energy_full is not None:
            return self.energy_full
        return self.energy_full_design

    @property
    def is_usable(self) -> bool:
        """True when remaining energy and capacity are present and non-negative.

        A negative value is never a real reading of the battery; it is
        treated the same as an absent field.
        """
        remaining = self.energy_remaining
        capacity = self.capacity
        if remaining is None or capacity is None:
            return False
        return remaining >= 0 and capacity >= 0
