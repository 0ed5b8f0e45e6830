"""
Thin sysfs access: enumerate battery devices and read their ``uevent``.

Neither function raises for missing or unreadable paths; a vanished device
simply contributes no records, which the parser turns into an all-absent
reading.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from battery_block.src.telemetry import parse_uevent_lines

logger = logging.getLogger(__name__)

DEFAULT_POWER_SUPPLY_PATH = "/sys/class/power_supply"

_BATTERY_NAME = re.compile(r"^BAT(\d+)$")


def find_batteries(base: str | Path = DEFAULT_POWER_SUPPLY_PATH) -> list[Path]:
    """Return ``BAT<n>`` device directories under *base*, sorted by n."""
    base = Path(base)
    try:
        entries = list(base.iterdir())
    except OSError:
        logger.warning("Cannot list power supplies under %s", base, exc_info=True)
        return []

    found: list[tuple[int, Path]] = []
    for entry in entries:
        match = _BATTERY_NAME.match(entry.name)
        if match is not None:
            found.append((int(match.group(1)), entry))
    found.sort()
    return [path for _, path in found]


def read_uevent(device: str | Path) -> list[tuple[str, str]]:
    """Read ``<device>/uevent`` into ordered ``(key, value)`` records."""
    path = Path(device) / "uevent"
    try:
        text = path.read_text()
    except OSError:
        logger.debug("Cannot read %s", path, exc_info=True)
        return []
    return parse_uevent_lines(text.splitlines())
