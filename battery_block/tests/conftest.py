"""
Shared test fixtures for battery block tests.

Provides environment isolation for BlockSettings and helpers to build fake
``/sys/class/power_supply`` trees under ``tmp_path``.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

# All BlockSettings environment variable names, used for cleanup.
_ALL_BLOCK_ENV_VARS = (
    "BATTERY_POWER_SUPPLY_PATH",
    "BATTERY_INDEX",
    "BATTERY_ICONS",
    "BATTERY_CUSTOM_ICONS",
    "BATTERY_THRESHOLD",
    "BATTERY_LOG_LEVEL",
    "BLOCK_BUTTON",
)


@pytest.fixture(autouse=True)
def _clean_block_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove all block env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_BLOCK_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def power_supply(tmp_path: Path) -> Path:
    """Empty power supply directory with a non-battery AC adapter entry."""
    base = tmp_path / "power_supply"
    base.mkdir()
    ac = base / "AC"
    ac.mkdir()
    (ac / "uevent").write_text("POWER_SUPPLY_NAME=AC\nPOWER_SUPPLY_ONLINE=1\n")
    return base


@pytest.fixture()
def add_battery(power_supply: Path) -> Callable[..., Path]:
    """Return a factory writing ``BAT<n>/uevent`` with POWER_SUPPLY_ keys."""

    def _add(number: int, **fields: str | int) -> Path:
        device = power_supply / f"BAT{number}"
        device.mkdir()
        lines = [f"POWER_SUPPLY_{key.upper()}={value}" for key, value in fields.items()]
        (device / "uevent").write_text("\n".join(lines) + "\n")
        return device

    return _add
