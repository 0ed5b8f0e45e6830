"""
Battery block configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Values come from ``BATTERY_*`` environment variables (or a ``.env`` file)
and may be overridden by command-line flags passed as init kwargs. The
click button is read from i3blocks' own ``BLOCK_BUTTON`` variable.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

import logging
import math

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from battery_block.src.formatter import PRESETS, IconSet, custom_icon_set
from battery_block.src.sysfs import DEFAULT_POWER_SUPPLY_PATH

DEFAULT_THRESHOLD = 10.0


def parse_custom_icons(value: str) -> tuple[str, str]:
    """Split a ``FULL,EMPTY`` icon pair.

    Raises:
        ValueError: If the delimiter is missing or either side is empty.
    """
    full, sep, empty = value.partition(",")
    if not sep or not full or not empty:
        raise ValueError(f"custom icons must be 'FULL,EMPTY' (got: {value!r})")
    return full, empty


class BlockSettings(BaseSettings):
    """Battery block configuration.

    Attributes:
        power_supply_path: Directory holding the ``BAT<n>`` devices.
        index: Battery to show, zero-based; -1 (or below) combines all
            batteries. Out-of-range values are clamped by the aggregator.
        icons: Icon preset name (``battery`` or ``heart``).
        custom_icons: Optional ``FULL,EMPTY`` character pair; overrides
            *icons* when set.
        threshold: Percentage at or below which the block turns red.
        log_level: Logging level name for stderr diagnostics.
        block_button: Click button id from ``BLOCK_BUTTON`` (0 = none).
    """

    power_supply_path: str = DEFAULT_POWER_SUPPLY_PATH
    index: int = -1
    icons: str = "battery"
    custom_icons: str = ""
    threshold: float = DEFAULT_THRESHOLD
    log_level: str = "WARNING"
    block_button: int = Field(default=0, validation_alias="BLOCK_BUTTON")

    @field_validator("power_supply_path")
    @classmethod
    def power_supply_path_must_be_set(cls, v: str) -> str:
        """Reject an empty base path."""
        if not v.strip():
            raise ValueError("BATTERY_POWER_SUPPLY_PATH must not be empty")
        return v

    @field_validator("icons")
    @classmethod
    def icons_must_be_known_preset(cls, v: str) -> str:
        """Validate the icon preset name."""
        if v not in PRESETS:
            raise ValueError(
                f"BATTERY_ICONS must be one of {sorted(PRESETS)} (got: {v!r})"
            )
        return v

    @field_validator("custom_icons")
    @classmethod
    def custom_icons_must_be_pair(cls, v: str) -> str:
        """Validate the ``FULL,EMPTY`` format when a custom ramp is set."""
        if v:
            parse_custom_icons(v)
        return v

    @field_validator("threshold")
    @classmethod
    def threshold_clamped_to_percentage(cls, v: float) -> float:
        """Clamp threshold into 0-100; NaN falls back to the default."""
        if math.isnan(v):
            return DEFAULT_THRESHOLD
        return min(max(v, 0.0), 100.0)

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate and upper-case the logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"BATTERY_LOG_LEVEL is not a logging level: {v!r}")
        return level

    @field_validator("block_button", mode="before")
    @classmethod
    def block_button_defaults_to_none(cls, v: object) -> int:
        """Treat an empty or non-numeric ``BLOCK_BUTTON`` as no click."""
        if v is None:
            return 0
        try:
            button = int(str(v).strip() or 0)
        except ValueError:
            return 0
        return max(button, 0)

    def icon_set(self) -> IconSet:
        """Build the immutable icon set for this run."""
        if self.custom_icons:
            return custom_icon_set(*parse_custom_icons(self.custom_icons))
        return PRESETS[self.icons]

    model_config = {
        "env_prefix": "BATTERY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
