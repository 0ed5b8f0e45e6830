"""
Tests for block presentation -- tiers, ramps, composed lines, color.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import pytest
from battery_block.src.formatter import (
    LOW_COLOR,
    PRESETS,
    BlockOutput,
    IconSet,
    build_ramp,
    compose,
    custom_icon_set,
    icon_tier,
    unavailable,
)
from battery_block.src.models import BatteryReading, BatteryStatus

_ICONS = custom_icon_set("#", "-")


def _reading(
    percentage: float,
    status: BatteryStatus | None = BatteryStatus.DISCHARGING,
    rate: float = 0.0,
) -> BatteryReading:
    return BatteryReading(
        status=status,
        energy_remaining=percentage,
        energy_full_design=100.0,
        present_rate=rate,
    )


class TestIconTier:
    """Lower bound of each tier is inclusive."""

    @pytest.mark.parametrize(
        ("percentage", "tier"),
        [
            (100.0, 0),
            (95.0, 0),
            (94.9, 1),
            (75.0, 1),
            (50.0, 2),
            (25.0, 3),
            (24.9, 4),
            (0.0, 4),
        ],
    )
    def test_tiers(self, percentage: float, tier: int) -> None:
        assert icon_tier(percentage) == tier


class TestRamps:
    """FULL/EMPTY ramps and presets."""

    def test_custom_ramp(self) -> None:
        assert build_ramp("#", "-") == ("####", "###-", "##--", "#---", "----")

    def test_custom_icon_set_uses_ramp(self) -> None:
        assert _ICONS.tiers == ("####", "###-", "##--", "#---", "----")

    def test_presets_have_five_tiers(self) -> None:
        assert set(PRESETS) == {"battery", "heart"}
        for icons in PRESETS.values():
            assert len(icons.tiers) == 5
            assert len(set(icons.tiers)) == 5

    def test_icon_set_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            _ICONS.charging = "x"  # type: ignore[misc]


class TestCompose:
    """Composed full/short text and color line."""

    def test_icon_view(self) -> None:
        reading = _reading(50.0, BatteryStatus.DISCHARGING, rate=10.0)
        out = compose(reading, _ICONS)
        assert out.full_text == "  ##--  05:00"
        assert out.short_text == out.full_text
        assert out.color is None

    def test_status_glyphs(self) -> None:
        icons = IconSet(
            tiers=_ICONS.tiers, charging="C", discharging="D", plugged="P"
        )
        assert compose(_reading(80.0, BatteryStatus.CHARGING), icons).full_text == (
            "C ###-  Full"
        )
        assert compose(_reading(80.0, BatteryStatus.PLUGGED), icons).full_text == (
            "P ###-  Full"
        )
        assert compose(_reading(80.0, None), icons).full_text == "  ###-  Full"

    def test_percentage_view_truncates(self) -> None:
        out = compose(_reading(57.9, rate=0.0), _ICONS, show_percentage=True)
        assert out.full_text == "57% Full"

    def test_threshold_inclusive(self) -> None:
        assert compose(_reading(10.0), _ICONS).color == LOW_COLOR
        assert compose(_reading(10.1), _ICONS).color is None

    def test_custom_threshold(self) -> None:
        assert compose(_reading(20.0), _ICONS, threshold=25.0).color == "#FF0000"

    def test_overflowing_values_render(self) -> None:
        reading = BatteryReading(
            status=BatteryStatus.DISCHARGING,
            energy_remaining=1e308,
            energy_full_design=1e-10,
            present_rate=1e-10,
        )
        out = compose(reading, PRESETS["battery"], show_percentage=True)
        assert out.full_text == "0% Full"
        assert out.color == LOW_COLOR


class TestBlockOutputLines:
    """i3blocks line order: full text, short text, optional color."""

    def test_two_lines_without_color(self) -> None:
        assert BlockOutput(full_text="a", short_text="b").lines() == ["a", "b"]

    def test_three_lines_with_color(self) -> None:
        out = BlockOutput(full_text="a", short_text="a", color=LOW_COLOR)
        assert out.lines() == ["a", "a", "#FF0000"]

    def test_unavailable_placeholder(self) -> None:
        out = unavailable(_ICONS)
        assert out.lines() == ["  ", "  "]
