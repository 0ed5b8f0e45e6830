"""
One-shot entrypoint for the i3blocks battery block.

Each invocation (one per status-bar refresh or click):
1. Loads BlockSettings from the environment, overridden by CLI flags.
2. Enumerates ``BAT<n>`` devices and parses each ``uevent`` file.
3. Normalizes charge-unit readings to energy units.
4. Resolves the click display mode from ``BLOCK_BUTTON``.
5. Selects or combines batteries and prints the block lines to stdout.

Stdout is reserved for the block; diagnostics go to stderr as structured
JSON log lines.

Exit codes:
    0: block printed.
    1: no usable battery data; a placeholder block is printed.
    2: invalid arguments or configuration; nothing is printed.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from battery_block.src import __version__
from battery_block.src.aggregator import aggregate
from battery_block.src.clicks import resolve_display
from battery_block.src.config import BlockSettings, parse_custom_icons
from battery_block.src.formatter import PRESETS, BlockOutput, compose, unavailable
from battery_block.src.models import BatteryReading
from battery_block.src.normalizer import normalize
from battery_block.src.sysfs import find_batteries, read_uevent
from battery_block.src.telemetry import parse_reading

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNAVAILABLE = 1
EXIT_CONFIG_ERROR = 2


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "WARNING") -> None:
    """Configure structured JSON logging on stderr.

    Sets up the root logger with a JSON-formatted handler writing to stderr,
    keeping stdout free for the block output.
    """

    class _JsonFormatter(logging.Formatter):
        """Minimal JSON log formatter."""

        def format(self, record: logging.LogRecord) -> str:
            log_entry = {
                "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------


def _icon_pair(value: str) -> str:
    """argparse type for ``--custom FULL,EMPTY``."""
    try:
        parse_custom_icons(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="battery-block",
        description="Print battery status for an i3blocks block.",
    )
    parser.add_argument(
        "-t",
        "--type",
        choices=sorted(PRESETS),
        help="icon preset used to indicate the battery status",
    )
    parser.add_argument(
        "-c",
        "--custom",
        type=_icon_pair,
        metavar="FULL,EMPTY",
        help="build a 4-character ramp from two custom icons (overrides --type)",
    )
    parser.add_argument(
        "-b",
        "--battery",
        type=int,
        metavar="N",
        help="zero-based battery index to show (default: combine all)",
    )
    parser.add_argument(
        "-p",
        "--path",
        metavar="DIR",
        help="power supply directory (default: /sys/class/power_supply)",
    )
    parser.add_argument(
        "-T",
        "--threshold",
        type=float,
        metavar="PCT",
        help="percentage at or below which the block turns red (default: 10)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log diagnostics to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Map parsed CLI flags onto BlockSettings field overrides."""
    mapping = {
        "type": "icons",
        "custom": "custom_icons",
        "battery": "index",
        "path": "power_supply_path",
        "threshold": "threshold",
    }
    overrides = {
        field: getattr(args, flag)
        for flag, field in mapping.items()
        if getattr(args, flag) is not None
    }
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return overrides


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def read_readings(base: str) -> list[BatteryReading]:
    """Parse and normalize every battery under *base*, in device order."""
    readings = []
    for device in find_batteries(base):
        reading = normalize(parse_reading(read_uevent(device)))
        logger.debug("Read %s: %s", device.name, reading.model_dump())
        readings.append(reading)
    return readings


def render(settings: BlockSettings) -> tuple[BlockOutput, int]:
    """Run the full pipeline and return the block plus its exit code."""
    icons = settings.icon_set()
    readings = read_readings(settings.power_supply_path)
    mode = resolve_display(settings.block_button, settings.index, readings)

    reading = aggregate(readings, mode.index)
    if reading is None:
        return unavailable(icons), EXIT_UNAVAILABLE

    output = compose(
        reading,
        icons,
        show_percentage=mode.show_percentage,
        threshold=settings.threshold,
    )
    return output, EXIT_OK


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint: parse flags, load settings, print the block."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        settings = BlockSettings(**_settings_overrides(args))
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    logging.getLogger().setLevel(settings.log_level)

    output, code = render(settings)
    for line in output.lines():
        print(line)
    return code


if __name__ == "__main__":
    sys.exit(main())
