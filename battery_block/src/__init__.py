"""
Battery status block for i3blocks-style status bars.

Reads kernel power-supply telemetry from sysfs, normalizes charge and energy
units, aggregates multiple batteries into one reading, and renders a short
icon/percentage/time string with an optional low-charge color.

CHANGELOG:
- 2026-10-18: Initial creation

TODO:
- None
"""

__version__ = "1.0.0"
