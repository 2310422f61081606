"""Unit auto-scaling for byte rates and byte totals."""

from __future__ import annotations

import enum

# ---- unit tables ----

BINARY_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB"]
DECIMAL_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


class UnitSystem(enum.Enum):
    BINARY = 1024
    DECIMAL = 1000

    @property
    def base(self) -> int:
        return self.value

    @property
    def units(self) -> list[str]:
        return BINARY_UNITS if self is UnitSystem.BINARY else DECIMAL_UNITS

    def toggled(self) -> UnitSystem:
        return UnitSystem.DECIMAL if self is UnitSystem.BINARY else UnitSystem.BINARY


def scale(value: float, system: UnitSystem = UnitSystem.BINARY) -> tuple[float, str, bool]:
    """Divide ``value`` down until it is below the base or the table runs out.

    Returns ``(scaled, unit, divided)``.
    """
    units = system.units
    base = system.base
    step = 0
    while value >= base and step < len(units) - 1:
        value /= base
        step += 1
    return value, units[step], step > 0


def format_value(value: float, system: UnitSystem = UnitSystem.BINARY, suffix: str = "") -> str:
    """Format a value with an auto-selected magnitude prefix.

    Raw byte magnitudes print without decimals, anything that was scaled
    prints with two.
    """
    scaled, unit, divided = scale(value, system)
    if divided:
        return f"{scaled:.2f} {unit}{suffix}"
    return f"{scaled:.0f} {unit}{suffix}"


def format_rate(bps: float, system: UnitSystem = UnitSystem.BINARY) -> str:
    return format_value(bps, system, "/s")


def format_size(total: float, system: UnitSystem = UnitSystem.BINARY) -> str:
    return format_value(total, system)
