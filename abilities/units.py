"""
Temperature display conversion. Stored values are always Celsius.
"""

import math
from typing import Optional

from models import DisplayUnit


def round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def to_fahrenheit(celsius: float) -> int:
    return round_half_away(celsius * 9 / 5 + 32)


def to_celsius_display(celsius: float) -> int:
    return round_half_away(celsius)


def from_fahrenheit(fahrenheit: float) -> int:
    return round_half_away((fahrenheit - 32) * 5 / 9)


def convert(celsius: Optional[float], unit: DisplayUnit) -> Optional[int]:
    """Celsius reading -> whole number in the display unit (None passes through)."""
    if celsius is None:
        return None
    if unit == DisplayUnit.FAHRENHEIT:
        return to_fahrenheit(celsius)
    return to_celsius_display(celsius)


def unit_label(unit: DisplayUnit) -> str:
    return "°F" if unit == DisplayUnit.FAHRENHEIT else "°C"
