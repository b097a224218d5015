"""
Rounding helpers.

Displayed figures round half away from the lower value (2.5 -> 3, -2.5 -> -2),
not to the nearest even digit as the built-in round() does.
"""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round `value` to `digits` decimals, halves rounding upward."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_currency(value: float) -> float:
    """Round a monetary amount to whole currency units."""
    return float(round_half_up(value, 0))


def round_price(value: float) -> float:
    """Round a $/MWh price to cents."""
    return round_half_up(value, 2)
