"""
Utilities module for the combat engine.

Numeric helpers shared by the stat formulas and the combat resolver.
"""

import math


def round_half_up(value: float) -> int:
    """
    Rounds to the nearest integer, with halves going towards positive infinity.

    Python's ``round`` uses banker's rounding, which would make damage values
    like 2.5 and 3.5 round in different directions.

    Args:
        value (float): The value to round.

    Returns:
        int: The rounded value.

    """
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    """Restricts a value to the [low, high] interval."""
    return max(low, min(high, value))


def scale_by_growth(base: float, growth: float, level: int) -> int:
    """
    Scales a base value linearly with a per-level growth factor.

    Args:
        base (float): The unscaled value.
        growth (float): The growth per level (e.g. 0.15 for +15% per level).
        level (int): The level to scale to.

    Returns:
        int: ``floor(base * (1 + growth * level))``.

    """
    return math.floor(base * (1 + growth * level))
