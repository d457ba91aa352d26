"""
Weight unit conversion and gym-practical rounding.

Plate increments are defined in pounds.  A kilogram load is converted to
pounds, rounded, and converted back, so kg users get the same physical
increments as lb users rather than round kilogram numbers.
"""

import math

from .config import DEFAULT_ROUND_INCREMENT, KG_TO_LB, WEIGHT_UNITS


def validate_unit(unit: str) -> str:
    """Return ``unit`` if it is "lbs" or "kg", else raise ValueError."""
    if unit not in WEIGHT_UNITS:
        raise ValueError(f"Invalid weight unit: {unit!r}. Must be one of {WEIGHT_UNITS}")
    return unit


def to_lbs(value: float, unit: str) -> float:
    """Convert ``value`` expressed in ``unit`` to pounds."""
    return value * KG_TO_LB if unit == "kg" else value


def from_lbs(value_lbs: float, unit: str) -> float:
    """Convert a pound value back to ``unit``."""
    return value_lbs / KG_TO_LB if unit == "kg" else value_lbs


def round_half_away(value: float, increment: float = DEFAULT_ROUND_INCREMENT) -> float:
    """
    Round ``value`` to the nearest multiple of ``increment``.

    Exact halves move away from zero (2.5 steps: 1.25 → 2.5, −1.25 → −2.5).
    Infinite and NaN values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    steps = math.floor(abs(value) / increment + 0.5)
    return math.copysign(steps * increment, value)
