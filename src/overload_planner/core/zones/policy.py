"""
Zone classification rules.

A set is "top of range" when it reached the zone's rep ceiling without
digging deeper than the target RIR: the load can go up.  It is "below
range" when it fell short of the rep floor or left more than one rep
beyond the target in the tank: the load should come down.
"""

from .base import ZonePreset
from .registry import get_zone


def clamp_to_zone_reps(goal: str, target_reps: int | None = None, zone: ZonePreset | None = None) -> int:
    """
    Clamp target reps to the zone's rep range.

    A missing or zero target yields the zone's default reps.
    """
    preset = zone or get_zone(goal)
    if not target_reps:
        return preset.default_reps
    return max(preset.rep_low, min(preset.rep_high, target_reps))


def is_in_top_of_range(reps: int, rir: float, goal: str, zone: ZonePreset | None = None) -> bool:
    """True if the set hit the top of the rep range at or below the target RIR."""
    preset = zone or get_zone(goal)
    return reps >= preset.rep_high and rir <= preset.target_rir


def is_below_range(reps: int, rir: float, goal: str, zone: ZonePreset | None = None) -> bool:
    """True if the set missed the rep floor or was well short of the target effort."""
    preset = zone or get_zone(goal)
    return reps < preset.rep_low or rir > preset.target_rir + 1
