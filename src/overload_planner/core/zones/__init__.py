"""
Training zones for overload-planner.

Each goal maps to a ZonePreset that parameterises the progression engine.
"""

from .base import ZonePreset
from .policy import clamp_to_zone_reps, is_below_range, is_in_top_of_range
from .registry import ZONE_REGISTRY, get_zone

__all__ = [
    "ZonePreset",
    "ZONE_REGISTRY",
    "get_zone",
    "clamp_to_zone_reps",
    "is_in_top_of_range",
    "is_below_range",
]
