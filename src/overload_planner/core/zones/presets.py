"""
Built-in zone presets.

Strength works heavy triples, hypertrophy the classic 6–12 range, endurance
long sets on short rest.  All three stop two reps short of failure.
"""

from types import MappingProxyType

from .base import ZonePreset

STRENGTH = ZonePreset(
    rep_low=1,
    rep_high=5,
    default_reps=3,
    target_rir=2,
    set_count=3,
    rest_duration="2 minutes 30 seconds",
)

HYPERTROPHY = ZonePreset(
    rep_low=6,
    rep_high=12,
    default_reps=8,
    target_rir=2,
    set_count=3,
    rest_duration="1 minute 30 seconds",
)

ENDURANCE = ZonePreset(
    rep_low=12,
    rep_high=20,
    default_reps=15,
    target_rir=2,
    set_count=3,
    rest_duration="45 seconds",
)

DEFAULT_ZONE_PRESETS = MappingProxyType({
    "STRENGTH": STRENGTH,
    "HYPERTROPHY": HYPERTROPHY,
    "ENDURANCE": ENDURANCE,
})
