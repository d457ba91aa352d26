"""
Zone registry.

Built once at import time from the built-in presets plus any ``zones:``
overrides in ~/.overload-planner/config.yaml.  Use get_zone() to look up a
ZonePreset by goal name.
"""

from collections.abc import Mapping
from types import MappingProxyType

from ..engine.config_loader import load_model_config
from .base import ZonePreset
from .loader import load_zone_presets


def _build_registry() -> MappingProxyType:
    return MappingProxyType(load_zone_presets(load_model_config().get("zones")))


ZONE_REGISTRY: "MappingProxyType[str, ZonePreset]" = _build_registry()


def get_zone(goal: str, zones: Mapping[str, ZonePreset] | None = None) -> ZonePreset:
    """
    Return the ZonePreset for the given goal.

    Args:
        goal: One of "STRENGTH", "HYPERTROPHY", "ENDURANCE"
        zones: Zone table to read from (default: ZONE_REGISTRY), e.g. one
            built from an explicit config file

    Returns:
        ZonePreset for the requested goal

    Raises:
        ValueError: If goal is not in the table
    """
    table = ZONE_REGISTRY if zones is None else zones
    if goal not in table:
        valid = ", ".join(table)
        raise ValueError(f"Unknown goal '{goal}'. Valid goals: {valid}")
    return table[goal]
