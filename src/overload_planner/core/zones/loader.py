"""
Config → ZonePreset loader.

Builds the zone table from the built-in presets, deep-merging the
``zones:`` section of the user config file over them.  Only changed keys
need to be listed, e.g.::

    zones:
      STRENGTH:
        set_count: 5
        rest_duration: 3 minutes

A goal name that is not built in is rejected: the set of goals is fixed.
An override that fails validation is skipped with a warning and the
built-in preset is kept.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

from .base import ZonePreset
from .presets import DEFAULT_ZONE_PRESETS

_REQUIRED_ZONE_FIELDS: frozenset[str] = frozenset(
    {
        "rep_low",
        "rep_high",
        "default_reps",
        "target_rir",
        "set_count",
        "rest_duration",
    }
)


def zone_from_dict(d: Mapping[str, Any]) -> ZonePreset:
    """Convert a raw dict (from YAML) to a ZonePreset.

    Raises ValueError if any required field is absent or invalid.
    """
    missing = _REQUIRED_ZONE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ZonePreset missing fields: {sorted(missing)}")
    unknown = set(d) - _REQUIRED_ZONE_FIELDS
    if unknown:
        raise ValueError(f"ZonePreset has unknown fields: {sorted(unknown)}")
    try:
        return ZonePreset(
            rep_low=int(d["rep_low"]),
            rep_high=int(d["rep_high"]),
            default_reps=int(d["default_reps"]),
            target_rir=float(d["target_rir"]),
            set_count=int(d["set_count"]),
            rest_duration=str(d["rest_duration"]),
        )
    except TypeError as exc:
        raise ValueError(f"ZonePreset has a non-numeric field: {exc}") from exc


def load_zone_presets(
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, ZonePreset]:
    """Return {goal: ZonePreset} with user overrides applied.

    Args:
        overrides: The ``zones`` section of the user config (may be None)

    Returns:
        A new dict; the built-in presets are never modified.
    """
    result: dict[str, ZonePreset] = dict(DEFAULT_ZONE_PRESETS)
    if not overrides:
        return result

    if not isinstance(overrides, Mapping):
        warnings.warn(
            "overload-planner: 'zones' config section must be a mapping; ignoring it",
            stacklevel=2,
        )
        return result

    for goal, raw in overrides.items():
        if goal not in result:
            warnings.warn(
                f"overload-planner: skipping unknown zone '{goal}'",
                stacklevel=2,
            )
            continue
        if not isinstance(raw, Mapping):
            warnings.warn(
                f"overload-planner: zone '{goal}' override must be a mapping",
                stacklevel=2,
            )
            continue
        merged = {**asdict(result[goal]), **raw}
        try:
            result[goal] = zone_from_dict(merged)
        except ValueError as exc:
            warnings.warn(
                f"overload-planner: keeping built-in zone '{goal}': {exc}",
                stacklevel=2,
            )

    return result
