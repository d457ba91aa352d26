"""
YAML → typed config loader.

Loads engine settings and zone overrides from the user config file at
~/.overload-planner/config.yaml (or an explicit path).  Two sections are
recognised:

    engine:
      round_increment: 5.0       # pounds
      per_rep_drop_pct: 2.0
      prefer_perceived: true
      top_of_range_wins: true
      default_goal: HYPERTROPHY
    zones:
      STRENGTH:
        set_count: 5

Usage:
    from overload_planner.core.engine.config_loader import load_engine_settings
    settings = load_engine_settings()

If the user file is missing, the Python defaults from config.py apply.  If it
exists but cannot be parsed, a warning is emitted and the file is ignored.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..models import GOALS

_ENGINE_KEYS: frozenset[str] = frozenset(f.name for f in fields(EngineSettings))

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(
            f"overload-planner: ignoring config file {path} ({exc})",
            stacklevel=2,
        )
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(
            f"overload-planner: config file {path} must contain a mapping; ignoring it",
            stacklevel=2,
        )
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_user_config_path() -> Path | None:
    """Return ~/.overload-planner/config.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".overload-planner" / "config.yaml"
    return p if p.exists() else None


def load_model_config(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load and merge configuration from YAML sources.

    Load order (later overrides earlier):
    1. User file at ~/.overload-planner/config.yaml
    2. Explicit ``path`` (e.g. from the CLI --config option)

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    user = get_user_config_path()
    if user is not None:
        config = _deep_merge(config, _load_yaml_file(user))

    if path is not None:
        explicit = Path(path)
        if not explicit.exists():
            raise FileNotFoundError(f"Config file not found: {explicit}")
        config = _deep_merge(config, _load_yaml_file(explicit))

    return config


def settings_from_dict(section: dict[str, Any] | None) -> EngineSettings:
    """
    Build EngineSettings from the ``engine`` config section.

    Unknown keys are ignored with a warning.

    Raises:
        ValueError: If a value has the wrong type or is out of range
    """
    if not section:
        return DEFAULT_SETTINGS
    if not isinstance(section, dict):
        raise ValueError("'engine' config section must be a mapping")

    unknown = set(section) - _ENGINE_KEYS
    if unknown:
        warnings.warn(
            f"overload-planner: ignoring unknown engine settings {sorted(unknown)}",
            stacklevel=2,
        )

    kwargs: dict[str, Any] = {}
    try:
        if "round_increment" in section:
            kwargs["round_increment"] = float(section["round_increment"])
        if "per_rep_drop_pct" in section:
            kwargs["per_rep_drop_pct"] = float(section["per_rep_drop_pct"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid numeric engine setting: {exc}") from exc

    for key in ("prefer_perceived", "top_of_range_wins"):
        if key in section:
            if not isinstance(section[key], bool):
                raise ValueError(f"{key} must be true or false, got {section[key]!r}")
            kwargs[key] = section[key]

    if "default_goal" in section:
        goal = str(section["default_goal"]).upper()
        if goal not in GOALS:
            raise ValueError(f"default_goal must be one of {GOALS}, got {goal!r}")
        kwargs["default_goal"] = goal

    return EngineSettings(**kwargs)


def load_engine_settings(path: str | Path | None = None) -> EngineSettings:
    """Load EngineSettings from the user config and an optional explicit file."""
    return settings_from_dict(load_model_config(path).get("engine"))
