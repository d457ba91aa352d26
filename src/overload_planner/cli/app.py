"""Shared Typer app object, shared option types, and config utilities."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.config import EngineSettings
from ..core.engine.config_loader import load_engine_settings, load_model_config, settings_from_dict
from ..core.zones import ZonePreset
from ..core.zones.loader import load_zone_presets

# Shared --config option type used by commands that run the engine
ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="YAML config file (merged over ~/.overload-planner/config.yaml)",
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="overload-planner",
    help="Progressive-overload planner: prescribes the next session from the last one.",
    no_args_is_help=True,
)


def get_settings(config_path: Path | None) -> EngineSettings:
    """Load engine settings from the user config and an optional explicit file."""
    return load_engine_settings(config_path)


def get_config(config_path: Path | None) -> tuple[EngineSettings, dict[str, ZonePreset]]:
    """
    Load engine settings and the zone table from one merged config read.

    ``zones:`` overrides in an explicit file apply on top of the user file,
    the same way ``engine:`` settings do.
    """
    config = load_model_config(config_path)
    return settings_from_dict(config.get("engine")), load_zone_presets(config.get("zones"))
