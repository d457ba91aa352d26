"""Reference commands: estimate, zones, rpe-table."""

import json
from dataclasses import asdict, replace
from typing import Annotated, Optional

import typer

from ...core.engine.progression import describe_set, estimates_from_detail
from ...core.models import LoggedSet
from ...core.rpe_table import RPE_TABLE
from .. import views
from ..app import ConfigOption, JsonOption, app, get_config, get_settings


@app.command()
def estimate(
    weight: Annotated[float, typer.Option("--weight", "-w", help="Weight lifted")],
    reps: Annotated[int, typer.Option("--reps", "-r", help="Reps performed")],
    rir: Annotated[
        float,
        typer.Option("--rir", help="Reps in reserve"),
    ] = 2.0,
    drop: Annotated[
        Optional[float],
        typer.Option("--drop", help="%1RM lost per rep beyond the first (default: 2.0)"),
    ] = None,
    json_out: JsonOption = False,
    config_path: ConfigOption = None,
) -> None:
    """
    Estimate 1RM from one set with both the Epley and the RPE-chart method.
    """
    try:
        settings = get_settings(config_path)
        if drop is not None:
            settings = replace(settings, per_rep_drop_pct=drop)
        logged = LoggedSet(weight=weight, reps=reps, rir=rir)
    except (FileNotFoundError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    detail = describe_set(logged, settings.per_rep_drop_pct)
    bundle = estimates_from_detail(detail, settings.prefer_perceived)

    if json_out:
        print(json.dumps({
            "weight": weight,
            "reps": reps,
            "rir": rir,
            "rpe": detail.rpe,
            "chart_percent": round(detail.percent, 2),
            "performance_1rm": round(bundle.performance_1rm, 2),
            "perceived_1rm": round(bundle.perceived_1rm, 2),
            "baseline_1rm": round(bundle.baseline, 2),
            "baseline_source": bundle.baseline_source,
        }, indent=2))
        return

    views.console.print()
    views.console.print(f"[bold]{weight:g} × {reps} @ RIR {rir:g}[/bold] (RPE {detail.rpe:g})")
    views.console.print(f"  Epley (performance):   [cyan]{bundle.performance_1rm:.2f}[/cyan]")
    views.console.print(
        f"  RPE chart (perceived): [cyan]{bundle.perceived_1rm:.2f}[/cyan]"
        f"  [dim]({detail.percent:.1f}% of 1RM)[/dim]"
    )
    views.console.print(f"  Baseline used for planning: [bold]{bundle.baseline:.2f}[/bold] ({bundle.baseline_source})")
    views.console.print()


@app.command()
def zones(json_out: JsonOption = False, config_path: ConfigOption = None) -> None:
    """
    Show the training-zone presets for each goal, with config overrides applied.
    """
    try:
        _, zone_table = get_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({goal: asdict(z) for goal, z in zone_table.items()}, indent=2))
        return

    views.console.print()
    views.console.print(views.format_zone_table(zone_table))
    views.console.print()


@app.command("rpe-table")
def rpe_table(json_out: JsonOption = False) -> None:
    """
    Show the RPE → %1RM reference chart.
    """
    if json_out:
        print(json.dumps(
            {str(reps): {f"{rpe:g}": pct for rpe, pct in row.items()} for reps, row in RPE_TABLE.items()},
            indent=2,
        ))
        return

    views.console.print()
    views.console.print(views.format_rpe_table(RPE_TABLE))
    views.console.print()
