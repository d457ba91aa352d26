"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of prescriptions and reference data.
"""

from collections.abc import Mapping

from rich.console import Console
from rich.table import Table

from ..core.models import ExerciseTrace, SessionPlan
from ..core.zones import ZonePreset

console = Console()
err_console = Console(stderr=True)


def _fmt_weight(value: float | None, unit: str) -> str:
    if value is None:
        return "-"
    return f"{value:g} {unit}"


def format_plan_table(plan: SessionPlan) -> Table:
    """
    Create a Rich table with one row per prescribed exercise.

    Args:
        plan: Planned next session

    Returns:
        Rich Table object
    """
    title = f"Next session · {plan.goal.title()}"
    if plan.split:
        title += f" · {plan.split}"
    if plan.date:
        title += f" · {plan.date}"
    table = Table(title=title)

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Group", style="green")
    table.add_column("Sets×Reps", justify="right")
    table.add_column("Weight", justify="right", style="bold")
    table.add_column("RIR", justify="right")
    table.add_column("%1RM", justify="right")
    table.add_column("Baseline 1RM", justify="right", style="dim")

    for i, ex in enumerate(plan.exercises, 1):
        if ex.is_empty:
            table.add_row(str(i), ex.name, ex.muscle_group or "", "-", "[yellow]no sets[/yellow]", "-", "-", "-")
            continue
        first = ex.sets[0]
        table.add_row(
            str(i),
            ex.name,
            ex.muscle_group or "",
            f"{len(ex.sets)}×{first.reps}",
            _fmt_weight(ex.weight, plan.unit),
            f"{first.target_rir:g}",
            f"{first.percent_of_1rm:.1f}",
            _fmt_weight(ex.baseline, plan.unit),
        )

    return table


def format_details_table(trace: ExerciseTrace) -> Table:
    """Create a Rich table of per-set diagnostics for one exercise."""
    table = Table(title=f"{trace.name} · previous sets", title_justify="left")

    table.add_column("Set", justify="right", style="dim", width=3)
    table.add_column("Weight", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("RIR", justify="right")
    table.add_column("RPE", justify="right")
    table.add_column("Chart %", justify="right")
    table.add_column("Epley 1RM", justify="right")
    table.add_column("Chart 1RM", justify="right")
    table.add_column("Volume", justify="right")

    for i, d in enumerate(trace.set_details, 1):
        style = "bold" if trace.selected_index == i - 1 else None
        table.add_row(
            str(i),
            f"{d.weight:g}",
            str(d.reps),
            f"{d.rir:g}",
            f"{d.rpe:g}",
            f"{d.percent:.1f}",
            f"{d.performance_1rm:.2f}",
            f"{d.perceived_1rm:.2f}",
            f"{d.volume:g}",
            style=style,
        )

    return table


def format_zone_table(zones: Mapping[str, ZonePreset]) -> Table:
    """Create a Rich table of the training-zone presets."""
    table = Table(title="Training zones")

    table.add_column("Goal", style="magenta")
    table.add_column("Rep range", justify="right")
    table.add_column("Default reps", justify="right")
    table.add_column("Target RIR", justify="right")
    table.add_column("Sets", justify="right")
    table.add_column("Rest")

    for goal, z in zones.items():
        table.add_row(
            goal,
            f"{z.rep_low}–{z.rep_high}",
            str(z.default_reps),
            f"{z.target_rir:g}",
            str(z.set_count),
            z.rest_duration,
        )

    return table


def format_rpe_table(table_data: Mapping[int, Mapping[float, float]]) -> Table:
    """Create a Rich table of the RPE → %1RM chart (reps down, RPE across)."""
    columns = sorted({rpe for row in table_data.values() for rpe in row}, reverse=True)
    table = Table(title="RPE → %1RM")

    table.add_column("Reps", justify="right", style="cyan")
    for rpe in columns:
        table.add_column(f"@{rpe:g}", justify="right")

    for reps in sorted(table_data):
        row = table_data[reps]
        table.add_row(str(reps), *(f"{row[rpe]:.1f}" if rpe in row else "-" for rpe in columns))

    return table


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")
