"""Planning command: plan."""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.engine.progression import PlanningError, explain_exercise, plan_next_session
from ...core.models import PreviousSession
from ...io.serializers import (
    ValidationError,
    load_request_file,
    parse_request,
    plan_to_dict,
    validate_date,
    validate_goal,
    validate_unit,
)
from .. import views
from ..app import ConfigOption, JsonOption, app, get_config


def _next_session_date(session: PreviousSession, today: datetime | None = None) -> str:
    """Day after the previous session, or tomorrow if it is undated."""
    if session.date:
        base = datetime.strptime(session.date, "%Y-%m-%d")
    else:
        base = today or datetime.now()
    return (base + timedelta(days=1)).strftime("%Y-%m-%d")


@app.command()
def plan(
    payload: Annotated[
        Path,
        typer.Argument(help="JSON request file with a previousWorkout ('-' reads stdin)"),
    ],
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="Weight unit: lbs or kg (default: from payload, else lbs)"),
    ] = None,
    goal: Annotated[
        Optional[str],
        typer.Option("--goal", "-g", help="Override goal: STRENGTH, HYPERTROPHY, ENDURANCE"),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Date of the planned session (default: day after previous)"),
    ] = None,
    explain: Annotated[
        bool,
        typer.Option("--explain", "-x", help="Show how each prescription was computed"),
    ] = False,
    json_out: JsonOption = False,
    config_path: ConfigOption = None,
) -> None:
    """
    Prescribe the next session from a previous-session payload.
    """
    try:
        settings, zones = get_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        session, payload_unit, payload_goal = parse_request(load_request_file(payload))
        work_unit = validate_unit(unit) if unit else payload_unit
        goal_override = validate_goal(goal) if goal else payload_goal
        plan_date = validate_date(date) if date else _next_session_date(session)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        new_plan, traces = plan_next_session(
            session,
            unit=work_unit,
            goal=goal_override,
            settings=settings,
            plan_date=plan_date,
            zones=zones,
        )
    except PlanningError as e:
        views.print_error(f"Unable to calculate workout: {e}")
        raise typer.Exit(2)

    if json_out:
        print(json.dumps(plan_to_dict(new_plan, traces), indent=2))
        return

    views.console.print()
    views.console.print(views.format_plan_table(new_plan))

    for prescription in new_plan.exercises:
        if prescription.is_empty:
            views.print_warning(f"{prescription.name}: no valid sets logged, nothing prescribed.")

    if explain:
        for trace in traces:
            views.console.print()
            views.console.print(views.format_details_table(trace))
            views.console.print(explain_exercise(trace))
    views.console.print()
