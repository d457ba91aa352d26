"""
JSON serialization for the planning request and response.

Parses the previous-session payload into dataclasses (rejecting malformed
shapes before the engine runs) and turns a SessionPlan plus its traces back
into a JSON-compatible dict.

Request shape::

    {
        "previousWorkout": {
            "date": "2025-12-01",
            "split": "Upper",
            "goal": "HYPERTROPHY",
            "exerciseInstances": [
                {
                    "id": "bench-1",
                    "name": "Bench Press",
                    "group": "Chest",
                    "sets": [{"weight": 175, "reps": 6, "rir": 2}]
                }
            ]
        },
        "weightUnit": "lbs"
    }
"""

import json
import math
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from ..core import units
from ..core.config import DEFAULT_RIR, DEFAULT_UNIT
from ..core.models import (
    GOALS,
    ExerciseHistory,
    ExercisePrescription,
    ExerciseTrace,
    Goal,
    LoggedSet,
    PrescribedSet,
    PreviousSession,
    SessionPlan,
    SetDetail,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: Any) -> str:
    """
    Validate and normalize date string to ISO format.

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_goal(goal: Any) -> Goal:
    """
    Validate training goal (case-insensitive).

    Raises:
        ValidationError: If goal is not STRENGTH, HYPERTROPHY or ENDURANCE
    """
    if not isinstance(goal, str) or goal.upper() not in GOALS:
        raise ValidationError(f"Invalid goal: {goal!r}. Must be one of {GOALS}")
    return goal.upper()  # type: ignore[return-value]


def validate_unit(unit: Any) -> str:
    """
    Validate weight unit.

    Raises:
        ValidationError: If unit is not "lbs" or "kg"
    """
    try:
        return units.validate_unit(unit)
    except ValueError as e:
        raise ValidationError(f"weightUnit: {e}") from e


def validate_number(value: Any, name: str) -> float:
    """
    Validate that a value is a finite number (bools rejected).

    Numeric strings are accepted, as form fields arrive as text.

    Raises:
        ValidationError: If value is not numeric
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as e:
            raise ValidationError(f"{name} must be a number, got {value!r}") from e
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


# =============================================================================
# Request
# =============================================================================


def dict_to_logged_set(data: Any, where: str = "set") -> LoggedSet | None:
    """
    Convert a set dict to LoggedSet.

    ``rir`` defaults to 2 when missing or null.  Reps must be a whole
    number ("5" and 5.0 are accepted, 5.5 is not).

    Returns:
        LoggedSet, or None if weight or reps are not positive (such a set
        was not performed and is skipped)

    Raises:
        ValidationError: If the set is not an object, a field is missing or
            not numeric, reps are fractional, or RIR is negative
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{where} must be an object, got {type(data).__name__}")
    for key in ("weight", "reps"):
        if key not in data:
            raise ValidationError(f"{where} is missing '{key}'")

    weight = validate_number(data["weight"], f"{where}.weight")
    reps_value = validate_number(data["reps"], f"{where}.reps")
    if not reps_value.is_integer():
        raise ValidationError(f"{where}.reps must be a whole number, got {data['reps']!r}")
    reps = int(reps_value)
    raw_rir = data.get("rir")
    rir = DEFAULT_RIR if raw_rir is None else validate_number(raw_rir, f"{where}.rir")
    validate_non_negative(rir, f"{where}.rir")

    if weight <= 0 or reps <= 0:
        return None
    return LoggedSet(weight=weight, reps=reps, rir=rir)


def dict_to_exercise(data: Any, where: str = "exercise") -> ExerciseHistory:
    """
    Convert an exercise dict (``id``, ``name``, ``group``, ``sets``) to ExerciseHistory.

    Raises:
        ValidationError: If the exercise is malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{where} must be an object, got {type(data).__name__}")
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{where}.name must be a non-empty string")
    raw_sets = data.get("sets") or []
    if not isinstance(raw_sets, list):
        raise ValidationError(f"{where}.sets must be a list")

    sets: list[LoggedSet] = []
    for i, raw in enumerate(raw_sets):
        s = dict_to_logged_set(raw, f"{where}.sets[{i}]")
        if s is not None:
            sets.append(s)

    ex_id = data.get("id")
    group = data.get("group")
    return ExerciseHistory(
        name=name.strip(),
        sets=sets,
        exercise_id=str(ex_id) if ex_id is not None else None,
        muscle_group=str(group) if group else None,
    )


def dict_to_previous_session(data: Any) -> PreviousSession:
    """
    Convert a ``previousWorkout`` dict to PreviousSession.

    Raises:
        ValidationError: If the payload or its exercise list is missing or
            malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid previousWorkout payload: expected an object")
    instances = data.get("exerciseInstances")
    if not isinstance(instances, list):
        raise ValidationError("Invalid previousWorkout payload: exerciseInstances must be a list")

    exercises = [
        dict_to_exercise(ex, f"exerciseInstances[{i}]") for i, ex in enumerate(instances)
    ]
    date = data.get("date")
    goal = data.get("goal")
    split = data.get("split")
    return PreviousSession(
        exercises=exercises,
        date=validate_date(date) if date else None,
        split=str(split) if split else "",
        goal=validate_goal(goal) if goal else None,
    )


def parse_request(data: Any) -> tuple[PreviousSession, str, Goal | None]:
    """
    Parse a full planning request.

    Returns:
        (previous session, weight unit, goal override or None)

    Raises:
        ValidationError: If the request is malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    session = dict_to_previous_session(data.get("previousWorkout"))
    unit = validate_unit(data.get("weightUnit") or DEFAULT_UNIT)
    goal = data.get("goal")
    return session, unit, validate_goal(goal) if goal else None


def load_request_file(path: str | Path) -> dict[str, Any]:
    """
    Read a JSON request from ``path`` ("-" reads stdin).

    Raises:
        ValidationError: If the file is missing or not valid JSON
    """
    try:
        if str(path) == "-":
            return json.load(sys.stdin)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ValidationError(f"Request file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}") from e


# =============================================================================
# Response
# =============================================================================


def _round(value: float | None, ndigits: int = 2) -> float | None:
    """Round for output; None and non-finite values (not valid JSON) become None."""
    if value is None or not math.isfinite(value):
        return None
    return round(value, ndigits)


def prescribed_set_to_dict(s: PrescribedSet) -> dict[str, Any]:
    """Convert PrescribedSet to JSON-compatible dict."""
    return {
        "set_index": s.set_index,
        "weight": _round(s.weight),
        "reps": s.reps,
        "rir": s.target_rir,
        "rpe": s.target_rpe,
        "percent_of_1rm": s.percent_of_1rm,
        "notes": s.note,
    }


def prescription_to_dict(p: ExercisePrescription) -> dict[str, Any]:
    """Convert ExercisePrescription to JSON-compatible dict."""
    return {
        "id": p.exercise_id,
        "name": p.name,
        "group": p.muscle_group,
        "recommended": {
            "baseline_1rm": _round(p.baseline),
            "weight": _round(p.weight),
            "target_reps": p.target_reps,
            "sets": [prescribed_set_to_dict(s) for s in p.sets],
        },
    }


def set_detail_to_dict(d: SetDetail) -> dict[str, Any]:
    """Convert SetDetail to JSON-compatible dict."""
    return {
        "weight": d.weight,
        "reps": d.reps,
        "rir": d.rir,
        "rpe": d.rpe,
        "percent": _round(d.percent),
        "perceived_1rm": _round(d.perceived_1rm),
        "epley": _round(d.performance_1rm),
        "volume": _round(d.volume),
    }


def trace_to_dict(t: ExerciseTrace) -> dict[str, Any]:
    """Convert ExerciseTrace to JSON-compatible dict."""
    est = t.estimates
    return {
        "id": t.exercise_id,
        "name": t.name,
        "group": t.muscle_group,
        "sets": [set_detail_to_dict(d) for d in t.set_details],
        "selected_set_index": t.selected_index + 1 if t.selected_index is not None else None,
        "performance_1rm": _round(est.performance_1rm) if est else None,
        "perceived_1rm": _round(est.perceived_1rm) if est else None,
        "baseline_1rm": _round(est.baseline) if est else None,
        "baseline_source": est.baseline_source if est else None,
        "in_top_of_range": t.in_top_of_range,
        "below_range": t.below_range,
        "adjustment": t.adjustment,
        "target_reps": t.target_reps,
        "target_rir": t.target_rir,
        "target_rpe": t.target_rpe,
        "target_percent": t.target_percent,
        "raw_load": _round(t.raw_load),
        "raw_load_lbs": _round(t.raw_load_lbs),
        "rounded_lbs": _round(t.rounded_lbs),
        "adjusted_lbs": _round(t.adjusted_lbs),
        "final_weight": _round(t.final_weight),
    }


def plan_to_dict(plan: SessionPlan, traces: list[ExerciseTrace]) -> dict[str, Any]:
    """
    Convert a plan and its traces to the response dict.

    Returns:
        {"newWorkout": {...}, "details": {"exercises": [...]}}
    """
    return {
        "newWorkout": {
            "date": plan.date,
            "split": plan.split,
            "goal": plan.goal,
            "unit": plan.unit,
            "status": plan.status,
            "exerciseInstances": [prescription_to_dict(p) for p in plan.exercises],
        },
        "details": {"exercises": [trace_to_dict(t) for t in traces]},
    }
