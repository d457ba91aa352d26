"""
Next-session prescription for overload-planner.

For every exercise of the previous session the engine:

  1. picks the set with the highest Epley score,
  2. estimates 1RM from it with both estimators,
  3. takes the perceived estimate as the baseline,
  4. classifies the set against the goal's zone,
  5. reads the target %1RM from the RPE chart and scales the baseline,
  6. rounds to the nearest increment (in pounds) and nudges the load one
     increment up or down according to the classification,
  7. converts back to the working unit and emits the zone's set count.

Every intermediate value is recorded in an ExerciseTrace so the
explanation and the JSON details never re-compute anything.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..config import DEFAULT_SETTINGS, DEFAULT_UNIT, DISPLAY_DECIMALS, EngineSettings
from ..estimators import (
    e1rm_perceived,
    e1rm_performance,
    percent_from_table,
    perceived_percent,
    rpe_from_rir,
)
from ..models import (
    Adjustment,
    EstimateBundle,
    ExerciseHistory,
    ExercisePrescription,
    ExerciseTrace,
    LoggedSet,
    PrescribedSet,
    PreviousSession,
    SessionPlan,
    SetDetail,
)
from ..units import from_lbs, round_half_away, to_lbs, validate_unit
from ..zones import ZonePreset, clamp_to_zone_reps, get_zone, is_below_range, is_in_top_of_range

logger = logging.getLogger(__name__)


class PlanningError(Exception):
    """Raised when a prescription cannot be computed from valid input."""


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------


def select_best_set(sets: Sequence[LoggedSet]) -> tuple[int, LoggedSet] | None:
    """
    Return (index, set) of the set with the highest Epley 1RM.

    Ties keep the earliest set.  Returns None for an empty sequence.
    """
    best: tuple[int, LoggedSet] | None = None
    best_score = 0.0
    for i, s in enumerate(sets):
        score = e1rm_performance(s.weight, s.reps, s.rir)
        if best is None or score > best_score:
            best = (i, s)
            best_score = score
    return best


def describe_set(s: LoggedSet, per_rep_drop_pct: float = DEFAULT_SETTINGS.per_rep_drop_pct) -> SetDetail:
    """Per-set diagnostics: RPE, decayed %1RM, both 1RM estimates, volume."""
    return SetDetail(
        weight=s.weight,
        reps=s.reps,
        rir=s.rir,
        rpe=rpe_from_rir(s.rir),
        percent=perceived_percent(s.reps, s.rir, per_rep_drop_pct=per_rep_drop_pct),
        performance_1rm=e1rm_performance(s.weight, s.reps, s.rir),
        perceived_1rm=e1rm_perceived(s.weight, s.reps, s.rir, per_rep_drop_pct=per_rep_drop_pct),
        volume=s.weight * s.reps,
    )


def choose_baseline(
    performance_1rm: float,
    perceived_1rm: float,
    prefer_perceived: bool = DEFAULT_SETTINGS.prefer_perceived,
) -> tuple[float, str]:
    """Return (baseline, source name) according to the baseline policy."""
    if prefer_perceived:
        return perceived_1rm, "perceived"
    return performance_1rm, "performance"


def estimates_from_detail(
    detail: SetDetail,
    prefer_perceived: bool = DEFAULT_SETTINGS.prefer_perceived,
) -> EstimateBundle:
    """Both 1RM estimates of an already described set and the baseline chosen from them."""
    baseline, source = choose_baseline(detail.performance_1rm, detail.perceived_1rm, prefer_perceived)
    return EstimateBundle(
        performance_1rm=detail.performance_1rm,
        perceived_1rm=detail.perceived_1rm,
        baseline=baseline,
        baseline_source=source,
    )


def resolve_goal(goal: str | None, session_goal: str | None, default_goal: str) -> str:
    """Caller goal, else the session's declared goal, else the default."""
    return goal or session_goal or default_goal


def apply_overload_adjustment(
    load: float,
    in_top_of_range: bool,
    below_range: bool,
    increment: float = DEFAULT_SETTINGS.round_increment,
    top_of_range_wins: bool = DEFAULT_SETTINGS.top_of_range_wins,
) -> tuple[float, Adjustment]:
    """
    Move ``load`` one increment up or down.

    Top of range adds an increment; below range removes one but never goes
    under a single increment.  When both flags are set, ``top_of_range_wins``
    decides which rule is evaluated first.

    Returns:
        (adjusted load, "increase" | "decrease" | "hold")
    """
    checks: list[Adjustment] = ["increase", "decrease"]
    if not top_of_range_wins:
        checks.reverse()
    for check in checks:
        if check == "increase" and in_top_of_range:
            return load + increment, "increase"
        if check == "decrease" and below_range:
            return max(load - increment, increment), "decrease"
    return load, "hold"


def _materialize(
    trace: ExerciseTrace,
    exercise: ExerciseHistory,
    zone: ZonePreset,
) -> ExercisePrescription:
    est = trace.estimates
    note = (
        f"{trace.goal.title()} · {trace.target_percent:.1f}% of "
        f"{est.baseline_source} 1RM {est.baseline:.2f} {trace.unit}"
    )
    sets = [
        PrescribedSet(
            set_index=i + 1,
            weight=trace.final_weight,
            reps=trace.target_reps,
            target_rir=trace.target_rir,
            target_rpe=trace.target_rpe,
            percent_of_1rm=trace.target_percent,
            note=note,
        )
        for i in range(zone.set_count)
    ]
    return ExercisePrescription(
        name=exercise.name,
        exercise_id=exercise.exercise_id,
        muscle_group=exercise.muscle_group,
        weight=trace.final_weight,
        baseline=round(est.baseline, DISPLAY_DECIMALS),
        target_reps=trace.target_reps,
        sets=sets,
    )


def plan_exercise(
    exercise: ExerciseHistory,
    goal: str,
    unit: str = DEFAULT_UNIT,
    settings: EngineSettings = DEFAULT_SETTINGS,
    zones: Mapping[str, ZonePreset] | None = None,
) -> tuple[ExercisePrescription, ExerciseTrace]:
    """
    Prescribe the next session for one exercise.

    An exercise without sets yields an empty prescription; this is not an
    error.

    Args:
        exercise: Exercise and its logged sets from the previous session
        goal: Resolved training goal
        unit: Working weight unit ("lbs" or "kg")
        settings: Engine tunables
        zones: Zone table (default: the registry built from the user config)

    Returns:
        (prescription, trace)
    """
    zone = get_zone(goal, zones)
    increment = settings.round_increment
    trace = ExerciseTrace(
        name=exercise.name,
        goal=goal,  # type: ignore[arg-type]
        unit=unit,  # type: ignore[arg-type]
        exercise_id=exercise.exercise_id,
        muscle_group=exercise.muscle_group,
        set_details=[describe_set(s, settings.per_rep_drop_pct) for s in exercise.sets],
        round_increment=increment,
        per_rep_drop_pct=settings.per_rep_drop_pct,
        set_count=zone.set_count,
    )

    picked = select_best_set(exercise.sets)
    if picked is None:
        logger.info("No usable sets for %r; skipping prescription", exercise.name)
        return (
            ExercisePrescription(
                name=exercise.name,
                exercise_id=exercise.exercise_id,
                muscle_group=exercise.muscle_group,
            ),
            trace,
        )

    idx, best = picked
    trace.selected_index = idx
    trace.selected_set = best
    trace.estimates = estimates_from_detail(trace.set_details[idx], settings.prefer_perceived)

    # Classification (top-of-range is evaluated before below-range)
    trace.in_top_of_range = is_in_top_of_range(best.reps, best.rir, goal, zone)
    trace.below_range = is_below_range(best.reps, best.rir, goal, zone)

    # Target
    trace.target_reps = clamp_to_zone_reps(goal, zone.default_reps, zone)
    trace.target_rir = zone.target_rir
    trace.target_rpe = rpe_from_rir(zone.target_rir)
    trace.target_percent = percent_from_table(trace.target_reps, trace.target_rpe)

    # Load: scale, round in pounds, adjust, convert back
    trace.raw_load = trace.estimates.baseline * trace.target_percent / 100
    trace.raw_load_lbs = to_lbs(trace.raw_load, unit)
    trace.rounded_lbs = round_half_away(trace.raw_load_lbs, increment)
    trace.adjusted_lbs, trace.adjustment = apply_overload_adjustment(
        trace.rounded_lbs,
        trace.in_top_of_range,
        trace.below_range,
        increment,
        settings.top_of_range_wins,
    )
    trace.final_weight = round(from_lbs(trace.adjusted_lbs, unit), DISPLAY_DECIMALS)

    logger.debug(
        "%s: best set #%d %s×%d@RIR%s → e1RM perf=%.2f perc=%.2f, "
        "target %d@RPE%s (%.1f%%), raw=%.2f lbs, rounded=%.1f, %s → %.2f %s",
        exercise.name,
        idx + 1,
        best.weight,
        best.reps,
        best.rir,
        trace.estimates.performance_1rm,
        trace.estimates.perceived_1rm,
        trace.target_reps,
        trace.target_rpe,
        trace.target_percent,
        trace.raw_load_lbs,
        trace.rounded_lbs,
        trace.adjustment,
        trace.final_weight,
        unit,
    )

    return _materialize(trace, exercise, zone), trace


def plan_next_session(
    previous_session: PreviousSession,
    unit: str = DEFAULT_UNIT,
    goal: str | None = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
    plan_date: str | None = None,
    zones: Mapping[str, ZonePreset] | None = None,
) -> tuple[SessionPlan, list[ExerciseTrace]]:
    """
    Prescribe the next session from the previous one.

    Pure function of its arguments: identical input yields identical output.

    Args:
        previous_session: The session to progress from
        unit: Working weight unit ("lbs" or "kg")
        goal: Goal override; falls back to the session's goal, then the
            configured default (HYPERTROPHY)
        settings: Engine tunables
        plan_date: Date to stamp on the plan (ISO), if any
        zones: Zone table (default: the registry built from the user config)

    Returns:
        (plan, per-exercise traces in input order)

    Raises:
        ValueError: If unit or goal is invalid
        PlanningError: If an exercise's prescription cannot be computed
    """
    validate_unit(unit)
    resolved_goal = resolve_goal(goal, previous_session.goal, settings.default_goal)
    get_zone(resolved_goal, zones)

    prescriptions: list[ExercisePrescription] = []
    traces: list[ExerciseTrace] = []
    for exercise in previous_session.exercises:
        try:
            prescription, trace = plan_exercise(exercise, resolved_goal, unit, settings, zones)
        except (ArithmeticError, ValueError) as exc:
            raise PlanningError(
                f"Could not compute a prescription for {exercise.name!r}: {exc}"
            ) from exc
        prescriptions.append(prescription)
        traces.append(trace)

    plan = SessionPlan(
        goal=resolved_goal,  # type: ignore[arg-type]
        unit=unit,  # type: ignore[arg-type]
        exercises=prescriptions,
        date=plan_date,
        split=previous_session.split,
    )
    return plan, traces


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------


def explain_exercise(trace: ExerciseTrace) -> str:
    """
    Format an ExerciseTrace into a Rich-markup step-by-step explanation.

    Pure formatter: no computation, no side-effects.
    All values come from the trace built by plan_exercise().
    """
    u = trace.unit
    rule = "─" * 54
    L: list[str] = []

    L.append(f"[bold cyan]{trace.name}  ·  {trace.goal.title()}[/bold cyan]")
    L.append(rule)

    # LOGGED SETS
    L.append("\n[bold]PREVIOUS SESSION[/bold]")
    if not trace.set_details:
        L.append("  No usable sets were logged.")
        L.append("  [yellow]Nothing to progress from, no prescription.[/yellow]")
        return "\n".join(L)
    for i, d in enumerate(trace.set_details, 1):
        marker = "  [green]◀ best[/green]" if trace.selected_index == i - 1 else ""
        L.append(
            f"  Set {i}: {d.weight:g} {u} × {d.reps} @ RIR {d.rir:g} (RPE {d.rpe:g})"
            f"  → Epley {d.performance_1rm:.2f}, chart {d.perceived_1rm:.2f}{marker}"
        )
    L.append("  Representative set = highest Epley score (first one wins ties).")

    est = trace.estimates
    best = trace.selected_set
    if est is None or best is None:
        return "\n".join(L)

    # ESTIMATES
    L.append("\n[bold]1RM ESTIMATES[/bold]")
    L.append(
        f"  Epley:  {best.weight:g} × (1 + ({best.reps} + {best.rir:g}) / 30)"
        f" = [cyan]{est.performance_1rm:.2f} {u}[/cyan]"
    )
    detail = trace.set_details[trace.selected_index or 0]
    L.append(
        f"  Chart:  RPE {detail.rpe:g} base row, −{trace.per_rep_drop_pct:g}%/rep beyond the first → {detail.percent:.1f}%;"
        f"  {best.weight:g} / {detail.percent:.1f}% = [cyan]{est.perceived_1rm:.2f} {u}[/cyan]"
    )
    L.append(
        f"  Baseline: [bold]{est.baseline:.2f} {u}[/bold] ({est.baseline_source} estimate)."
    )

    # CLASSIFICATION
    L.append("\n[bold]ZONE CHECK[/bold]")
    L.append(f"  Top of range:   {'yes' if trace.in_top_of_range else 'no'}")
    L.append(f"  Below range:    {'yes' if trace.below_range else 'no'}")
    verdict = {
        "increase": f"[green]+{trace.round_increment:g} lbs[/green] (top of range)",
        "decrease": f"[yellow]−{trace.round_increment:g} lbs[/yellow] (below range)",
        "hold": "no change (inside range)",
    }[trace.adjustment]
    L.append(f"  Adjustment:     {verdict}")

    # TARGET
    L.append("\n[bold]TARGET[/bold]")
    L.append(
        f"  {trace.target_reps} reps @ RIR {trace.target_rir:g} (RPE {trace.target_rpe:g})"
        f" → {trace.target_percent:.1f}% of 1RM (RPE chart)."
    )

    # LOAD
    L.append("\n[bold]LOAD[/bold]")
    L.append(f"  {est.baseline:.2f} × {trace.target_percent:.1f}% = {trace.raw_load:.2f} {u}")
    if u == "kg":
        L.append(f"  In pounds: {trace.raw_load_lbs:.2f} lbs")
    L.append(f"  Rounded to nearest {trace.round_increment:g} lbs: {trace.rounded_lbs:g} lbs")
    if trace.adjustment != "hold":
        L.append(f"  After adjustment: {trace.adjusted_lbs:g} lbs")
    if u == "kg":
        L.append(f"  Back to kg: {trace.final_weight:.2f} kg")

    L.append(
        f"\n[bold]PRESCRIPTION:[/bold] {trace.set_count} × {trace.target_reps}"
        f" @ [bold green]{trace.final_weight:g} {u}[/bold green]"
    )
    return "\n".join(L)
