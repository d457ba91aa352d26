"""
Data models for overload-planner.

Input dataclasses describe one previous training session; output
dataclasses describe the prescribed next session and the trace of every
intermediate value that produced it.
"""

from dataclasses import dataclass, field
from typing import Literal

from .config import DEFAULT_RIR, PLAN_STATUS

Goal = Literal["STRENGTH", "HYPERTROPHY", "ENDURANCE"]
GOALS: tuple[str, ...] = ("STRENGTH", "HYPERTROPHY", "ENDURANCE")
WeightUnit = Literal["lbs", "kg"]
Adjustment = Literal["increase", "decrease", "hold"]


def _validate_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    import re
    from datetime import datetime

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


# =============================================================================
# Input
# =============================================================================


@dataclass(frozen=True)
class LoggedSet:
    """A single set performed in the previous session."""

    weight: float
    reps: int
    rir: float = DEFAULT_RIR  # reps in reserve

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.weight <= 0:
            raise ValueError("weight must be positive")
        if self.reps <= 0:
            raise ValueError("reps must be positive")
        if self.rir < 0:
            raise ValueError("rir must be non-negative")


@dataclass
class ExerciseHistory:
    """One exercise from the previous session and the sets logged for it."""

    name: str
    sets: list[LoggedSet] = field(default_factory=list)
    exercise_id: str | None = None
    muscle_group: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("exercise name must be a non-empty string")


@dataclass
class PreviousSession:
    """
    The session the next prescription is derived from.

    ``goal`` is the goal the lifter trained under; the caller may override it
    when planning.
    """

    exercises: list[ExerciseHistory] = field(default_factory=list)
    date: str | None = None  # ISO format: YYYY-MM-DD
    split: str = ""
    goal: Goal | None = None

    def __post_init__(self) -> None:
        """Validate session data."""
        if self.date is not None:
            _validate_date(self.date)
        if self.goal is not None and self.goal not in GOALS:
            raise ValueError(f"Invalid goal: {self.goal}")


# =============================================================================
# Derived values
# =============================================================================


@dataclass(frozen=True)
class EstimateBundle:
    """Both 1RM estimates for the representative set and the one chosen."""

    performance_1rm: float
    perceived_1rm: float
    baseline: float
    baseline_source: Literal["perceived", "performance"] = "perceived"


@dataclass(frozen=True)
class SetDetail:
    """Per-set diagnostics shown next to the prescription."""

    weight: float
    reps: int
    rir: float
    rpe: float
    percent: float  # base-row %1RM after per-rep decay
    performance_1rm: float
    perceived_1rm: float
    volume: float  # weight × reps


# =============================================================================
# Output
# =============================================================================


@dataclass(frozen=True)
class PrescribedSet:
    """One set of the next session."""

    set_index: int  # 1-based
    weight: float
    reps: int
    target_rir: float
    target_rpe: float
    percent_of_1rm: float
    note: str = ""


@dataclass
class ExercisePrescription:
    """
    Next-session prescription for one exercise.

    ``weight`` and ``baseline`` are None when the previous session had no
    usable sets for the exercise; ``sets`` is then empty.
    """

    name: str
    exercise_id: str | None = None
    muscle_group: str | None = None
    weight: float | None = None
    baseline: float | None = None
    target_reps: int = 0
    sets: list[PrescribedSet] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True if nothing could be prescribed."""
        return not self.sets


@dataclass
class SessionPlan:
    """The planned next session."""

    goal: Goal
    unit: WeightUnit
    exercises: list[ExercisePrescription] = field(default_factory=list)
    date: str | None = None  # ISO format: YYYY-MM-DD
    split: str = ""
    status: str = PLAN_STATUS

    def __post_init__(self) -> None:
        if self.date is not None:
            _validate_date(self.date)

    @property
    def total_sets(self) -> int:
        """Number of prescribed sets across all exercises."""
        return sum(len(e.sets) for e in self.exercises)


@dataclass
class ExerciseTrace:
    """
    All intermediate values computed for one exercise.

    Consumed by explain_exercise() and the JSON details block so the
    explanation never re-computes or diverges from the prescription.
    """

    name: str
    goal: Goal
    unit: WeightUnit
    exercise_id: str | None = None
    muscle_group: str | None = None
    set_details: list[SetDetail] = field(default_factory=list)

    # Representative set (None for a degenerate exercise)
    selected_index: int | None = None
    selected_set: LoggedSet | None = None
    estimates: EstimateBundle | None = None

    # Classification
    in_top_of_range: bool = False
    below_range: bool = False
    adjustment: Adjustment = "hold"

    # Target
    target_reps: int = 0
    target_rir: float = 0.0
    target_rpe: float = 0.0
    target_percent: float = 0.0

    # Load
    raw_load: float = 0.0           # working unit, before rounding
    raw_load_lbs: float = 0.0
    rounded_lbs: float = 0.0        # before overload adjustment
    adjusted_lbs: float = 0.0       # after overload adjustment
    final_weight: float | None = None  # working unit, display precision
    round_increment: float = 0.0
    per_rep_drop_pct: float = 0.0
    set_count: int = 0
