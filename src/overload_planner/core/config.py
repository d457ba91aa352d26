"""
Configuration constants for the load-progression engine.

All adjustable parameters are centralized here for easy tuning.
User overrides are read from ~/.overload-planner/config.yaml by
core/engine/config_loader.py and folded into an EngineSettings.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# UNITS AND ROUNDING
# =============================================================================

KG_TO_LB: Final[float] = 2.2046226218  # 1 kg in pounds
DEFAULT_UNIT: Final[str] = "lbs"
WEIGHT_UNITS: Final[tuple[str, ...]] = ("lbs", "kg")

# Rounding granularity is always expressed in pounds, even for kg users.
DEFAULT_ROUND_INCREMENT: Final[float] = 2.5
DISPLAY_DECIMALS: Final[int] = 2  # prescribed weights are reported to 0.01

# =============================================================================
# RPE / %1RM REFERENCE TABLE
# =============================================================================

RPE_MIN: Final[float] = 6.5
RPE_MAX: Final[float] = 10.0
REPS_MIN: Final[int] = 1
REPS_MAX: Final[int] = 12
FALLBACK_PERCENT: Final[float] = 75.0  # returned when a rep row is missing
BASE_ROW_FALLBACK_PERCENT: Final[float] = 100.0

# =============================================================================
# ESTIMATORS
# =============================================================================

DEFAULT_RIR: Final[float] = 2.0  # assumed when a logged set omits RIR
PER_REP_DROP_PCT: Final[float] = 2.0  # %1RM lost per rep beyond the first
EPLEY_DIVISOR: Final[float] = 30.0

# =============================================================================
# PROGRESSION POLICY
# =============================================================================

DEFAULT_GOAL: Final[str] = "HYPERTROPHY"

# The perceived (RPE-chart) estimate drives the load; the Epley estimate is
# reported alongside it for comparison only.
PREFER_PERCEIVED_BASELINE: Final[bool] = True

# When a set is flagged both top-of-range and below-range, the top-of-range
# increase is applied first.
TOP_OF_RANGE_WINS: Final[bool] = True

PLAN_STATUS: Final[str] = "planned"


@dataclass(frozen=True)
class EngineSettings:
    """Tunable knobs of the progression engine."""

    round_increment: float = DEFAULT_ROUND_INCREMENT  # in pounds
    per_rep_drop_pct: float = PER_REP_DROP_PCT
    prefer_perceived: bool = PREFER_PERCEIVED_BASELINE
    top_of_range_wins: bool = TOP_OF_RANGE_WINS
    default_goal: str = DEFAULT_GOAL

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.round_increment <= 0:
            raise ValueError("round_increment must be positive")
        if self.per_rep_drop_pct < 0:
            raise ValueError("per_rep_drop_pct must be non-negative")


DEFAULT_SETTINGS: Final[EngineSettings] = EngineSettings()
