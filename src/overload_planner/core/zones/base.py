"""
Base type for training-zone presets.

A ZonePreset parameterises the progression engine for one training goal:
the rep range a set should land in, the effort (RIR) it should be taken to,
and how many sets to prescribe.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ZonePreset:
    """Rep range, effort target and volume for one goal."""

    rep_low: int          # Low end of the rep range
    rep_high: int         # High end of the rep range
    default_reps: int     # Target reps used for planning
    target_rir: float     # Reps-in-reserve target
    set_count: int        # Sets to prescribe
    rest_duration: str    # Human-readable rest between sets

    def __post_init__(self) -> None:
        """Validate preset data."""
        if self.rep_low < 1:
            raise ValueError("rep_low must be at least 1")
        if not self.rep_low <= self.default_reps <= self.rep_high:
            raise ValueError(
                f"default_reps must lie within [{self.rep_low}, {self.rep_high}], "
                f"got {self.default_reps}"
            )
        if self.target_rir < 0:
            raise ValueError("target_rir must be non-negative")
        if self.set_count < 1:
            raise ValueError("set_count must be at least 1")
