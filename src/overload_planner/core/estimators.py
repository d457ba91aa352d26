"""
One-rep-max estimators for a single performed set.

Two independent methods, both returning a 1RM in the unit of the input
weight:

  Performance (Epley): reps-in-reserve are counted as reps the lifter
  could still have done:
    1RM = weight × (1 + (reps + RIR) / 30)

  Perceived (RPE chart): RPE = 10 − RIR picks a single-rep percentage from
  the NSCA base row, which is then decayed by a fixed amount per extra rep:
    pct = base_pct − max(0, reps − 1) × drop
    1RM = weight / pct × 100
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from .config import EPLEY_DIVISOR, PER_REP_DROP_PCT
from .rpe_table import NSCA_BASE_ROW, base_row_percent, lookup_percent

logger = logging.getLogger(__name__)


def rpe_from_rir(rir: float) -> float:
    """RPE implied by reps-in-reserve (unclamped)."""
    return 10.0 - rir


def e1rm_performance(weight: float, reps: int, rir: float) -> float:
    """
    Epley 1RM with reps-in-reserve added to the performed reps.

    Not clamped.  A single rep at RIR 0 still returns weight × 31/30.
    """
    return weight * (1 + (reps + rir) / EPLEY_DIVISOR)


def perceived_percent(
    reps: int,
    rir: float,
    base_row: Mapping[float, float] = NSCA_BASE_ROW,
    per_rep_drop_pct: float = PER_REP_DROP_PCT,
) -> float:
    """
    %1RM the set is believed to represent, after per-rep decay.

    May be zero or negative for very long sets; callers get the raw value.
    """
    _, base_pct = base_row_percent(rpe_from_rir(rir), base_row)
    additional_reps = max(0, reps - 1)
    return base_pct - additional_reps * per_rep_drop_pct


def e1rm_perceived(
    weight: float,
    reps: int,
    rir: float,
    base_row: Mapping[float, float] = NSCA_BASE_ROW,
    per_rep_drop_pct: float = PER_REP_DROP_PCT,
) -> float:
    """
    RPE-chart 1RM estimate.

    Args:
        weight: Load lifted
        reps: Reps performed
        rir: Reps in reserve reported for the set
        base_row: Single-rep RPE → %1RM chart (default: NSCA)
        per_rep_drop_pct: %1RM subtracted per rep beyond the first

    Returns:
        Estimated 1RM.  The decayed percentage has no lower bound: a negative
        percentage gives a negative estimate and zero gives a signed infinity.
    """
    adjusted_pct = perceived_percent(reps, rir, base_row, per_rep_drop_pct)
    if adjusted_pct <= 0:
        logger.warning(
            "Per-rep decay drove %%1RM to %.2f (reps=%s, rir=%s); "
            "perceived 1RM is not meaningful",
            adjusted_pct,
            reps,
            rir,
        )
    if adjusted_pct == 0:
        return math.copysign(math.inf, weight)
    return weight / adjusted_pct * 100


def percent_from_table(reps: float, rpe: float) -> float:
    """%1RM for a target (reps, RPE), read from the full RPE chart."""
    return lookup_percent(reps, rpe)
