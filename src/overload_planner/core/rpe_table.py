"""
RPE → %1RM reference table.

Two read-only charts:

  RPE_TABLE: reps (1–12) × RPE (6.5–10, step 0.5) → %1RM.
    Used to turn a target (reps, RPE) into a fraction of the baseline 1RM.

  NSCA_BASE_ROW: RPE → %1RM for a single repetition.
    Used by the perceived-effort 1RM estimator, which applies its own
    per-rep decay instead of reading the full table.

Lookups never interpolate.  Inputs are clamped to the chart's domain and the
nearest RPE key wins; when two keys are equally close the higher RPE is kept.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .config import (
    BASE_ROW_FALLBACK_PERCENT,
    FALLBACK_PERCENT,
    REPS_MAX,
    REPS_MIN,
    RPE_MAX,
    RPE_MIN,
)

# ---------------------------------------------------------------------------
# NSCA base row, 1 rep at each RPE
# ---------------------------------------------------------------------------
NSCA_BASE_ROW: Mapping[float, float] = MappingProxyType({
    10.0: 100.0,
    9.5: 97.8,
    9.0: 95.5,
    8.5: 93.9,
    8.0: 92.2,
    7.5: 90.7,
    7.0: 89.2,
    6.5: 87.8,
})

# ---------------------------------------------------------------------------
# Full chart, one row per rep count, columns RPE 10 … 6.5
# ---------------------------------------------------------------------------
_RPE_COLUMNS: tuple[float, ...] = (10.0, 9.5, 9.0, 8.5, 8.0, 7.5, 7.0, 6.5)

_RAW_ROWS: dict[int, tuple[float, ...]] = {
    1:  (100.0, 97.8, 95.5, 93.9, 92.2, 90.7, 89.2, 87.8),
    2:  (95.5,  93.9, 92.2, 90.7, 89.2, 87.8, 86.4, 85.0),
    3:  (92.2,  90.7, 89.2, 87.8, 86.4, 85.0, 83.7, 82.4),
    4:  (89.2,  87.8, 86.4, 85.0, 83.7, 82.4, 81.1, 79.8),
    5:  (86.3,  85.0, 83.7, 82.4, 81.1, 79.9, 78.6, 77.4),
    6:  (83.7,  82.4, 81.1, 79.9, 78.6, 77.4, 76.2, 75.1),
    7:  (81.1,  79.9, 78.6, 77.4, 76.2, 75.1, 73.9, 72.3),
    8:  (78.6,  77.4, 76.2, 75.1, 73.9, 72.3, 70.7, 69.4),
    9:  (76.2,  75.1, 73.9, 72.3, 70.7, 69.4, 68.0, 66.7),
    10: (73.9,  72.3, 70.7, 69.4, 68.0, 66.7, 65.3, 64.0),
    11: (70.7,  69.4, 68.0, 66.7, 65.3, 64.0, 62.6, 61.3),
    12: (68.0,  66.7, 65.3, 64.0, 62.6, 61.3, 59.9, 58.6),
}

RPE_TABLE: Mapping[int, Mapping[float, float]] = MappingProxyType({
    reps: MappingProxyType(dict(zip(_RPE_COLUMNS, row)))
    for reps, row in _RAW_ROWS.items()
})


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------

def clamp_rpe(rpe: float) -> float:
    """Clamp an RPE value to the chart's [6.5, 10] domain."""
    return max(RPE_MIN, min(RPE_MAX, rpe))


def clamp_reps(reps: float) -> int:
    """
    Round reps to the nearest integer (halves go up) and clamp to [1, 12].
    """
    return max(REPS_MIN, min(REPS_MAX, math.floor(reps + 0.5)))


def nearest_rpe(rpe: float, keys: Iterable[float]) -> float:
    """
    Return the key closest to ``rpe``.

    Keys are scanned from highest to lowest and only a strictly smaller
    distance replaces the current pick, so ties resolve to the higher RPE.
    """
    ordered = sorted(keys, reverse=True)
    if not ordered:
        raise ValueError("cannot pick a nearest RPE from an empty row")
    closest = ordered[0]
    min_diff = abs(rpe - closest)
    for key in ordered:
        diff = abs(rpe - key)
        if diff < min_diff:
            min_diff = diff
            closest = key
    return closest


def lookup_percent(
    reps: float,
    rpe: float,
    table: Mapping[int, Mapping[float, float]] = RPE_TABLE,
) -> float:
    """
    %1RM for ``reps`` performed at ``rpe``.

    Args:
        reps: Rep count (rounded and clamped to 1–12)
        rpe: Rate of perceived exertion (clamped to 6.5–10)
        table: Chart to read (default: RPE_TABLE)

    Returns:
        Stored percentage (0–100].  FALLBACK_PERCENT if the rep row is absent.
    """
    row = table.get(clamp_reps(reps))
    if not row:
        return FALLBACK_PERCENT
    key = nearest_rpe(clamp_rpe(rpe), row.keys())
    return row.get(key, FALLBACK_PERCENT)


def base_row_percent(
    rpe: float,
    base_row: Mapping[float, float] = NSCA_BASE_ROW,
) -> tuple[float, float]:
    """
    Single-rep %1RM at ``rpe`` from the base row.

    Returns:
        (matched RPE key, percentage).  The percentage falls back to 100
        if the key is somehow missing from the row.
    """
    clamped = clamp_rpe(rpe)
    if not base_row:
        return clamped, BASE_ROW_FALLBACK_PERCENT
    key = nearest_rpe(clamped, base_row.keys())
    return key, base_row.get(key, BASE_ROW_FALLBACK_PERCENT)
