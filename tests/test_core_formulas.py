"""
Unit tests for the core formulas: the RPE chart, the two 1RM estimators,
unit conversion and rounding, and the zone rules.

Expected values are computed by hand from the chart and formulas; the
arithmetic is shown next to each assertion.
"""

import math

import pytest

from overload_planner.core.config import KG_TO_LB
from overload_planner.core.estimators import (
    e1rm_perceived,
    e1rm_performance,
    perceived_percent,
    percent_from_table,
    rpe_from_rir,
)
from overload_planner.core.rpe_table import (
    NSCA_BASE_ROW,
    RPE_TABLE,
    base_row_percent,
    clamp_reps,
    clamp_rpe,
    lookup_percent,
    nearest_rpe,
)
from overload_planner.core.units import (
    from_lbs,
    round_half_away,
    to_lbs,
    validate_unit,
)
from overload_planner.core.zones import (
    ZONE_REGISTRY,
    ZonePreset,
    clamp_to_zone_reps,
    get_zone,
    is_below_range,
    is_in_top_of_range,
)
from overload_planner.core.zones.loader import load_zone_presets, zone_from_dict
from overload_planner.core.zones.presets import DEFAULT_ZONE_PRESETS


# =============================================================================
# RPE chart
# =============================================================================


class TestRpeTable:
    def test_chart_shape(self):
        assert sorted(RPE_TABLE) == list(range(1, 13))
        for row in RPE_TABLE.values():
            assert sorted(row) == [6.5, 7.0, 7.5, 8.0, 8.5, 9.0, 9.5, 10.0]

    def test_rows_decrease_with_reps_and_with_lower_rpe(self):
        for reps in range(1, 12):
            for rpe in RPE_TABLE[reps]:
                assert RPE_TABLE[reps + 1][rpe] < RPE_TABLE[reps][rpe]
        for row in RPE_TABLE.values():
            values = [row[k] for k in sorted(row, reverse=True)]
            assert values == sorted(values, reverse=True)

    def test_base_row_matches_single_rep_row(self):
        assert dict(NSCA_BASE_ROW) == dict(RPE_TABLE[1])

    def test_chart_is_read_only(self):
        with pytest.raises(TypeError):
            RPE_TABLE[5][8.0] = 50.0  # type: ignore[index]

    @pytest.mark.parametrize(
        "reps,rpe,expected",
        [
            (5, 8, 81.1),
            (8, 9, 76.2),
            (10, 7, 65.3),
            (12, 7, 59.9),
            (5, 10, 86.3),
            (8, 8, 73.9),
            (1, 10, 100.0),
        ],
    )
    def test_exact_lookups(self, reps, rpe, expected):
        assert lookup_percent(reps, rpe) == expected

    def test_every_cell_is_returned_unchanged(self):
        for reps, row in RPE_TABLE.items():
            for rpe, pct in row.items():
                assert lookup_percent(reps, rpe) == pct

    def test_rpe_above_chart_clamps_to_10(self):
        assert lookup_percent(5, 11) == 86.3

    def test_rpe_below_chart_clamps_to_6_5(self):
        assert lookup_percent(5, 5) == 77.4

    def test_reps_clamp_to_chart_rows(self):
        assert lookup_percent(0, 10) == 100.0
        assert lookup_percent(20, 10) == 68.0

    def test_fractional_reps_round_half_up(self):
        # 2.5 → 3, 2.4 → 2
        assert lookup_percent(2.5, 10) == 92.2
        assert lookup_percent(2.4, 10) == 95.5

    def test_equidistant_rpe_picks_higher_key(self):
        # 8.25 is 0.25 from both 8.5 and 8.0
        assert lookup_percent(5, 8.25) == 82.4
        # 7.75 is 0.25 from both 8.0 and 7.5
        assert lookup_percent(5, 7.75) == 81.1

    def test_missing_row_falls_back_to_75(self):
        assert lookup_percent(5, 8, table={}) == 75.0
        assert lookup_percent(5, 8, table={1: {10.0: 100.0}}) == 75.0

    def test_nearest_rpe_rejects_empty_row(self):
        with pytest.raises(ValueError):
            nearest_rpe(8.0, [])

    def test_clamp_helpers(self):
        assert clamp_rpe(12) == 10.0
        assert clamp_rpe(3) == 6.5
        assert clamp_rpe(8.5) == 8.5
        assert clamp_reps(0.4) == 1
        assert clamp_reps(6.5) == 7
        assert clamp_reps(40) == 12


class TestBaseRow:
    def test_exact_key(self):
        assert base_row_percent(8) == (8.0, 92.2)

    def test_clamped_high(self):
        assert base_row_percent(11) == (10.0, 100.0)

    def test_tie_goes_to_higher_rpe(self):
        assert base_row_percent(7.75) == (8.0, 92.2)

    def test_empty_row_falls_back_to_100(self):
        assert base_row_percent(5, {}) == (6.5, 100.0)


# =============================================================================
# Estimators
# =============================================================================


class TestPerformanceEstimate:
    def test_rir_counts_as_reps(self):
        # 185 × (1 + 7/30) = 228.1667
        assert e1rm_performance(185, 5, 2) == pytest.approx(228.1667, abs=1e-3)

    def test_single_rep_to_failure_is_not_the_weight(self):
        # 100 × 31/30
        assert e1rm_performance(100, 1, 0) == pytest.approx(103.3333, abs=1e-3)

    def test_squat_example(self):
        # 225 × (1 + 11/30) = 307.5
        assert e1rm_performance(225, 8, 3) == pytest.approx(307.5)

    def test_monotone_in_reps_and_rir(self):
        assert e1rm_performance(100, 6, 2) > e1rm_performance(100, 5, 2)
        assert e1rm_performance(100, 5, 3) > e1rm_performance(100, 5, 2)


class TestPerceivedEstimate:
    def test_rpe_from_rir(self):
        assert rpe_from_rir(2) == 8.0
        assert rpe_from_rir(0) == 10.0
        assert rpe_from_rir(5) == 5.0

    def test_bench_example(self):
        # RPE 8 → 92.2, 4 extra reps → 84.2%; 185 / 0.842
        assert perceived_percent(5, 2) == pytest.approx(84.2)
        assert e1rm_perceived(185, 5, 2) == pytest.approx(219.715, abs=1e-3)

    def test_squat_example(self):
        # RPE 7 → 89.2, 7 extra reps → 75.2%; 225 / 0.752
        assert e1rm_perceived(225, 8, 3) == pytest.approx(299.2021, abs=1e-3)

    def test_single_rep_to_failure_is_the_weight(self):
        assert e1rm_perceived(100, 1, 0) == pytest.approx(100.0)

    def test_high_rir_clamps_to_lowest_rpe(self):
        # RIR 4 → RPE 6 → clamped to 6.5 → 87.8%
        assert e1rm_perceived(100, 1, 4) == pytest.approx(100 / 0.878)

    def test_custom_drop(self):
        # 100 − 2 × 5 = 90%
        assert e1rm_perceived(100, 3, 0, per_rep_drop_pct=5.0) == pytest.approx(111.1111, abs=1e-3)

    def test_custom_base_row(self):
        assert e1rm_perceived(100, 1, 0, base_row={10.0: 50.0}) == pytest.approx(200.0)

    def test_long_set_decays_towards_zero(self):
        # 100 − 49 × 2 = 2%
        assert e1rm_perceived(100, 50, 0) == pytest.approx(5000.0)

    def test_zero_percent_gives_infinity(self, caplog):
        # 100 − 50 × 2 = 0%
        with caplog.at_level("WARNING", logger="overload_planner"):
            result = e1rm_perceived(100, 51, 0)
        assert math.isinf(result) and result > 0
        assert "not meaningful" in caplog.text

    def test_negative_percent_gives_negative_estimate(self):
        # 100 − 59 × 2 = −18%
        assert e1rm_perceived(100, 60, 0) == pytest.approx(-555.5556, abs=1e-3)

    def test_percent_from_table(self):
        assert percent_from_table(8, 8) == 73.9
        assert percent_from_table(3, 8) == 86.4


# =============================================================================
# Units and rounding
# =============================================================================


class TestUnits:
    def test_validate_unit(self):
        assert validate_unit("kg") == "kg"
        with pytest.raises(ValueError):
            validate_unit("stone")

    def test_conversion_round_trip(self):
        assert to_lbs(100, "kg") == pytest.approx(220.46226218)
        assert from_lbs(220.46226218, "kg") == pytest.approx(100.0)
        assert to_lbs(100, "lbs") == 100

    def test_round_to_increment(self):
        assert round_half_away(162.37) == 162.5
        assert round_half_away(3.74) == 2.5
        assert round_half_away(3.75) == 5.0

    def test_halves_move_away_from_zero(self):
        assert round_half_away(1.25) == 2.5
        assert round_half_away(-1.25) == -2.5
        # Banker's rounding would give 5.0 here
        assert round_half_away(6.25) == 7.5

    def test_custom_increment(self):
        assert round_half_away(162.37, 5.0) == 160.0

    def test_non_finite_values_pass_through(self):
        assert round_half_away(math.inf) == math.inf
        assert round_half_away(-math.inf) == -math.inf
        assert math.isnan(round_half_away(math.nan))

    def test_kg_rounds_in_pounds(self):
        # 94.5013 kg = 208.34 lbs → 207.5 lbs → 94.12 kg
        result = from_lbs(round_half_away(to_lbs(94.5013, "kg")), "kg")
        assert result == pytest.approx(207.5 / KG_TO_LB)
        assert round(result, 2) == 94.12
        # Rounding the kg value directly would have given 95.0
        assert round_half_away(94.5013) == 95.0


# =============================================================================
# Zones
# =============================================================================


class TestZonePresets:
    def test_built_in_presets(self):
        h = DEFAULT_ZONE_PRESETS["HYPERTROPHY"]
        assert (h.rep_low, h.rep_high, h.default_reps, h.target_rir, h.set_count) == (6, 12, 8, 2, 3)
        s = DEFAULT_ZONE_PRESETS["STRENGTH"]
        assert (s.rep_low, s.rep_high, s.default_reps) == (1, 5, 3)
        assert s.rest_duration == "2 minutes 30 seconds"
        e = DEFAULT_ZONE_PRESETS["ENDURANCE"]
        assert (e.rep_low, e.rep_high, e.default_reps) == (12, 20, 15)
        assert e.rest_duration == "45 seconds"

    def test_registry_without_user_config_matches_defaults(self):
        assert dict(ZONE_REGISTRY) == dict(DEFAULT_ZONE_PRESETS)

    def test_unknown_goal(self):
        with pytest.raises(ValueError, match="POWER"):
            get_zone("POWER")

    def test_explicit_zone_table(self):
        zones = load_zone_presets({"HYPERTROPHY": {"set_count": 5}})
        assert get_zone("HYPERTROPHY", zones).set_count == 5
        assert get_zone("HYPERTROPHY").set_count == 3
        with pytest.raises(ValueError, match="STRENGTH"):
            get_zone("STRENGTH", {"HYPERTROPHY": zones["HYPERTROPHY"]})

    def test_default_reps_outside_range_rejected(self):
        with pytest.raises(ValueError):
            ZonePreset(6, 12, 13, 2, 3, "1 minute")

    def test_set_count_must_be_positive(self):
        with pytest.raises(ValueError):
            ZonePreset(6, 12, 8, 2, 0, "1 minute")


class TestZoneRules:
    def test_clamp_to_zone_reps(self):
        assert clamp_to_zone_reps("HYPERTROPHY") == 8
        assert clamp_to_zone_reps("HYPERTROPHY", 0) == 8
        assert clamp_to_zone_reps("HYPERTROPHY", 30) == 12
        assert clamp_to_zone_reps("HYPERTROPHY", 3) == 6
        assert clamp_to_zone_reps("HYPERTROPHY", 10) == 10
        assert clamp_to_zone_reps("STRENGTH") == 3

    def test_top_of_range(self):
        assert is_in_top_of_range(12, 2, "HYPERTROPHY")
        assert is_in_top_of_range(15, 0, "HYPERTROPHY")
        assert not is_in_top_of_range(12, 3, "HYPERTROPHY")
        assert not is_in_top_of_range(11, 2, "HYPERTROPHY")
        assert is_in_top_of_range(5, 2, "STRENGTH")

    def test_below_range(self):
        assert is_below_range(5, 2, "HYPERTROPHY")  # short of the floor
        assert is_below_range(8, 4, "HYPERTROPHY")  # 4 > 2 + 1
        assert not is_below_range(8, 3, "HYPERTROPHY")
        assert not is_below_range(12, 2, "HYPERTROPHY")
        assert is_below_range(10, 2, "ENDURANCE")

    def test_explicit_zone_overrides_registry(self):
        zone = ZonePreset(3, 6, 4, 1, 4, "2 minutes")
        assert is_in_top_of_range(6, 1, "HYPERTROPHY", zone)
        assert clamp_to_zone_reps("HYPERTROPHY", 10, zone) == 6


class TestZoneLoader:
    def test_partial_override_merges_over_built_in(self):
        zones = load_zone_presets({"STRENGTH": {"set_count": 5}})
        assert zones["STRENGTH"].set_count == 5
        assert zones["STRENGTH"].rep_high == 5
        assert zones["HYPERTROPHY"] == DEFAULT_ZONE_PRESETS["HYPERTROPHY"]
        assert DEFAULT_ZONE_PRESETS["STRENGTH"].set_count == 3

    def test_unknown_zone_is_skipped(self):
        with pytest.warns(UserWarning, match="POWER"):
            zones = load_zone_presets({"POWER": {"set_count": 5}})
        assert "POWER" not in zones

    def test_invalid_override_keeps_built_in(self):
        with pytest.warns(UserWarning, match="HYPERTROPHY"):
            zones = load_zone_presets({"HYPERTROPHY": {"default_reps": 30}})
        assert zones["HYPERTROPHY"] == DEFAULT_ZONE_PRESETS["HYPERTROPHY"]

    def test_non_mapping_section_is_ignored(self):
        with pytest.warns(UserWarning):
            zones = load_zone_presets(["STRENGTH"])  # type: ignore[arg-type]
        assert zones == dict(DEFAULT_ZONE_PRESETS)

    def test_zone_from_dict_field_checks(self):
        with pytest.raises(ValueError, match="missing"):
            zone_from_dict({"rep_low": 1})
        full = {
            "rep_low": 1,
            "rep_high": 5,
            "default_reps": 3,
            "target_rir": 2,
            "set_count": 3,
            "rest_duration": "2 minutes",
            "tempo": "3-1-1",
        }
        with pytest.raises(ValueError, match="unknown"):
            zone_from_dict(full)
