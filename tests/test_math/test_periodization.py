"""Tests for periodization math: calendar weeks, the built-in cycle, template seeding."""

from datetime import date, datetime

import pytest

from fit_engine.math.periodization import (
    BUILT_IN_WEEKS,
    BUILT_IN_WORKOUTS,
    built_in_day_label,
    built_in_day_names,
    built_in_week,
    default_phase_for_week,
    default_template_weeks,
    mesocycle_week,
    phase_counts,
    resize_template_weeks,
    week_of_year,
)
from fit_engine.models.enums import MesocyclePhase


class TestWeekOfYear:
    def test_jan_1_thursday_is_week_1(self) -> None:
        # 2026-01-01 is a Thursday
        assert week_of_year(datetime(2026, 1, 1, 9, 0)) == 1

    def test_following_monday_is_week_2(self) -> None:
        assert week_of_year(datetime(2026, 1, 5, 8, 0)) == 2

    def test_saturday_stays_in_first_week(self) -> None:
        assert week_of_year(datetime(2026, 1, 3, 23, 0)) == 1

    def test_jan_1_sunday_at_midnight_is_week_0(self) -> None:
        # 2023-01-01 is a Sunday: zero offset and zero elapsed time
        assert week_of_year(date(2023, 1, 1)) == 0

    def test_date_and_midnight_datetime_agree(self) -> None:
        assert week_of_year(date(2026, 6, 15)) == week_of_year(datetime(2026, 6, 15))

    def test_late_december(self) -> None:
        assert week_of_year(datetime(2026, 12, 31, 12, 0)) == 53


class TestMesocycleWeek:
    def test_in_range_is_unchanged(self) -> None:
        for week in range(1, 9):
            assert mesocycle_week(week) == week

    def test_multiple_of_8_maps_to_8(self) -> None:
        assert mesocycle_week(8) == 8
        assert mesocycle_week(16) == 8

    def test_zero_maps_to_last_week(self) -> None:
        assert mesocycle_week(0) == 8

    def test_wraps_past_cycle(self) -> None:
        assert mesocycle_week(9) == 1
        assert mesocycle_week(53) == 5

    def test_custom_cycle_length(self) -> None:
        assert mesocycle_week(6, 5) == 1
        assert mesocycle_week(5, 5) == 5
        assert mesocycle_week(0, 6) == 6

    def test_invalid_cycle_length_raises(self) -> None:
        with pytest.raises(ValueError):
            mesocycle_week(3, 0)


class TestBuiltInCycle:
    def test_eight_weeks(self) -> None:
        assert [w.week_number for w in BUILT_IN_WEEKS] == list(range(1, 9))

    def test_phase_shape(self) -> None:
        assert phase_counts(BUILT_IN_WEEKS) == {
            MesocyclePhase.BASE: 2,
            MesocyclePhase.BUILD: 3,
            MesocyclePhase.PEAK: 2,
            MesocyclePhase.DELOAD: 1,
        }

    def test_week_8_is_deload(self) -> None:
        assert built_in_week(8).phase == MesocyclePhase.DELOAD

    def test_week_0_is_deload_not_an_error(self) -> None:
        assert built_in_week(0).week_number == 8
        assert built_in_week(0).phase == MesocyclePhase.DELOAD

    def test_every_week_has_four_exercises(self) -> None:
        assert set(BUILT_IN_WORKOUTS) == set(range(1, 9))
        for names in BUILT_IN_WORKOUTS.values():
            assert len(names) == 4

    def test_monday_and_thursday_take_first_pair(self) -> None:
        assert built_in_day_names(1, 0) == ("Squat", "Bench Press")
        assert built_in_day_names(1, 3) == ("Squat", "Bench Press")

    def test_tuesday_and_friday_take_second_pair(self) -> None:
        assert built_in_day_names(1, 1) == ("Deadlift", "Overhead Press")
        assert built_in_day_names(1, 4) == ("Deadlift", "Overhead Press")

    @pytest.mark.parametrize("day", [2, 5, 6])
    def test_other_days_are_empty(self, day: int) -> None:
        assert built_in_day_names(3, day) == ()
        assert built_in_day_label(day) == "Rest"

    def test_day_labels(self) -> None:
        assert built_in_day_label(0) == "Workout A"
        assert built_in_day_label(4) == "Workout B"


class TestTemplateSeeding:
    def test_default_phases_for_eight_weeks(self) -> None:
        phases = [default_phase_for_week(i) for i in range(8)]
        assert phases == [
            MesocyclePhase.BASE,
            MesocyclePhase.BASE,
            MesocyclePhase.BUILD,
            MesocyclePhase.BUILD,
            MesocyclePhase.BUILD,
            MesocyclePhase.PEAK,
            MesocyclePhase.PEAK,
            MesocyclePhase.DELOAD,
        ]

    def test_weeks_past_eight_are_build(self) -> None:
        assert default_phase_for_week(8) == MesocyclePhase.BUILD

    def test_default_weeks_have_seven_empty_days(self) -> None:
        weeks = default_template_weeks(5)
        assert len(weeks) == 5
        for week in weeks:
            assert len(week.days) == 7
            assert [d.day_index for d in week.days] == list(range(7))
            assert all(not d.exercise_ids and not d.is_rest_day for d in week.days)
        assert weeks[0].days[0].day_name == "Monday"

    def test_default_weeks_rejects_zero(self) -> None:
        with pytest.raises(ValueError):
            default_template_weeks(0)

    def test_resize_truncates(self) -> None:
        weeks = resize_template_weeks(default_template_weeks(8), 6)
        assert [w.week_number for w in weeks] == list(range(1, 7))
        assert weeks[5].phase == MesocyclePhase.PEAK

    def test_resize_extends_with_build_weeks(self) -> None:
        weeks = resize_template_weeks(default_template_weeks(5), 7)
        assert len(weeks) == 7
        assert weeks[5].week_number == 6
        assert weeks[5].phase == MesocyclePhase.BUILD
        assert weeks[6].phase == MesocyclePhase.BUILD
