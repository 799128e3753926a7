"""Tests for mesocycle models, plan slots and category parsing."""

from datetime import datetime

from fit_engine.models.enums import ExerciseCategory, MesocyclePhase
from fit_engine.models.mesocycle import (
    DayConfig,
    DayPlan,
    MesocycleTemplate,
    PlanSlot,
    WeekConfig,
)
from fit_engine.models.workout import Exercise, WorkoutLog, WorkoutSet


def _template(*week_numbers: int) -> MesocycleTemplate:
    return MesocycleTemplate(
        id="t1",
        name="Strength block",
        weeks=tuple(WeekConfig(n, MesocyclePhase.BUILD) for n in week_numbers),
        created_at=datetime(2026, 1, 1),
    )


class TestMesocycleTemplate:
    def test_cycle_length_is_week_count(self) -> None:
        assert _template(1, 2, 3, 4, 5).cycle_length == 5

    def test_week_lookup_by_number(self) -> None:
        template = _template(1, 2, 3)
        assert template.week(2).week_number == 2

    def test_week_lookup_falls_back_to_position(self) -> None:
        # Week numbers out of sync with their position
        template = _template(3, 4, 5)
        assert template.week(1).week_number == 3

    def test_missing_week(self) -> None:
        assert _template(1, 2).week(7) is None


class TestWeekConfig:
    def test_day_lookup(self) -> None:
        days = (DayConfig(0, "Monday", "Upper", ("1", "2")), DayConfig(1, "Tuesday"))
        week = WeekConfig(1, MesocyclePhase.BASE, days=days)
        assert week.day(0).exercise_ids == ("1", "2")
        assert week.day(6) is None


class TestPlanSlots:
    def test_resolved_slot(self) -> None:
        slot = PlanSlot("Squat", Exercise("2", "Squat"))
        assert slot.is_resolved
        assert slot.display_name == "Squat"

    def test_unresolved_slot_shows_unknown(self) -> None:
        slot = PlanSlot("Front Squat")
        assert not slot.is_resolved
        assert slot.display_name == "unknown"

    def test_startable_skips_unresolved(self) -> None:
        squat = Exercise("2", "Squat")
        plan = DayPlan(
            week=1,
            day_index=0,
            phase=MesocyclePhase.BASE,
            slots=(PlanSlot("Squat", squat), PlanSlot("Front Squat")),
        )
        assert plan.has_exercises
        assert plan.startable == (squat,)

    def test_empty_plan(self) -> None:
        plan = DayPlan(week=1, day_index=2, phase=MesocyclePhase.BASE)
        assert not plan.has_exercises
        assert plan.startable == ()


class TestWorkoutLog:
    def test_total_volume(self) -> None:
        log = WorkoutLog(
            id="l1",
            date=datetime(2026, 1, 5),
            exercise_id="2",
            sets=(WorkoutSet(8, 60.0, 2, True), WorkoutSet(6, 62.5, 1, True)),
        )
        assert log.total_volume == 8 * 60.0 + 6 * 62.5


class TestExerciseCategory:
    def test_parse_known(self) -> None:
        assert ExerciseCategory.parse("legs") == ExerciseCategory.LEGS

    def test_parse_unknown_is_custom(self) -> None:
        assert ExerciseCategory.parse("FOREARMS") == ExerciseCategory.CUSTOM
        assert ExerciseCategory.parse(None) == ExerciseCategory.CUSTOM

    def test_phases_are_ordered(self) -> None:
        assert MesocyclePhase.BASE < MesocyclePhase.BUILD < MesocyclePhase.PEAK < MesocyclePhase.DELOAD
