"""Tests for meal scaling and daily macro totals."""

from datetime import date, datetime

from fit_engine.math.nutrition import day_totals, goal_progress, meals_on, scale_food, sum_macros
from fit_engine.models.nutrition import FoodData, MacroTotals, MealDraft, MealEntry


def _food() -> FoodData:
    return FoodData(name="Oats", calories=389, protein=16.9, carbs=66.3, fat=6.9, serving=40)


class TestScaleFood:
    def test_hundred_is_identity_after_rounding(self) -> None:
        assert scale_food(_food(), 100) == MealDraft("Oats", 389, 17, 66, 7)

    def test_scales_linearly(self) -> None:
        # 40 g: 155.6 kcal, 6.76 P, 26.52 C, 2.76 F
        assert scale_food(_food(), 40) == MealDraft("Oats", 156, 7, 27, 3)

    def test_string_quantity(self) -> None:
        assert scale_food(_food(), "250").calories == 973  # 972.5 rounds up

    def test_invalid_quantity_falls_back_to_100(self) -> None:
        for bad in (None, "", "abc", 0, -20):
            assert scale_food(_food(), bad).calories == 389


class TestTotals:
    def _meals(self) -> list[MealEntry]:
        return [
            MealEntry("a", datetime(2026, 3, 2, 8, 0), "Eggs", 300, 20, 2, 22),
            MealEntry("b", datetime(2026, 3, 2, 13, 0), "Rice", 500, 10, 100, 3),
            MealEntry("c", datetime(2026, 3, 3, 8, 0), "Eggs", 300, 20, 2, 22),
        ]

    def test_sum_macros(self) -> None:
        assert sum_macros(self._meals()[:2]) == MacroTotals(800, 30, 102, 25)

    def test_sum_of_nothing_is_zero(self) -> None:
        assert sum_macros([]) == MacroTotals()

    def test_meals_on_day(self) -> None:
        assert [m.id for m in meals_on(self._meals(), date(2026, 3, 2))] == ["a", "b"]

    def test_day_totals(self) -> None:
        assert day_totals(self._meals(), date(2026, 3, 3)).calories == 300


class TestGoalProgress:
    def test_fraction(self) -> None:
        assert goal_progress(1000, 2000) == 0.5

    def test_can_exceed_goal(self) -> None:
        assert goal_progress(2500, 2000) == 1.25

    def test_no_goal(self) -> None:
        assert goal_progress(1000, None) is None
        assert goal_progress(1000, 0) is None
