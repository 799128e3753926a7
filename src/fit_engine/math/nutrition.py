"""Meal macro arithmetic: quantity scaling and per-day totals."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from fit_engine.math.overload import round_half_up
from fit_engine.models.enums import NUTRITION_BASIS_UNITS
from fit_engine.models.nutrition import FoodData, MacroTotals, MealDraft, MealEntry
from fit_engine.validation import parse_positive


def scale_food(food: FoodData, quantity: Any) -> MealDraft:
    """Scale per-100-unit nutrition facts to the entered quantity.

    Each macro is multiplied by ``quantity / 100`` and rounded to a whole
    number. A missing or non-positive quantity falls back to 100 units.
    """
    amount = parse_positive(quantity) or NUTRITION_BASIS_UNITS
    multiplier = amount / NUTRITION_BASIS_UNITS
    return MealDraft(
        name=food.name,
        calories=round_half_up(food.calories * multiplier),
        protein=round_half_up(food.protein * multiplier),
        carbs=round_half_up(food.carbs * multiplier),
        fat=round_half_up(food.fat * multiplier),
    )


def sum_macros(meals: Iterable[MealEntry]) -> MacroTotals:
    total = MacroTotals()
    for meal in meals:
        total = total + MacroTotals(meal.calories, meal.protein, meal.carbs, meal.fat)
    return total


def meals_on(meals: Iterable[MealEntry], day: date) -> list[MealEntry]:
    """Meals logged on the calendar day *day*."""
    return [m for m in meals if m.date.date() == day]


def day_totals(meals: Iterable[MealEntry], day: date) -> MacroTotals:
    return sum_macros(meals_on(meals, day))


def goal_progress(consumed: float, goal: float | None) -> float | None:
    """Fraction of a calorie goal consumed (may exceed 1.0); None without a goal."""
    if goal is None or goal <= 0:
        return None
    return max(0.0, consumed / goal)
