"""Body-weight and nutrition records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class WeightEntry:
    id: str
    date: datetime
    weight: float  # kg


@dataclass(frozen=True)
class MealEntry:
    """A logged meal. Append-only, deletable individually."""

    id: str
    date: datetime
    name: str
    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class SavedMeal:
    """A meal preset offered for one-tap re-entry, unique by name."""

    id: str
    name: str
    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class FoodData:
    """Nutrition facts per 100 g / 100 ml from the lookup service."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    serving: float = 100.0


@dataclass(frozen=True)
class MealDraft:
    """A meal ready to log: name plus macros for the entered quantity."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MacroTotals:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def __add__(self, other: MacroTotals) -> MacroTotals:
        return MacroTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


@dataclass(frozen=True)
class TrendPoint:
    """Aggregated value for the period starting at ``period_start``."""

    period_start: date
    value: float
