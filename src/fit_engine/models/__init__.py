"""Data models for the fit engine."""

from fit_engine.models.enums import ExerciseCategory, MesocyclePhase
from fit_engine.models.mesocycle import (
    CompletionResult,
    DayConfig,
    DayPlan,
    MesocycleTemplate,
    PlanSlot,
    SchedulerState,
    WeekConfig,
    WeekDescriptor,
)
from fit_engine.models.nutrition import (
    FoodData,
    MacroTotals,
    MealDraft,
    MealEntry,
    SavedMeal,
    TrendPoint,
    WeightEntry,
)
from fit_engine.models.workout import Exercise, SetTarget, WorkoutLog, WorkoutSet

__all__ = [
    "CompletionResult",
    "DayConfig",
    "DayPlan",
    "Exercise",
    "ExerciseCategory",
    "FoodData",
    "MacroTotals",
    "MealDraft",
    "MealEntry",
    "MesocyclePhase",
    "MesocycleTemplate",
    "PlanSlot",
    "SavedMeal",
    "SchedulerState",
    "SetTarget",
    "TrendPoint",
    "WeekConfig",
    "WeekDescriptor",
    "WeightEntry",
    "WorkoutLog",
    "WorkoutSet",
]
