"""Built-in exercise catalogue and lookups over an exercise list."""

from __future__ import annotations

from collections.abc import Iterable

from fit_engine.models.enums import UNKNOWN_EXERCISE_NAME, ExerciseCategory
from fit_engine.models.workout import Exercise

DEFAULT_EXERCISES: tuple[Exercise, ...] = (
    Exercise("1", "Bench Press", ExerciseCategory.CHEST),
    Exercise("2", "Squat", ExerciseCategory.LEGS),
    Exercise("3", "Deadlift", ExerciseCategory.BACK),
    Exercise("4", "Overhead Press", ExerciseCategory.SHOULDERS),
    Exercise("5", "Barbell Row", ExerciseCategory.BACK),
    Exercise("6", "Pull-ups", ExerciseCategory.BACK),
    Exercise("7", "Dumbbell Curl", ExerciseCategory.BICEPS),
    Exercise("8", "Tricep Pushdown", ExerciseCategory.TRICEPS),
    Exercise("9", "Leg Press", ExerciseCategory.LEGS),
    Exercise("10", "Lat Pulldown", ExerciseCategory.BACK),
    Exercise("11", "Incline Bench Press", ExerciseCategory.CHEST),
    Exercise("12", "Romanian Deadlift", ExerciseCategory.LEGS),
)


def find_by_id(exercises: Iterable[Exercise], exercise_id: str) -> Exercise | None:
    for exercise in exercises:
        if exercise.id == exercise_id:
            return exercise
    return None


def find_by_name(exercises: Iterable[Exercise], name: str) -> Exercise | None:
    """Case-insensitive exact name match (surrounding whitespace ignored)."""
    wanted = name.strip().casefold()
    for exercise in exercises:
        if exercise.name.strip().casefold() == wanted:
            return exercise
    return None


def display_name(exercises: Iterable[Exercise], exercise_id: str) -> str:
    """Name of *exercise_id*, or the unknown placeholder for orphaned references."""
    exercise = find_by_id(exercises, exercise_id)
    return exercise.name if exercise is not None else UNKNOWN_EXERCISE_NAME


def group_by_category(
    exercises: Iterable[Exercise],
) -> dict[ExerciseCategory, list[Exercise]]:
    """Exercises grouped by category, categories in enum order."""
    pool = list(exercises)
    groups: dict[ExerciseCategory, list[Exercise]] = {}
    for category in ExerciseCategory:
        members = [e for e in pool if e.category == category]
        if members:
            groups[category] = members
    return groups
