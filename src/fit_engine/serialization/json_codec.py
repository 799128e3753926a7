"""JSON wire format for persisted entities.

Field names are camelCase and timestamps ISO-8601 strings, matching the
blobs the browser build of the tracker kept in local storage, so an
exported store can be loaded unchanged.

All functions are pure (no I/O). Decoders raise DecodeError on anything
that does not have the expected shape.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, TypeVar

from fit_engine.models.enums import ExerciseCategory, MesocyclePhase
from fit_engine.models.mesocycle import DayConfig, MesocycleTemplate, WeekConfig
from fit_engine.models.nutrition import MealEntry, SavedMeal, WeightEntry
from fit_engine.models.workout import Exercise, WorkoutLog, WorkoutSet

T = TypeVar("T")


class DecodeError(ValueError):
    """A stored blob is not valid JSON or does not match the entity shape."""


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def encode_datetime(value: datetime) -> str:
    return value.isoformat()


def decode_datetime(value: Any) -> datetime:
    """Parse an ISO timestamp; UTC ``Z`` stamps are converted to naive local time."""
    if not isinstance(value, str):
        raise DecodeError(f"Expected ISO timestamp string, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"Invalid timestamp {value!r}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected object, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"Missing field {key!r}")
    return data[key]


def _number(data: dict, key: str, default: float | None = None) -> float:
    value = data.get(key, default) if default is not None else _require(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Field {key!r} must be a number, got {value!r}")
    return float(value)


def _integer(data: dict, key: str) -> int:
    return int(_number(data, key))


def _list(value: Any) -> list:
    if not isinstance(value, list):
        raise DecodeError(f"Expected array, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Exercises and workouts
# ---------------------------------------------------------------------------


def encode_exercise(exercise: Exercise) -> dict:
    return {
        "id": exercise.id,
        "name": exercise.name,
        "category": exercise.category.value,
    }


def decode_exercise(data: Any) -> Exercise:
    return Exercise(
        id=str(_require(data, "id")),
        name=str(_require(data, "name")),
        category=ExerciseCategory.parse(data.get("category")),
    )


def encode_set(workout_set: WorkoutSet) -> dict:
    result = {
        "reps": workout_set.reps,
        "weight": workout_set.weight,
        "rir": workout_set.rir,
        "completed": workout_set.completed,
    }
    if workout_set.note:
        result["note"] = workout_set.note
    return result


def decode_set(data: Any) -> WorkoutSet:
    note = data.get("note") if isinstance(data, dict) else None
    return WorkoutSet(
        reps=_integer(data, "reps"),
        weight=_number(data, "weight"),
        rir=_integer(data, "rir"),
        completed=bool(data.get("completed", False)),
        note=str(note) if note else None,
    )


def encode_log(log: WorkoutLog) -> dict:
    return {
        "id": log.id,
        "date": encode_datetime(log.date),
        "exerciseId": log.exercise_id,
        "sets": [encode_set(s) for s in log.sets],
    }


def decode_log(data: Any) -> WorkoutLog:
    return WorkoutLog(
        id=str(_require(data, "id")),
        date=decode_datetime(_require(data, "date")),
        exercise_id=str(_require(data, "exerciseId")),
        sets=tuple(decode_set(s) for s in _list(_require(data, "sets"))),
    )


# ---------------------------------------------------------------------------
# Body weight and nutrition
# ---------------------------------------------------------------------------


def encode_weight(entry: WeightEntry) -> dict:
    return {"id": entry.id, "date": encode_datetime(entry.date), "weight": entry.weight}


def decode_weight(data: Any) -> WeightEntry:
    return WeightEntry(
        id=str(_require(data, "id")),
        date=decode_datetime(_require(data, "date")),
        weight=_number(data, "weight"),
    )


def encode_meal(meal: MealEntry) -> dict:
    return {
        "id": meal.id,
        "date": encode_datetime(meal.date),
        "name": meal.name,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fat": meal.fat,
    }


def decode_meal(data: Any) -> MealEntry:
    return MealEntry(
        id=str(_require(data, "id")),
        date=decode_datetime(_require(data, "date")),
        name=str(data.get("name", "")),
        calories=_number(data, "calories"),
        protein=_number(data, "protein", 0.0),
        carbs=_number(data, "carbs", 0.0),
        fat=_number(data, "fat", 0.0),
    )


def encode_saved_meal(meal: SavedMeal) -> dict:
    return {
        "id": meal.id,
        "name": meal.name,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fat": meal.fat,
    }


def decode_saved_meal(data: Any) -> SavedMeal:
    return SavedMeal(
        id=str(_require(data, "id")),
        name=str(_require(data, "name")),
        calories=_number(data, "calories"),
        protein=_number(data, "protein", 0.0),
        carbs=_number(data, "carbs", 0.0),
        fat=_number(data, "fat", 0.0),
    )


# ---------------------------------------------------------------------------
# Mesocycle templates
# ---------------------------------------------------------------------------


def encode_day(day: DayConfig) -> dict:
    return {
        "dayIndex": day.day_index,
        "dayName": day.day_name,
        "workout": day.workout,
        "exerciseIds": list(day.exercise_ids),
        "isRestDay": day.is_rest_day,
    }


def decode_day(data: Any) -> DayConfig:
    return DayConfig(
        day_index=_integer(data, "dayIndex"),
        day_name=str(data.get("dayName", "")),
        workout=str(data.get("workout", "")),
        exercise_ids=tuple(str(i) for i in _list(data.get("exerciseIds", []))),
        is_rest_day=bool(data.get("isRestDay", False)),
    )


def decode_phase(value: Any) -> MesocyclePhase:
    try:
        return MesocyclePhase[str(value).upper()]
    except KeyError as exc:
        raise DecodeError(f"Unknown phase {value!r}") from exc


def encode_week(week: WeekConfig) -> dict:
    return {
        "weekNumber": week.week_number,
        "phase": week.phase.name,
        "description": week.description,
        "days": [encode_day(d) for d in week.days],
    }


def decode_week(data: Any) -> WeekConfig:
    return WeekConfig(
        week_number=_integer(data, "weekNumber"),
        phase=decode_phase(_require(data, "phase")),
        description=str(data.get("description", "")),
        days=tuple(decode_day(d) for d in _list(data.get("days", []))),
    )


def encode_template(template: MesocycleTemplate) -> dict:
    return {
        "id": template.id,
        "name": template.name,
        "description": template.description,
        "weeks": [encode_week(w) for w in template.weeks],
        "createdAt": encode_datetime(template.created_at) if template.created_at else None,
    }


def decode_template(data: Any) -> MesocycleTemplate:
    created_at = data.get("createdAt") if isinstance(data, dict) else None
    return MesocycleTemplate(
        id=str(_require(data, "id")),
        name=str(_require(data, "name")),
        description=str(data.get("description", "")),
        weeks=tuple(decode_week(w) for w in _list(_require(data, "weeks"))),
        created_at=decode_datetime(created_at) if created_at else None,
    )


# ---------------------------------------------------------------------------
# Collections and text
# ---------------------------------------------------------------------------


def encode_list(items: Iterable[T], encoder: Callable[[T], dict]) -> list[dict]:
    return [encoder(item) for item in items]


def decode_list(data: Any, decoder: Callable[[Any], T]) -> list[T]:
    """Decode every element; one malformed element rejects the whole list."""
    try:
        return [decoder(item) for item in _list(data)]
    except (AttributeError, TypeError) as exc:
        raise DecodeError(str(exc)) from exc


def dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON: {exc}") from exc
