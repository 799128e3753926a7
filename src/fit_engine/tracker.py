"""FitTracker — the session context that owns all tracker state.

Collections are loaded once from a KeyValueStore, replaced wholesale on
every mutation and persisted immediately after each replace. Components
that need the exercise list or the history receive it from here; nothing
else holds a shared mutable copy.

Invalid user input (blank names, non-numeric or non-positive amounts) is
dropped: the operation returns None and nothing is stored.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any
from uuid import uuid4

from fit_engine.catalog import DEFAULT_EXERCISES, display_name, find_by_id, group_by_category
from fit_engine.math import aggregates
from fit_engine.math.nutrition import day_totals, goal_progress, scale_food
from fit_engine.math.overload import initial_sets, last_log_for, target_for_exercise
from fit_engine.models.enums import MAX_RIR, ExerciseCategory
from fit_engine.models.mesocycle import (
    CompletionResult,
    DayPlan,
    MesocycleTemplate,
    SchedulerState,
    WeekConfig,
    WeekDescriptor,
)
from fit_engine.models.nutrition import (
    FoodData,
    MacroTotals,
    MealEntry,
    SavedMeal,
    TrendPoint,
    WeightEntry,
)
from fit_engine.models.workout import Exercise, SetTarget, WorkoutLog, WorkoutSet
from fit_engine.scheduler import MesocycleScheduler
from fit_engine.serialization import json_codec as codec
from fit_engine.storage import keys
from fit_engine.storage.store import KeyValueStore
from fit_engine.validation import parse_non_negative, parse_number, parse_positive

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scalar decoders for the non-collection keys
# ---------------------------------------------------------------------------


def _decode_optional_number(data: Any) -> float | None:
    if data is None:
        return None
    if isinstance(data, bool) or not isinstance(data, (int, float)):
        raise codec.DecodeError(f"Expected number, got {data!r}")
    return float(data)


def _decode_optional_id(data: Any) -> str | None:
    if data is None:
        return None
    if not isinstance(data, str):
        raise codec.DecodeError(f"Expected id string, got {data!r}")
    return data


def _decode_flag(data: Any) -> bool:
    if not isinstance(data, bool):
        raise codec.DecodeError(f"Expected boolean, got {data!r}")
    return data


def _decode_weeks(data: Any) -> frozenset[int]:
    if not isinstance(data, list) or not all(
        isinstance(w, int) and not isinstance(w, bool) for w in data
    ):
        raise codec.DecodeError(f"Expected list of week numbers, got {data!r}")
    return frozenset(data)


class FitTracker:
    """Single-user tracker session over a persistent key-value store.

    Usage:
        tracker = FitTracker(JsonFileStore("~/.fit_tracker/store.json"))
        sets = tracker.start_workout(exercise_id)
        tracker.update_set(0, completed=True, rir=1)
        log = tracker.complete_workout()
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._new_id = id_factory or (lambda: uuid4().hex)

        self._active_exercise: Exercise | None = None
        self._current_sets: tuple[WorkoutSet, ...] = ()
        self._last_completion = CompletionResult()
        self._load()

    # ------------------------------------------------------------------
    # Loading / persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        store = self._store
        self._workouts: tuple[WorkoutLog, ...] = tuple(
            store.load(keys.WORKOUTS, lambda d: codec.decode_list(d, codec.decode_log), [])
        )
        self._weights: tuple[WeightEntry, ...] = tuple(
            store.load(keys.WEIGHT, lambda d: codec.decode_list(d, codec.decode_weight), [])
        )
        self._meals: tuple[MealEntry, ...] = tuple(
            store.load(keys.MEALS, lambda d: codec.decode_list(d, codec.decode_meal), [])
        )
        self._saved_meals: tuple[SavedMeal, ...] = tuple(
            store.load(
                keys.SAVED_MEALS, lambda d: codec.decode_list(d, codec.decode_saved_meal), []
            )
        )
        self._exercises: tuple[Exercise, ...] = tuple(
            store.load(
                keys.EXERCISES,
                lambda d: codec.decode_list(d, codec.decode_exercise),
                list(DEFAULT_EXERCISES),
            )
        )
        self._templates: tuple[MesocycleTemplate, ...] = tuple(
            store.load(
                keys.MESOCYCLE_TEMPLATES,
                lambda d: codec.decode_list(d, codec.decode_template),
                [],
            )
        )
        self._calorie_goal = store.load(keys.CALORIE_GOAL, _decode_optional_number, None)
        self._weight_goal = store.load(keys.WEIGHT_GOAL, _decode_optional_number, None)
        self._active_template_id = store.load(
            keys.ACTIVE_TEMPLATE_ID, _decode_optional_id, None
        )
        if self._active_template_id is not None and self._template(self._active_template_id) is None:
            logger.warning("Active template %s no longer exists", self._active_template_id)
            self._active_template_id = None
        self._dark_mode = store.load(keys.DARK_MODE, _decode_flag, False)
        completed_weeks = store.load(keys.COMPLETED_WEEKS, _decode_weeks, frozenset())
        self._scheduler = MesocycleScheduler(SchedulerState(completed_weeks=completed_weeks))
        logger.info(
            "Loaded %d workouts, %d exercises, %d meals, %d templates",
            len(self._workouts),
            len(self._exercises),
            len(self._meals),
            len(self._templates),
        )

    def _set_workouts(self, workouts: Iterable[WorkoutLog]) -> None:
        self._workouts = tuple(workouts)
        self._store.save(keys.WORKOUTS, codec.encode_list(self._workouts, codec.encode_log))

    def _set_weights(self, weights: Iterable[WeightEntry]) -> None:
        self._weights = tuple(weights)
        self._store.save(keys.WEIGHT, codec.encode_list(self._weights, codec.encode_weight))

    def _set_meals(self, meals: Iterable[MealEntry]) -> None:
        self._meals = tuple(meals)
        self._store.save(keys.MEALS, codec.encode_list(self._meals, codec.encode_meal))

    def _set_saved_meals(self, saved: Iterable[SavedMeal]) -> None:
        self._saved_meals = tuple(saved)
        self._store.save(
            keys.SAVED_MEALS, codec.encode_list(self._saved_meals, codec.encode_saved_meal)
        )

    def _set_exercises(self, exercises: Iterable[Exercise]) -> None:
        self._exercises = tuple(exercises)
        self._store.save(
            keys.EXERCISES, codec.encode_list(self._exercises, codec.encode_exercise)
        )

    def _set_templates(self, templates: Iterable[MesocycleTemplate]) -> None:
        self._templates = tuple(templates)
        self._store.save(
            keys.MESOCYCLE_TEMPLATES,
            codec.encode_list(self._templates, codec.encode_template),
        )

    def _set_active_template_id(self, template_id: str | None) -> None:
        self._active_template_id = template_id
        self._store.save(keys.ACTIVE_TEMPLATE_ID, template_id)

    def _save_completed_weeks(self) -> None:
        self._store.save(keys.COMPLETED_WEEKS, sorted(self._scheduler.completed_weeks))

    def reset(self) -> None:
        """Wipe the persisted store and reload defaults."""
        self._store.clear()
        self._active_exercise = None
        self._current_sets = ()
        self._last_completion = CompletionResult()
        self._load()
        logger.info("Tracker store cleared")

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def now(self) -> datetime:
        return self._clock()

    @property
    def exercises(self) -> tuple[Exercise, ...]:
        return self._exercises

    @property
    def workouts(self) -> tuple[WorkoutLog, ...]:
        return self._workouts

    @property
    def weights(self) -> tuple[WeightEntry, ...]:
        return self._weights

    @property
    def meals(self) -> tuple[MealEntry, ...]:
        return self._meals

    @property
    def saved_meals(self) -> tuple[SavedMeal, ...]:
        return self._saved_meals

    @property
    def templates(self) -> tuple[MesocycleTemplate, ...]:
        return self._templates

    @property
    def calorie_goal(self) -> float | None:
        return self._calorie_goal

    @property
    def weight_goal(self) -> float | None:
        return self._weight_goal

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    @property
    def scheduler(self) -> MesocycleScheduler:
        return self._scheduler

    @property
    def active_exercise(self) -> Exercise | None:
        return self._active_exercise

    @property
    def current_sets(self) -> tuple[WorkoutSet, ...]:
        return self._current_sets

    @property
    def last_completion(self) -> CompletionResult:
        """Scheduler outcome of the most recent complete_workout() call."""
        return self._last_completion

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    def add_exercise(
        self, name: str, category: ExerciseCategory = ExerciseCategory.CUSTOM
    ) -> Exercise | None:
        clean = (name or "").strip()
        if not clean:
            logger.debug("Rejected exercise with blank name")
            return None
        exercise = Exercise(id=self._new_id(), name=clean, category=category)
        self._set_exercises(self._exercises + (exercise,))
        logger.info("Added exercise %s (%s)", exercise.name, exercise.category.value)
        return exercise

    def delete_exercise(self, exercise_id: str) -> bool:
        """Remove an exercise. Its logs are kept and show as unknown."""
        remaining = tuple(e for e in self._exercises if e.id != exercise_id)
        if len(remaining) == len(self._exercises):
            return False
        self._set_exercises(remaining)
        logger.info("Deleted exercise %s", exercise_id)
        return True

    def exercise_name(self, exercise_id: str) -> str:
        return display_name(self._exercises, exercise_id)

    def exercises_by_category(self) -> dict[ExerciseCategory, list[Exercise]]:
        return group_by_category(self._exercises)

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def last_workout(self, exercise_id: str) -> WorkoutLog | None:
        return last_log_for(self._workouts, exercise_id)

    def next_target(self, exercise_id: str) -> SetTarget:
        return target_for_exercise(self._workouts, exercise_id)

    def history_for(self, exercise_id: str) -> list[WorkoutLog]:
        """All logs of one exercise, newest first."""
        logs = [log for log in self._workouts if log.exercise_id == exercise_id]
        return sorted(logs, key=lambda log: log.date, reverse=True)

    def history_by_day(self) -> dict[date, list[WorkoutLog]]:
        """Archive view: logs grouped by calendar day, newest day first."""
        grouped: dict[date, list[WorkoutLog]] = {}
        for log in sorted(self._workouts, key=lambda log: log.date, reverse=True):
            grouped.setdefault(log.date.date(), []).append(log)
        return grouped

    def start_workout(self, exercise_id: str) -> tuple[WorkoutSet, ...] | None:
        """Open a session for an exercise with sets seeded from its next target."""
        exercise = find_by_id(self._exercises, exercise_id)
        if exercise is None:
            logger.debug("Cannot start unknown exercise %s", exercise_id)
            return None
        self._active_exercise = exercise
        self._current_sets = initial_sets(self.next_target(exercise_id))
        return self._current_sets

    def update_set(self, index: int, **changes: Any) -> WorkoutSet | None:
        """Edit one set of the open session.

        Accepted fields: reps, weight, rir, completed, note. A non-numeric
        or negative value rejects the whole edit.
        """
        if self._active_exercise is None or not 0 <= index < len(self._current_sets):
            return None
        unknown = set(changes) - {"reps", "weight", "rir", "completed", "note"}
        if unknown:
            raise TypeError(f"Unknown set fields: {sorted(unknown)}")

        values: dict[str, Any] = {}
        if "reps" in changes:
            reps = parse_non_negative(changes["reps"])
            if reps is None:
                return None
            values["reps"] = int(reps)
        if "weight" in changes:
            weight = parse_non_negative(changes["weight"])
            if weight is None:
                return None
            values["weight"] = weight
        if "rir" in changes:
            rir = parse_number(changes["rir"])
            if rir is None:
                return None
            values["rir"] = max(0, min(MAX_RIR, int(rir)))
        if "completed" in changes:
            values["completed"] = bool(changes["completed"])
        if "note" in changes:
            note = changes["note"]
            values["note"] = str(note).strip() if note is not None else None
            if not values["note"]:
                values["note"] = None

        updated = dataclasses.replace(self._current_sets[index], **values)
        sets = list(self._current_sets)
        sets[index] = updated
        self._current_sets = tuple(sets)
        return updated

    def cancel_workout(self) -> None:
        self._active_exercise = None
        self._current_sets = ()

    def complete_workout(self) -> WorkoutLog | None:
        """Log the completed sets of the open session.

        Returns None (and keeps the session open) when no set is completed.
        """
        if self._active_exercise is None:
            return None
        completed = tuple(s for s in self._current_sets if s.completed)
        if not completed:
            logger.debug("Nothing to log for %s: no completed sets", self._active_exercise.name)
            return None

        now = self.now
        log = WorkoutLog(
            id=self._new_id(),
            date=now,
            exercise_id=self._active_exercise.id,
            sets=completed,
        )
        self._set_workouts((log,) + self._workouts)
        logger.info(
            "Logged %d sets of %s", len(completed), self._active_exercise.name
        )
        self._active_exercise = None
        self._current_sets = ()

        self._last_completion = self._scheduler.record_completion(
            now, log.exercise_id, self._workouts, self._exercises, self.active_template
        )
        if self._last_completion.advanced:
            self._save_completed_weeks()
        return log

    # ------------------------------------------------------------------
    # Body weight
    # ------------------------------------------------------------------

    def add_weight(self, value: Any) -> WeightEntry | None:
        weight = parse_positive(value)
        if weight is None:
            logger.debug("Rejected weight entry %r", value)
            return None
        entry = WeightEntry(id=self._new_id(), date=self.now, weight=weight)
        self._set_weights((entry,) + self._weights)
        logger.info("Logged body weight %.1f kg", weight)
        return entry

    def delete_weight(self, entry_id: str) -> bool:
        remaining = tuple(e for e in self._weights if e.id != entry_id)
        if len(remaining) == len(self._weights):
            return False
        self._set_weights(remaining)
        return True

    @property
    def current_weight(self) -> float | None:
        """Most recently logged body weight."""
        if not self._weights:
            return None
        return max(self._weights, key=lambda e: e.date).weight

    def set_weight_goal(self, value: Any) -> bool:
        goal = parse_positive(value)
        if goal is None:
            return False
        self._weight_goal = goal
        self._store.save(keys.WEIGHT_GOAL, goal)
        return True

    def weight_to_goal(self) -> float | None:
        """Kilograms remaining to the weight goal (negative = above target)."""
        current = self.current_weight
        if current is None or self._weight_goal is None:
            return None
        return round(self._weight_goal - current, 1)

    def weekly_weight_trend(self) -> list[TrendPoint]:
        return aggregates.weekly_weight_trend(self._weights)

    def weight_change_rate(self) -> float | None:
        return aggregates.weight_change_rate(self._weights)

    # ------------------------------------------------------------------
    # Meals
    # ------------------------------------------------------------------

    def add_meal(
        self,
        name: str,
        calories: Any,
        protein: Any = 0,
        carbs: Any = 0,
        fat: Any = 0,
    ) -> MealEntry | None:
        """Log a meal; a first-seen name is also stored as a saved meal."""
        clean = (name or "").strip()
        kcal = parse_positive(calories)
        if not clean or kcal is None:
            logger.debug("Rejected meal %r with calories %r", name, calories)
            return None
        return self._log_meal(clean, kcal, protein, carbs, fat)

    def _log_meal(
        self, name: str, kcal: float, protein: Any, carbs: Any, fat: Any
    ) -> MealEntry:
        meal = MealEntry(
            id=self._new_id(),
            date=self.now,
            name=name,
            calories=kcal,
            protein=parse_non_negative(protein) or 0.0,
            carbs=parse_non_negative(carbs) or 0.0,
            fat=parse_non_negative(fat) or 0.0,
        )
        self._set_meals((meal,) + self._meals)
        logger.info("Logged meal %s (%.0f kcal)", meal.name, meal.calories)

        if self._saved_meal_by_name(name) is None:
            preset = SavedMeal(
                id=self._new_id(),
                name=meal.name,
                calories=meal.calories,
                protein=meal.protein,
                carbs=meal.carbs,
                fat=meal.fat,
            )
            self._set_saved_meals(self._saved_meals + (preset,))
        return meal

    def add_meal_from_food(self, food: FoodData, quantity: Any) -> MealEntry | None:
        """Log a looked-up food scaled to *quantity* (grams or millilitres).

        A product may scale to 0 kcal, so zero is accepted here where a
        typed-in meal needs positive calories.
        """
        draft = scale_food(food, quantity)
        name = (draft.name or "").strip()
        kcal = parse_non_negative(draft.calories)
        if not name or kcal is None:
            logger.debug("Rejected food %r with calories %r", draft.name, draft.calories)
            return None
        return self._log_meal(name, kcal, draft.protein, draft.carbs, draft.fat)

    def add_saved_meal(self, saved_id: str) -> MealEntry | None:
        preset = next((m for m in self._saved_meals if m.id == saved_id), None)
        if preset is None:
            return None
        return self._log_meal(preset.name, preset.calories, preset.protein, preset.carbs, preset.fat)

    def delete_meal(self, meal_id: str) -> bool:
        remaining = tuple(m for m in self._meals if m.id != meal_id)
        if len(remaining) == len(self._meals):
            return False
        self._set_meals(remaining)
        return True

    def delete_saved_meal(self, saved_id: str) -> bool:
        remaining = tuple(m for m in self._saved_meals if m.id != saved_id)
        if len(remaining) == len(self._saved_meals):
            return False
        self._set_saved_meals(remaining)
        return True

    def _saved_meal_by_name(self, name: str) -> SavedMeal | None:
        wanted = name.strip().casefold()
        for preset in self._saved_meals:
            if preset.name.strip().casefold() == wanted:
                return preset
        return None

    def today_totals(self) -> MacroTotals:
        return day_totals(self._meals, self.now.date())

    def today_meals(self) -> list[MealEntry]:
        today = self.now.date()
        return [m for m in self._meals if m.date.date() == today]

    def set_calorie_goal(self, value: Any) -> bool:
        goal = parse_positive(value)
        if goal is None:
            return False
        self._calorie_goal = goal
        self._store.save(keys.CALORIE_GOAL, goal)
        return True

    def calorie_goal_progress(self) -> float | None:
        return goal_progress(self.today_totals().calories, self._calorie_goal)

    def weekly_calorie_trend(self) -> list[TrendPoint]:
        return aggregates.weekly_calorie_trend(self._meals)

    def monthly_calorie_trend(self) -> list[TrendPoint]:
        return aggregates.monthly_calorie_trend(self._meals)

    # ------------------------------------------------------------------
    # Mesocycle templates
    # ------------------------------------------------------------------

    def _template(self, template_id: str) -> MesocycleTemplate | None:
        return next((t for t in self._templates if t.id == template_id), None)

    @property
    def active_template(self) -> MesocycleTemplate | None:
        if self._active_template_id is None:
            return None
        return self._template(self._active_template_id)

    def save_template(
        self,
        name: str,
        description: str,
        weeks: Iterable[WeekConfig],
        template_id: str | None = None,
    ) -> MesocycleTemplate:
        """Create a template, or replace the one with *template_id*.

        Raises:
            ValueError: If the name is blank or there are no weeks.
        """
        clean = (name or "").strip()
        if not clean:
            raise ValueError("Template name is required")
        week_tuple = tuple(weeks)
        if not week_tuple:
            raise ValueError("Template needs at least one week")

        existing = self._template(template_id) if template_id else None
        template = MesocycleTemplate(
            id=existing.id if existing else self._new_id(),
            name=clean,
            description=(description or "").strip(),
            weeks=week_tuple,
            created_at=existing.created_at if existing else self.now,
        )
        if existing:
            self._set_templates(template if t.id == existing.id else t for t in self._templates)
            logger.info("Updated template %s", template.name)
        else:
            self._set_templates(self._templates + (template,))
            logger.info("Created template %s (%d weeks)", template.name, template.cycle_length)
        return template

    def delete_template(self, template_id: str) -> bool:
        remaining = tuple(t for t in self._templates if t.id != template_id)
        if len(remaining) == len(self._templates):
            return False
        self._set_templates(remaining)
        if self._active_template_id == template_id:
            self.clear_active_template()
        logger.info("Deleted template %s", template_id)
        return True

    def apply_template(self, template_id: str) -> MesocycleTemplate:
        """Make a template active and restart the cycle at week 1, day 0.

        Raises:
            KeyError: If no template has that id.
        """
        template = self._template(template_id)
        if template is None:
            raise KeyError(template_id)
        self._set_active_template_id(template.id)
        self._scheduler.reset_for_template()
        self._save_completed_weeks()
        logger.info("Applied template %s", template.name)
        return template

    def clear_active_template(self) -> None:
        """Return to the built-in plan, following the calendar again."""
        self._set_active_template_id(None)
        self._scheduler.clear_week_override()
        self._scheduler.clear_day_override()

    # ------------------------------------------------------------------
    # Plan
    # ------------------------------------------------------------------

    def current_week(self) -> int:
        return self._scheduler.current_week(self.now, self.active_template)

    def week_descriptor(self) -> WeekDescriptor:
        return self._scheduler.week_descriptor(self.now, self.active_template)

    def today_plan(self) -> DayPlan:
        return self._scheduler.day_plan(self.now, self._exercises, self.active_template)

    def startable_exercises(self) -> tuple[Exercise, ...]:
        return self.today_plan().startable

    def select_week(self, week: int) -> None:
        self._scheduler.select_week(week, self.active_template)

    def select_day(self, day_index: int) -> None:
        self._scheduler.select_day(day_index)

    def acknowledge_mesocycle_complete(self) -> None:
        self._scheduler.acknowledge_completion()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_dark_mode(self, enabled: bool) -> None:
        self._dark_mode = bool(enabled)
        self._store.save(keys.DARK_MODE, self._dark_mode)
