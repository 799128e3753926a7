"""MesocycleScheduler — resolves today's week, phase and exercises, and tracks week completion.

The scheduler owns only its own state (week/day selection, completed
weeks, the mesocycle-complete flag). Exercises, workout history and the
active template are owned by the session and passed in on every call.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime

from fit_engine.catalog import find_by_id, find_by_name
from fit_engine.math.periodization import (
    built_in_day_label,
    built_in_day_names,
    built_in_week,
    mesocycle_week,
    week_of_year,
)
from fit_engine.models.enums import BUILT_IN_CYCLE_WEEKS, DAYS_PER_WEEK, MesocyclePhase
from fit_engine.models.mesocycle import (
    CompletionResult,
    DayPlan,
    MesocycleTemplate,
    PlanSlot,
    SchedulerState,
    WeekDescriptor,
)
from fit_engine.models.workout import Exercise, WorkoutLog

logger = logging.getLogger(__name__)


def _calendar_day(moment: date | datetime) -> date:
    return moment.date() if isinstance(moment, datetime) else moment


def cycle_length(template: MesocycleTemplate | None) -> int:
    """Weeks in the active cycle: the template's own length, else the built-in 8."""
    if template is not None and template.cycle_length > 0:
        return template.cycle_length
    return BUILT_IN_CYCLE_WEEKS


class MesocycleScheduler:
    """State machine over ``{week, day, completed_weeks}``.

    Usage:
        scheduler = MesocycleScheduler()
        plan = scheduler.day_plan(now, exercises, template)
        result = scheduler.record_completion(now, exercise_id, history, exercises, template)
    """

    def __init__(self, state: SchedulerState | None = None) -> None:
        self._state = state or SchedulerState()

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def completed_weeks(self) -> frozenset[int]:
        return self._state.completed_weeks

    @property
    def mesocycle_complete(self) -> bool:
        return self._state.mesocycle_complete

    def _update(self, **changes) -> None:
        self._state = dataclasses.replace(self._state, **changes)

    # ------------------------------------------------------------------
    # Week / day resolution
    # ------------------------------------------------------------------

    def current_week(
        self, today: date | datetime, template: MesocycleTemplate | None = None
    ) -> int:
        """Selected week if overridden, else the calendar week folded into the cycle."""
        length = cycle_length(template)
        if self._state.week_override is not None:
            return mesocycle_week(self._state.week_override, length)
        return mesocycle_week(week_of_year(today), length)

    def week_descriptor(
        self, today: date | datetime, template: MesocycleTemplate | None = None
    ) -> WeekDescriptor:
        week = self.current_week(today, template)
        if template is not None:
            config = template.week(week)
            if config is not None:
                return WeekDescriptor(week, config.phase, config.description)
        return built_in_week(week)

    def active_day(self, today: date | datetime) -> int:
        """Selected day if overridden, else today's weekday (Monday=0)."""
        if self._state.day_override is not None:
            return self._state.day_override
        return today.weekday()

    def select_week(self, week: int, template: MesocycleTemplate | None = None) -> None:
        length = cycle_length(template)
        if not 1 <= week <= length:
            raise ValueError(f"Week must be in 1-{length}, got {week}")
        self._update(week_override=week)

    def clear_week_override(self) -> None:
        self._update(week_override=None)

    def select_day(self, day_index: int) -> None:
        if not 0 <= day_index < DAYS_PER_WEEK:
            raise ValueError(f"Day must be in 0-{DAYS_PER_WEEK - 1}, got {day_index}")
        self._update(day_override=day_index)

    def clear_day_override(self) -> None:
        self._update(day_override=None)

    # ------------------------------------------------------------------
    # Day plan
    # ------------------------------------------------------------------

    def day_plan(
        self,
        today: date | datetime,
        exercises: Sequence[Exercise],
        template: MesocycleTemplate | None = None,
    ) -> DayPlan:
        """Exercises prescribed for the active day of the selected week."""
        week = self.current_week(today, template)
        day_index = self.active_day(today)
        phase = self.week_descriptor(today, template).phase

        if template is not None:
            return self._template_day_plan(template, week, day_index, phase, exercises)

        slots = tuple(
            PlanSlot(name=name, exercise=find_by_name(exercises, name))
            for name in built_in_day_names(week, day_index)
        )
        return DayPlan(
            week=week,
            day_index=day_index,
            phase=phase,
            slots=slots,
            label=built_in_day_label(day_index),
            is_rest_day=not slots,
        )

    @staticmethod
    def _template_day_plan(
        template: MesocycleTemplate,
        week: int,
        day_index: int,
        phase: MesocyclePhase,
        exercises: Sequence[Exercise],
    ) -> DayPlan:
        week_config = template.week(week)
        day_config = week_config.day(day_index) if week_config is not None else None
        if day_config is None or day_config.is_rest_day or not day_config.exercise_ids:
            return DayPlan(
                week=week,
                day_index=day_index,
                phase=phase,
                label=day_config.workout if day_config is not None else "",
                is_rest_day=day_config.is_rest_day if day_config is not None else False,
            )

        slots = []
        for exercise_id in day_config.exercise_ids:
            exercise = find_by_id(exercises, exercise_id)
            slots.append(
                PlanSlot(name=exercise.name if exercise else exercise_id, exercise=exercise)
            )
        return DayPlan(
            week=week,
            day_index=day_index,
            phase=phase,
            slots=tuple(slots),
            label=day_config.workout,
        )

    # ------------------------------------------------------------------
    # Completion tracking
    # ------------------------------------------------------------------

    def record_completion(
        self,
        today: date | datetime,
        exercise_id: str,
        history: Iterable[WorkoutLog],
        exercises: Sequence[Exercise],
        template: MesocycleTemplate | None = None,
    ) -> CompletionResult:
        """Re-evaluate today's plan after *exercise_id* was finished.

        Completion is matched by exercise id against logs dated today. A
        slot that no longer resolves to an exercise can never be satisfied,
        so such a day never advances.
        """
        plan = self.day_plan(today, exercises, template)
        prescribed_ids = {s.exercise.id for s in plan.slots if s.exercise is not None}
        if exercise_id not in prescribed_ids:
            return CompletionResult()

        day = _calendar_day(today)
        logged_today = {log.exercise_id for log in history if log.date.date() == day}
        if not all(s.is_resolved and s.exercise.id in logged_today for s in plan.slots):
            return CompletionResult()

        new_day = (plan.day_index + 1) % DAYS_PER_WEEK
        completed = set(self._state.completed_weeks)
        week_completed = None
        if new_day == 0 and plan.week not in completed:
            completed.add(plan.week)
            week_completed = plan.week
            logger.info("Week %d completed", plan.week)

        length = cycle_length(template)
        cycle_done = len(completed) >= length - 1 and plan.week == length
        if cycle_done:
            logger.info("Mesocycle complete after week %d", plan.week)

        self._update(
            day_override=new_day,
            completed_weeks=frozenset(completed),
            mesocycle_complete=self._state.mesocycle_complete or cycle_done,
        )
        logger.info("Advanced day %d -> %d (week %d)", plan.day_index, new_day, plan.week)
        return CompletionResult(
            advanced=True,
            new_day=new_day,
            week_completed=week_completed,
            mesocycle_complete=cycle_done,
        )

    def acknowledge_completion(self) -> None:
        """Clear the mesocycle-complete flag once the user has been told."""
        self._update(mesocycle_complete=False)

    def reset_for_template(self) -> None:
        """Start over at week 1, day 0 with no completed weeks."""
        self._state = SchedulerState(week_override=1, day_override=0)
        logger.info("Scheduler reset for new template")
