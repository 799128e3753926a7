"""Mesocycle models: built-in week descriptors, user templates, plans and scheduler state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fit_engine.models.enums import UNKNOWN_EXERCISE_NAME, MesocyclePhase
from fit_engine.models.workout import Exercise


@dataclass(frozen=True)
class WeekDescriptor:
    """Phase and description of one week of a mesocycle."""

    week_number: int  # 1-indexed
    phase: MesocyclePhase
    description: str = ""


@dataclass(frozen=True)
class DayConfig:
    """One day of a template week."""

    day_index: int  # 0=Monday, 6=Sunday
    day_name: str
    workout: str = ""
    exercise_ids: tuple[str, ...] = field(default_factory=tuple)
    is_rest_day: bool = False


@dataclass(frozen=True)
class WeekConfig:
    """One week of a template: phase, description and exactly 7 days."""

    week_number: int
    phase: MesocyclePhase
    description: str = ""
    days: tuple[DayConfig, ...] = field(default_factory=tuple)

    def day(self, day_index: int) -> DayConfig | None:
        for day in self.days:
            if day.day_index == day_index:
                return day
        return None


@dataclass(frozen=True)
class MesocycleTemplate:
    """A user-authored mesocycle. Its week count is its cycle length."""

    id: str
    name: str
    description: str = ""
    weeks: tuple[WeekConfig, ...] = field(default_factory=tuple)
    created_at: datetime | None = None

    @property
    def cycle_length(self) -> int:
        return len(self.weeks)

    def week(self, week_number: int) -> WeekConfig | None:
        """Return the WeekConfig for a 1-indexed week, or None."""
        for week in self.weeks:
            if week.week_number == week_number:
                return week
        if 1 <= week_number <= len(self.weeks):
            return self.weeks[week_number - 1]
        return None


@dataclass(frozen=True)
class PlanSlot:
    """A prescribed exercise in a day plan.

    ``exercise`` is None when the prescribed name or id no longer resolves
    to an Exercise; such a slot is shown as unknown and cannot be started.
    """

    name: str
    exercise: Exercise | None = None

    @property
    def is_resolved(self) -> bool:
        return self.exercise is not None

    @property
    def display_name(self) -> str:
        return self.exercise.name if self.exercise is not None else UNKNOWN_EXERCISE_NAME


@dataclass(frozen=True)
class DayPlan:
    """What is prescribed for one day of the selected week."""

    week: int
    day_index: int
    phase: MesocyclePhase
    slots: tuple[PlanSlot, ...] = field(default_factory=tuple)
    label: str = ""
    is_rest_day: bool = False

    @property
    def has_exercises(self) -> bool:
        return len(self.slots) > 0

    @property
    def startable(self) -> tuple[Exercise, ...]:
        return tuple(s.exercise for s in self.slots if s.exercise is not None)


@dataclass(frozen=True)
class SchedulerState:
    """Week/day selection and completion progress of the mesocycle scheduler."""

    week_override: int | None = None
    day_override: int | None = None
    completed_weeks: frozenset[int] = field(default_factory=frozenset)
    mesocycle_complete: bool = False


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of re-evaluating today's plan after a finished workout."""

    advanced: bool = False
    new_day: int | None = None
    week_completed: int | None = None
    mesocycle_complete: bool = False
