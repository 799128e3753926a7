"""Exercise, set and workout log records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fit_engine.models.enums import ExerciseCategory


@dataclass(frozen=True)
class Exercise:
    """A named movement the user can train."""

    id: str
    name: str
    category: ExerciseCategory = ExerciseCategory.CUSTOM


@dataclass(frozen=True)
class WorkoutSet:
    """A single working set.

    Ephemeral while being edited; kept in a WorkoutLog only if
    ``completed`` is True when the workout is finished.
    """

    reps: int
    weight: float
    rir: int  # reps in reserve, 0-5
    completed: bool = False
    note: str | None = None


@dataclass(frozen=True)
class WorkoutLog:
    """One finished session of one exercise. Never mutated after creation."""

    id: str
    date: datetime
    exercise_id: str
    sets: tuple[WorkoutSet, ...] = field(default_factory=tuple)

    @property
    def total_volume(self) -> float:
        """Sum of weight x reps over the logged sets."""
        return sum(s.weight * s.reps for s in self.sets)


@dataclass(frozen=True)
class SetTarget:
    """Suggested weight and reps for the next session of an exercise."""

    weight: float
    reps: int
