"""Progressive overload: next-session targets from the last logged session.

The policy is RIR-driven double progression:
- at or past failure (RIR <= 1) the weight goes up one increment,
- a comfortable set (RIR >= 3) earns one more rep, capped at 12,
- RIR == 2 is the sweet spot and the prescription is repeated.

Only completed sets performed close to failure (RIR <= 2) are trusted as
a progression signal.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from functools import reduce

from fit_engine.models.enums import (
    ADD_REP_MIN_RIR,
    DEFAULT_STARTING_RIR,
    DEFAULT_TARGET_REPS,
    DEFAULT_TARGET_WEIGHT,
    HARD_SET_MAX_RIR,
    INCREASE_WEIGHT_MAX_RIR,
    MAX_TARGET_REPS,
    WEIGHT_INCREMENT,
    WORKING_SETS_PER_SESSION,
)
from fit_engine.models.workout import SetTarget, WorkoutLog, WorkoutSet


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def round_to_increment(value: float, increment: float = WEIGHT_INCREMENT) -> float:
    """Snap *value* to the nearest multiple of *increment*."""
    return round_half_up(value / increment) * increment


def _better(a: WorkoutSet, b: WorkoutSet) -> WorkoutSet:
    if a.reps > b.reps or (a.reps == b.reps and a.weight > b.weight):
        return a
    return b


def select_best_set(sets: Sequence[WorkoutSet]) -> WorkoutSet:
    """Pick the set with the most reps; ties go to the heavier set.

    Raises:
        ValueError: If *sets* is empty.
    """
    if not sets:
        raise ValueError("Cannot select a best set from an empty sequence")
    return reduce(_better, sets)


def next_target(history: Sequence[WorkoutSet] | None) -> SetTarget:
    """Compute the weight/rep target for the next session of an exercise.

    Args:
        history: Sets from the most recent logged session, in logged order.
            None or empty means the exercise has never been trained.

    Returns:
        The suggested SetTarget. Never raises.
    """
    if not history:
        return SetTarget(weight=DEFAULT_TARGET_WEIGHT, reps=DEFAULT_TARGET_REPS)

    candidates = [s for s in history if s.completed and s.rir <= HARD_SET_MAX_RIR]
    if not candidates:
        # Nothing hard enough to trust: repeat last time's first set
        return SetTarget(weight=history[0].weight, reps=history[0].reps)

    best = select_best_set(candidates)
    weight = best.weight
    reps = best.reps

    if best.rir <= INCREASE_WEIGHT_MAX_RIR:
        weight = round_to_increment(best.weight + WEIGHT_INCREMENT)
    elif best.rir >= ADD_REP_MIN_RIR:
        reps = min(best.reps + 1, MAX_TARGET_REPS)

    return SetTarget(weight=weight, reps=reps)


def initial_sets(
    target: SetTarget, count: int = WORKING_SETS_PER_SESSION
) -> tuple[WorkoutSet, ...]:
    """Seed the working sets of a new session from a target.

    Every set starts uncompleted with the default RIR estimate, regardless
    of how the target was derived.
    """
    return tuple(
        WorkoutSet(
            reps=target.reps,
            weight=target.weight,
            rir=DEFAULT_STARTING_RIR,
            completed=False,
        )
        for _ in range(count)
    )


def last_log_for(history: Iterable[WorkoutLog], exercise_id: str) -> WorkoutLog | None:
    """Return the most recent log of *exercise_id*, or None."""
    logs = [log for log in history if log.exercise_id == exercise_id]
    if not logs:
        return None
    return max(logs, key=lambda log: log.date)


def target_for_exercise(history: Iterable[WorkoutLog], exercise_id: str) -> SetTarget:
    """Convenience: next target based on the last session of *exercise_id*."""
    last = last_log_for(history, exercise_id)
    return next_target(last.sets if last is not None else None)
