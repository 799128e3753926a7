"""Mesocycle periodization math: calendar weeks, the built-in 8-week plan, template seeding.

The built-in cycle is a fixed 8-week block:
- weeks 1-2 BASE (volume accumulation)
- weeks 3-5 BUILD (intensity increase)
- weeks 6-7 PEAK (near-maximal effort)
- week 8 DELOAD (recovery)

The calendar week of the year is folded into the cycle, so the cycle
repeats every 8 calendar weeks unless the user overrides the week.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time

from fit_engine.models.enums import (
    BUILT_IN_CYCLE_WEEKS,
    DAYS_PER_WEEK,
    MesocyclePhase,
)
from fit_engine.models.mesocycle import DayConfig, WeekConfig, WeekDescriptor

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

BUILT_IN_WEEKS: tuple[WeekDescriptor, ...] = (
    WeekDescriptor(1, MesocyclePhase.BASE, "Foundation: moderate loads, 3 RIR, learn the groove"),
    WeekDescriptor(2, MesocyclePhase.BASE, "Volume: add a set where recovery allows"),
    WeekDescriptor(3, MesocyclePhase.BUILD, "Intensity up: 2 RIR on main lifts"),
    WeekDescriptor(4, MesocyclePhase.BUILD, "Push the weight, keep technique tight"),
    WeekDescriptor(5, MesocyclePhase.BUILD, "Heaviest build week: 1-2 RIR"),
    WeekDescriptor(6, MesocyclePhase.PEAK, "Peak: top sets at 0-1 RIR"),
    WeekDescriptor(7, MesocyclePhase.PEAK, "Peak: test the new working weights"),
    WeekDescriptor(8, MesocyclePhase.DELOAD, "Deload: half the sets at ~60% load"),
)

# Week number -> exactly 4 exercise names.
# Monday/Thursday train entries 0-1, Tuesday/Friday entries 2-3.
BUILT_IN_WORKOUTS: dict[int, tuple[str, str, str, str]] = {
    1: ("Squat", "Bench Press", "Deadlift", "Overhead Press"),
    2: ("Squat", "Bench Press", "Barbell Row", "Overhead Press"),
    3: ("Squat", "Incline Bench Press", "Deadlift", "Pull-ups"),
    4: ("Leg Press", "Bench Press", "Romanian Deadlift", "Overhead Press"),
    5: ("Squat", "Bench Press", "Barbell Row", "Lat Pulldown"),
    6: ("Squat", "Bench Press", "Deadlift", "Overhead Press"),
    7: ("Squat", "Bench Press", "Deadlift", "Barbell Row"),
    8: ("Leg Press", "Incline Bench Press", "Lat Pulldown", "Dumbbell Curl"),
}

# Day index -> slice of the week's workout list
_BUILT_IN_DAY_SLOTS: dict[int, slice] = {
    0: slice(0, 2),
    3: slice(0, 2),
    1: slice(2, 4),
    4: slice(2, 4),
}

_BUILT_IN_DAY_LABELS: dict[int, str] = {
    0: "Workout A",
    3: "Workout A",
    1: "Workout B",
    4: "Workout B",
}


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------


def week_of_year(moment: date | datetime) -> int:
    """Week number of *moment* within its year.

    ``ceil((time since Jan 1 + weekday offset of Jan 1) / 7 days)`` with
    the offset counted Sunday=0..Saturday=6. A plain date is taken at
    midnight, so Jan 1 falling on a Sunday yields week 0.
    """
    if isinstance(moment, datetime):
        instant = moment.replace(tzinfo=None)
    else:
        instant = datetime.combine(moment, time())
    jan1 = datetime(instant.year, 1, 1)
    jan1_offset_days = (jan1.weekday() + 1) % 7
    elapsed_days = (instant - jan1).total_seconds() / 86400.0
    return math.ceil((elapsed_days + jan1_offset_days) / DAYS_PER_WEEK)


def mesocycle_week(week_number: int, cycle_length: int = BUILT_IN_CYCLE_WEEKS) -> int:
    """Fold a calendar week number into 1..cycle_length (a 0 remainder maps to the last week).

    Raises:
        ValueError: If cycle_length < 1.
    """
    if cycle_length < 1:
        raise ValueError(f"Cycle length must be at least 1, got {cycle_length}")
    folded = week_number % cycle_length
    return cycle_length if folded == 0 else folded


def built_in_week(week: int) -> WeekDescriptor:
    """Descriptor of a built-in week; out-of-range numbers are folded into the cycle."""
    return BUILT_IN_WEEKS[mesocycle_week(week) - 1]


def built_in_day_names(week: int, day_index: int) -> tuple[str, ...]:
    """Exercise names prescribed by the built-in plan for a week/day."""
    workout = BUILT_IN_WORKOUTS[mesocycle_week(week)]
    slots = _BUILT_IN_DAY_SLOTS.get(day_index)
    if slots is None:
        return ()
    return tuple(workout[slots])


def built_in_day_label(day_index: int) -> str:
    return _BUILT_IN_DAY_LABELS.get(day_index, "Rest")


# ---------------------------------------------------------------------------
# Template seeding (builder)
# ---------------------------------------------------------------------------


def default_phase_for_week(week_index: int) -> MesocyclePhase:
    """Seed phase for a 0-indexed template week: 2 BASE, 3 BUILD, 2 PEAK, then DELOAD.

    Weeks appended beyond the first eight default to BUILD.
    """
    if week_index < 2:
        return MesocyclePhase.BASE
    if week_index < 5:
        return MesocyclePhase.BUILD
    if week_index < 7:
        return MesocyclePhase.PEAK
    if week_index == 7:
        return MesocyclePhase.DELOAD
    return MesocyclePhase.BUILD


def empty_days(day_names: Sequence[str] = DAY_NAMES) -> tuple[DayConfig, ...]:
    return tuple(
        DayConfig(day_index=i, day_name=name) for i, name in enumerate(day_names)
    )


def default_template_weeks(num_weeks: int = BUILT_IN_CYCLE_WEEKS) -> tuple[WeekConfig, ...]:
    """Blank template weeks with seed phases and seven empty training days each.

    Raises:
        ValueError: If num_weeks < 1.
    """
    if num_weeks < 1:
        raise ValueError(f"A template needs at least 1 week, got {num_weeks}")
    return tuple(
        WeekConfig(
            week_number=i + 1,
            phase=default_phase_for_week(i),
            days=empty_days(),
        )
        for i in range(num_weeks)
    )


def resize_template_weeks(
    weeks: Sequence[WeekConfig], num_weeks: int
) -> tuple[WeekConfig, ...]:
    """Truncate or extend *weeks* to *num_weeks*; new weeks are blank BUILD weeks."""
    if num_weeks < 1:
        raise ValueError(f"A template needs at least 1 week, got {num_weeks}")
    resized = list(weeks[:num_weeks])
    for i in range(len(resized), num_weeks):
        resized.append(
            WeekConfig(week_number=i + 1, phase=MesocyclePhase.BUILD, days=empty_days())
        )
    return tuple(resized)


def phase_counts(weeks: Iterable[WeekConfig | WeekDescriptor]) -> dict[MesocyclePhase, int]:
    """Number of weeks per phase, in phase order, omitting absent phases."""
    counts = Counter(w.phase for w in weeks)
    return {phase: counts[phase] for phase in MesocyclePhase if counts[phase]}
