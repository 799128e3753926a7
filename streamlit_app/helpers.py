"""Utility helpers bridging the Streamlit UI and the fit engine.

Pure functions for formatting, colour/label maps and chart data.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import pandas as pd

from fit_engine.models.enums import ExerciseCategory, MesocyclePhase
from fit_engine.models.nutrition import MacroTotals, TrendPoint
from fit_engine.models.workout import WorkoutSet

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_weight(kg: float | None) -> str:
    """62.5 -> '62.5 kg', 60.0 -> '60 kg', None -> '--'."""
    if kg is None or kg <= 0:
        return "--"
    if float(kg).is_integer():
        return f"{int(kg)} kg"
    return f"{kg:.1f} kg"


def format_set(workout_set: WorkoutSet) -> str:
    """'60 kg x 8 @ RIR 2'."""
    return f"{format_weight(workout_set.weight)} x {workout_set.reps} @ RIR {workout_set.rir}"


def format_macros(totals: MacroTotals) -> str:
    return (
        f"{totals.calories:.0f} kcal | P {totals.protein:.0f} g | "
        f"C {totals.carbs:.0f} g | F {totals.fat:.0f} g"
    )


def format_date(moment: datetime) -> str:
    """'15 Jan'."""
    return f"{moment.day} {moment.strftime('%b')}"


def format_change_rate(kg_per_week: float | None) -> str:
    if kg_per_week is None:
        return "--"
    return f"{kg_per_week:+.2f} kg/week"


# ---------------------------------------------------------------------------
# Color maps
# ---------------------------------------------------------------------------

CATEGORY_COLORS: dict[ExerciseCategory, str] = {
    ExerciseCategory.CHEST: "#9333ea",
    ExerciseCategory.BACK: "#3b82f6",
    ExerciseCategory.LEGS: "#ef4444",
    ExerciseCategory.SHOULDERS: "#f59e0b",
    ExerciseCategory.BICEPS: "#10b981",
    ExerciseCategory.TRICEPS: "#06b6d4",
    ExerciseCategory.CUSTOM: "#6b7280",
}

PHASE_COLORS: dict[MesocyclePhase, str] = {
    MesocyclePhase.BASE: "#3b82f6",
    MesocyclePhase.BUILD: "#f59e0b",
    MesocyclePhase.PEAK: "#ef4444",
    MesocyclePhase.DELOAD: "#10b981",
}

PHASE_LABELS: dict[MesocyclePhase, str] = {
    MesocyclePhase.BASE: "Base",
    MesocyclePhase.BUILD: "Build",
    MesocyclePhase.PEAK: "Peak",
    MesocyclePhase.DELOAD: "Deload",
}

DAY_SHORT_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


# ---------------------------------------------------------------------------
# Chart data
# ---------------------------------------------------------------------------


def trend_frame(points: Sequence[TrendPoint], column: str) -> pd.DataFrame:
    """TrendPoints as a DataFrame indexed by period start, for st.line_chart."""
    frame = pd.DataFrame(
        {column: [p.value for p in points]},
        index=pd.to_datetime([p.period_start for p in points]),
    )
    frame.index.name = "period"
    return frame
