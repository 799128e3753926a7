"""Calorie and body-weight trends over the logged history.

Calorie trends are the mean of daily totals over the days that have at
least one meal, so an unlogged day does not drag the average to zero.
Weeks run Monday-Sunday.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

import numpy as np
import pandas as pd

from fit_engine.models.nutrition import MealEntry, TrendPoint, WeightEntry

_WEEK = "W"  # W-SUN periods, i.e. Monday..Sunday
_MONTH = "M"


def _series(dates: Sequence[datetime], values: Sequence[float]) -> pd.Series:
    index = pd.DatetimeIndex(pd.to_datetime([d.date() for d in dates]))
    return pd.Series(list(values), index=index, dtype=np.float64)


def _to_points(grouped: pd.Series) -> list[TrendPoint]:
    return [
        TrendPoint(period_start=period.start_time.date(), value=round(float(value), 1))
        for period, value in grouped.items()
    ]


def _daily_calories(meals: Sequence[MealEntry]) -> pd.Series:
    series = _series([m.date for m in meals], [m.calories for m in meals])
    return series.groupby(level=0).sum().sort_index()


def daily_calorie_totals(meals: Sequence[MealEntry]) -> dict[date, float]:
    """Total calories per calendar day, oldest first."""
    if not meals:
        return {}
    daily = _daily_calories(meals)
    return {ts.date(): float(value) for ts, value in daily.items()}


def _calorie_trend(meals: Sequence[MealEntry], freq: str) -> list[TrendPoint]:
    if not meals:
        return []
    daily = _daily_calories(meals)
    grouped = daily.groupby(daily.index.to_period(freq)).mean()
    return _to_points(grouped)


def weekly_calorie_trend(meals: Sequence[MealEntry]) -> list[TrendPoint]:
    """Mean daily calories per Monday-Sunday week."""
    return _calorie_trend(meals, _WEEK)


def monthly_calorie_trend(meals: Sequence[MealEntry]) -> list[TrendPoint]:
    """Mean daily calories per calendar month."""
    return _calorie_trend(meals, _MONTH)


def weekly_weight_trend(entries: Sequence[WeightEntry]) -> list[TrendPoint]:
    """Mean logged body weight per Monday-Sunday week."""
    if not entries:
        return []
    series = _series([e.date for e in entries], [e.weight for e in entries]).sort_index()
    grouped = series.groupby(series.index.to_period(_WEEK)).mean()
    return _to_points(grouped)


def weight_change_rate(entries: Sequence[WeightEntry]) -> float | None:
    """Least-squares body-weight slope in kg per week.

    Returns None when fewer than two distinct days have been logged.
    """
    if len({e.date.date() for e in entries}) < 2:
        return None
    ordered = sorted(entries, key=lambda e: e.date)
    origin = ordered[0].date
    days = np.array(
        [(e.date - origin).total_seconds() / 86400.0 for e in ordered], dtype=np.float64
    )
    weights = np.array([e.weight for e in ordered], dtype=np.float64)
    slope_per_day = np.polyfit(days, weights, 1)[0]
    return round(float(slope_per_day) * 7.0, 2)
