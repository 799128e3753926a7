"""Tests for calorie and body-weight trend aggregation."""

from datetime import date, datetime

import pytest

from fit_engine.math.aggregates import (
    daily_calorie_totals,
    monthly_calorie_trend,
    weekly_calorie_trend,
    weekly_weight_trend,
    weight_change_rate,
)
from fit_engine.models.nutrition import MealEntry, TrendPoint, WeightEntry


def _meal(when: datetime, calories: float) -> MealEntry:
    return MealEntry(id=f"m-{when.isoformat()}-{calories}", date=when, name="Meal", calories=calories)


def _weight(when: datetime, kg: float) -> WeightEntry:
    return WeightEntry(id=f"w-{when.isoformat()}", date=when, weight=kg)


@pytest.fixture
def meals() -> list[MealEntry]:
    # 2026-03-02 is a Monday
    return [
        _meal(datetime(2026, 3, 2, 8, 0), 500),
        _meal(datetime(2026, 3, 2, 19, 0), 700),
        _meal(datetime(2026, 3, 4, 13, 0), 1800),
        _meal(datetime(2026, 3, 9, 12, 0), 2000),
        _meal(datetime(2026, 4, 1, 12, 0), 1000),
    ]


class TestCalorieTotals:
    def test_daily_totals(self, meals) -> None:
        totals = daily_calorie_totals(meals)
        assert totals[date(2026, 3, 2)] == 1200
        assert totals[date(2026, 3, 4)] == 1800
        assert list(totals) == sorted(totals)

    def test_empty(self) -> None:
        assert daily_calorie_totals([]) == {}
        assert weekly_calorie_trend([]) == []
        assert monthly_calorie_trend([]) == []


class TestCalorieTrends:
    def test_weekly_mean_over_logged_days(self, meals) -> None:
        trend = weekly_calorie_trend(meals)
        assert trend[0] == TrendPoint(period_start=date(2026, 3, 2), value=1500.0)
        assert trend[1] == TrendPoint(period_start=date(2026, 3, 9), value=2000.0)

    def test_weeks_start_on_monday(self, meals) -> None:
        for point in weekly_calorie_trend(meals):
            assert point.period_start.weekday() == 0

    def test_monthly(self, meals) -> None:
        trend = monthly_calorie_trend(meals)
        assert trend == [
            TrendPoint(period_start=date(2026, 3, 1), value=round((1200 + 1800 + 2000) / 3, 1)),
            TrendPoint(period_start=date(2026, 4, 1), value=1000.0),
        ]

    def test_unsorted_input(self, meals) -> None:
        assert weekly_calorie_trend(list(reversed(meals))) == weekly_calorie_trend(meals)


class TestWeightTrends:
    def test_weekly_weight_mean(self) -> None:
        entries = [
            _weight(datetime(2026, 3, 2, 7, 0), 80.0),
            _weight(datetime(2026, 3, 4, 7, 0), 79.0),
            _weight(datetime(2026, 3, 9, 7, 0), 78.0),
        ]
        assert [p.value for p in weekly_weight_trend(entries)] == [79.5, 78.0]

    def test_change_rate_per_week(self) -> None:
        entries = [
            _weight(datetime(2026, 3, 16, 7, 0), 78.6),
            _weight(datetime(2026, 3, 2, 7, 0), 80.0),
            _weight(datetime(2026, 3, 9, 7, 0), 79.3),
        ]
        assert weight_change_rate(entries) == pytest.approx(-0.7)

    def test_change_rate_needs_two_days(self) -> None:
        entries = [
            _weight(datetime(2026, 3, 2, 7, 0), 80.0),
            _weight(datetime(2026, 3, 2, 21, 0), 80.6),
        ]
        assert weight_change_rate(entries) is None
        assert weight_change_rate([]) is None
