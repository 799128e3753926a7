"""Shared test fixtures: a settable clock, an in-memory store and a tracker over both."""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Callable

import pytest

from fit_engine.storage import MemoryStore
from fit_engine.tracker import FitTracker

# 2026-01-05 is a Monday in calendar week 2 (built-in week 2: Squat + Bench Press)
MONDAY = datetime(2026, 1, 5, 18, 30)


class FakeClock:
    """Settable stand-in for datetime.now."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(MONDAY)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def tracker(store, clock, id_factory) -> FitTracker:
    return FitTracker(store, clock=clock, id_factory=id_factory)
