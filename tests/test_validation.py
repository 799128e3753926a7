"""Tests for user-input parsing and exercise catalogue lookups."""

import pytest

from fit_engine.catalog import (
    DEFAULT_EXERCISES,
    display_name,
    find_by_id,
    find_by_name,
    group_by_category,
)
from fit_engine.models.enums import ExerciseCategory
from fit_engine.validation import parse_non_negative, parse_number, parse_positive


class TestParseNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [("80", 80.0), (" 72.5 ", 72.5), ("62,5", 62.5), (3, 3.0), (0.5, 0.5)],
    )
    def test_valid(self, raw, expected) -> None:
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "  ", "abc", True, "nan", "inf", [1]])
    def test_invalid(self, raw) -> None:
        assert parse_number(raw) is None

    def test_positive(self) -> None:
        assert parse_positive("0") is None
        assert parse_positive("-1") is None
        assert parse_positive("0.1") == 0.1

    def test_non_negative(self) -> None:
        assert parse_non_negative(0) == 0.0
        assert parse_non_negative(-0.5) is None


class TestCatalog:
    def test_twelve_seed_exercises_with_unique_ids(self) -> None:
        assert len(DEFAULT_EXERCISES) == 12
        assert len({e.id for e in DEFAULT_EXERCISES}) == 12

    def test_find_by_id(self) -> None:
        assert find_by_id(DEFAULT_EXERCISES, "2").name == "Squat"
        assert find_by_id(DEFAULT_EXERCISES, "99") is None

    def test_find_by_name_is_exact(self) -> None:
        assert find_by_name(DEFAULT_EXERCISES, " bench press ").id == "1"
        # No partial matches: "Row" must not pick "Barbell Row"
        assert find_by_name(DEFAULT_EXERCISES, "Row") is None

    def test_display_name_of_orphan(self) -> None:
        assert display_name(DEFAULT_EXERCISES, "gone") == "unknown"

    def test_group_by_category_accepts_generators(self) -> None:
        groups = group_by_category(e for e in DEFAULT_EXERCISES)
        assert list(groups)[0] == ExerciseCategory.CHEST
        assert sum(len(v) for v in groups.values()) == 12
        assert ExerciseCategory.CUSTOM not in groups
