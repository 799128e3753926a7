"""Lenient parsing of user-entered numbers.

Form fields arrive as strings (or numbers from widgets). Anything that is
not a finite number above zero is rejected by returning None so the caller
can drop the action without raising.
"""

from __future__ import annotations

import math
from typing import Any


def parse_number(value: Any) -> float | None:
    """Parse *value* as a finite float; None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_positive(value: Any) -> float | None:
    """Parse *value* as a number strictly greater than zero, else None."""
    number = parse_number(value)
    if number is None or number <= 0:
        return None
    return number


def parse_non_negative(value: Any) -> float | None:
    """Parse *value* as a number >= 0, else None."""
    number = parse_number(value)
    if number is None or number < 0:
        return None
    return number
