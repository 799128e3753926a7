"""Enumerations and training constants for the fit engine.

Progression thresholds follow the reps-in-reserve (RIR) convention:
0 = failure, higher = easier.
"""

from enum import Enum, IntEnum, auto


class ExerciseCategory(str, Enum):
    """Muscle-group tag for an exercise. CUSTOM covers user-added entries."""

    CHEST = "CHEST"
    BACK = "BACK"
    LEGS = "LEGS"
    SHOULDERS = "SHOULDERS"
    BICEPS = "BICEPS"
    TRICEPS = "TRICEPS"
    CUSTOM = "CUSTOM"

    @classmethod
    def parse(cls, value: str | None) -> "ExerciseCategory":
        """Map a stored category string to a member; unknown tags become CUSTOM."""
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.CUSTOM


class MesocyclePhase(IntEnum):
    """Phases of a mesocycle in chronological order.

    BASE accumulates volume, BUILD raises intensity, PEAK is near-maximal
    effort and DELOAD is a recovery week with reduced load.
    """

    BASE = auto()
    BUILD = auto()
    PEAK = auto()
    DELOAD = auto()


# ---------------------------------------------------------------------------
# Progressive overload
# ---------------------------------------------------------------------------

DEFAULT_TARGET_WEIGHT = 50.0  # Starting point for an exercise with no history
DEFAULT_TARGET_REPS = 8
WEIGHT_INCREMENT = 2.5  # Smallest plate jump, also the rounding grid
MAX_TARGET_REPS = 12  # Rep progression cap before weight should go up
HARD_SET_MAX_RIR = 2  # Sets at or below this RIR count as progression signal
INCREASE_WEIGHT_MAX_RIR = 1  # At or past failure: add weight
ADD_REP_MIN_RIR = 3  # Too easy: add a rep
MAX_RIR = 5

WORKING_SETS_PER_SESSION = 4
DEFAULT_STARTING_RIR = 3  # Estimate shown for a set that has not been logged yet


# ---------------------------------------------------------------------------
# Mesocycle
# ---------------------------------------------------------------------------

BUILT_IN_CYCLE_WEEKS = 8
DAYS_PER_WEEK = 7
MIN_TEMPLATE_WEEKS = 5
MAX_TEMPLATE_WEEKS = 8

UNKNOWN_EXERCISE_NAME = "unknown"


# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------

NUTRITION_BASIS_UNITS = 100.0  # Lookup data is normalised per 100 g / 100 ml
KCAL_PER_KJ = 1 / 4.184
