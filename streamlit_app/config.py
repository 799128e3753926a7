"""Environment-variable-based configuration for the tracker app."""

from __future__ import annotations

import os
from pathlib import Path

DATA_FILE: Path = Path(
    os.environ.get("FIT_TRACKER_DATA_FILE", "~/.fit_tracker/store.json")
).expanduser()
FOOD_API_BASE_URL: str = os.environ.get(
    "FOOD_API_BASE_URL", "https://world.openfoodfacts.org"
)
FOOD_API_TIMEOUT_S: float = float(os.environ.get("FOOD_API_TIMEOUT_S", "10"))
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
