"""Pure functions mapping Open Food Facts product payloads to FoodData.

No I/O. All nutrition values are per 100 g / 100 ml and rounded to whole
numbers; missing values become 0.
"""

from __future__ import annotations

from typing import Any, Optional

from fit_engine.math.overload import round_half_up
from fit_engine.models.enums import KCAL_PER_KJ, NUTRITION_BASIS_UNITS
from fit_engine.models.nutrition import FoodData

UNKNOWN_PRODUCT_NAME = "Unknown product"


def is_found(payload: Any) -> bool:
    """True when a product response carries a product (``status == 1``)."""
    return (
        isinstance(payload, dict)
        and payload.get("status") == 1
        and isinstance(payload.get("product"), dict)
    )


def map_product(product: dict[str, Any]) -> FoodData:
    """Map the ``product`` object of a lookup response to FoodData."""
    nutriments = product.get("nutriments") or {}
    return FoodData(
        name=_extract_name(product),
        calories=round_half_up(_extract_calories(nutriments)),
        protein=round_half_up(_number(nutriments.get("proteins_100g")) or 0.0),
        carbs=round_half_up(_number(nutriments.get("carbohydrates_100g")) or 0.0),
        fat=round_half_up(_number(nutriments.get("fat_100g")) or 0.0),
        serving=round_half_up(_extract_serving(product, nutriments)),
    )


# ---------------------------------------------------------------------------
# Internal extractors: each handles missing or malformed input
# ---------------------------------------------------------------------------


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _extract_name(product: dict[str, Any]) -> str:
    for key in ("product_name", "generic_name"):
        value = product.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return UNKNOWN_PRODUCT_NAME


def _extract_calories(nutriments: dict[str, Any]) -> float:
    """kcal per 100 units, falling back to the kJ energy field."""
    kcal = _number(nutriments.get("energy-kcal_100g"))
    if kcal:
        return kcal
    kj = _number(nutriments.get("energy_100g"))
    if kj:
        return kj * KCAL_PER_KJ
    return 0.0


def _extract_serving(product: dict[str, Any], nutriments: dict[str, Any]) -> float:
    """Serving size in g/ml used as the default quantity, else 100."""
    for source in (product, nutriments):
        serving = _number(source.get("serving_quantity"))
        if serving and serving > 0:
            return serving
    return NUTRITION_BASIS_UNITS
