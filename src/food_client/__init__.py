"""Nutrition lookup client — all food-database network I/O lives here."""

from food_client.client import FoodClient
from food_client.exceptions import (
    FoodAPIError,
    FoodClientError,
    FoodRateLimitError,
    ProductNotFound,
)
from food_client.product_mapper import map_product

__all__ = [
    "FoodClient",
    "FoodAPIError",
    "FoodClientError",
    "FoodRateLimitError",
    "ProductNotFound",
    "map_product",
]
