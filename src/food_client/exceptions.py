"""Custom exception hierarchy for the nutrition lookup client."""

from __future__ import annotations


class FoodClientError(Exception):
    """Base exception for all food_client errors."""


class ProductNotFound(FoodClientError):
    """The barcode is not in the product database."""

    def __init__(self, barcode: str) -> None:
        super().__init__(f"No product found for barcode {barcode}")
        self.barcode = barcode


class FoodAPIError(FoodClientError):
    """The lookup service returned an error or an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FoodRateLimitError(FoodAPIError):
    """HTTP 429 — too many requests."""

    def __init__(self, message: str = "Rate limited by the food database") -> None:
        super().__init__(message, status_code=429)
