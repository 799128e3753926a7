"""Fixtures with realistic Open Food Facts API response dicts for testing."""

from __future__ import annotations

import pytest


@pytest.fixture
def off_product_payload() -> dict:
    """Realistic /api/v2/product/{barcode}.json response for a found product."""
    return {
        "code": "3017620422003",
        "status": 1,
        "status_verbose": "product found",
        "product": {
            "product_name": "Nutella",
            "generic_name": "Hazelnut spread with cocoa",
            "brands": "Ferrero",
            "serving_quantity": "15",
            "serving_size": "15 g",
            "nutriments": {
                "energy-kcal_100g": 539,
                "energy_100g": 2252,
                "proteins_100g": 6.3,
                "carbohydrates_100g": 57.5,
                "sugars_100g": 56.3,
                "fat_100g": 30.9,
                "salt_100g": 0.107,
            },
        },
    }


@pytest.fixture
def off_not_found_payload() -> dict:
    """Response body for an unknown barcode."""
    return {
        "code": "0000000000000",
        "status": 0,
        "status_verbose": "product not found",
    }


@pytest.fixture
def off_kj_only_product() -> dict:
    """Product that only reports energy in kJ and has no serving size."""
    return {
        "product_name": "  ",
        "generic_name": "Rolled oats",
        "nutriments": {
            "energy_100g": 1580,
            "proteins_100g": "13.5",
            "carbohydrates_100g": 58.7,
        },
    }
