"""High-level nutrition lookup client for the Open Food Facts product API.

All network I/O for barcode lookups lives here. Requests are retried with
exponential backoff when the service rate-limits us.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from fit_engine.models.nutrition import FoodData
from food_client.exceptions import FoodAPIError, FoodRateLimitError, ProductNotFound
from food_client.product_mapper import is_found, map_product

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://world.openfoodfacts.org"
_DEFAULT_TIMEOUT_S = 10.0
_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2
_USER_AGENT = "fit-tracker/0.1 (personal use)"


class FoodClient:
    """Facade for barcode → nutrition lookups."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = _DEFAULT_TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", _USER_AGENT)

    def lookup_barcode(self, barcode: str) -> FoodData:
        """Fetch nutrition facts (per 100 g / 100 ml) for a product barcode.

        Raises:
            ValueError: If the barcode is blank or not numeric.
            ProductNotFound: If the database has no such product.
            FoodAPIError: On transport errors or unusable responses.
            FoodRateLimitError: If still rate-limited after all retries.
        """
        code = (barcode or "").strip()
        if not code.isdigit():
            raise ValueError(f"Barcode must be numeric, got {barcode!r}")

        payload = self._get_json(f"/api/v2/product/{code}.json")
        if not is_found(payload):
            logger.info("Barcode %s not found", code)
            raise ProductNotFound(code)

        food = map_product(payload["product"])
        logger.info("Barcode %s -> %s (%.0f kcal/100)", code, food.name, food.calories)
        return food

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get_json(self, path: str) -> Any:
        """GET *path* with retry + exponential backoff on 429.

        Returns None for 404 so the caller can report a missing product.
        """
        url = f"{self._base_url}{path}"
        for attempt in range(_MAX_RETRIES):
            try:
                resp = self._session.get(url, timeout=self._timeout_s)
            except requests.RequestException as exc:
                raise FoodAPIError(f"Request to {url} failed: {exc}") from exc

            if resp.status_code == 429:
                wait = _BASE_BACKOFF_S * (2 ** attempt)
                logger.warning(
                    "Rate limited (attempt %d/%d), retrying in %ds",
                    attempt + 1,
                    _MAX_RETRIES,
                    wait,
                )
                time.sleep(wait)
                continue
            if resp.status_code == 404:
                return None
            if resp.status_code >= 400:
                raise FoodAPIError(
                    f"Lookup failed with HTTP {resp.status_code}",
                    status_code=resp.status_code,
                )
            try:
                return resp.json()
            except ValueError as exc:
                raise FoodAPIError(
                    "Lookup returned invalid JSON", status_code=resp.status_code
                ) from exc

        raise FoodRateLimitError(f"Rate limited after {_MAX_RETRIES} retries")
