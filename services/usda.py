# services/usda.py
"""
USDA FoodData Central lookup – search by name, return rough nutrient
estimates per food.  Only the four numbers we log are extracted; anything
USDA does not report stays ``None``.
"""
from __future__ import annotations

import logging
from typing import Any, AsyncGenerator

import httpx
from pydantic import BaseModel

from config import settings

_LOG = logging.getLogger(__name__)

USDA_SEARCH_URL = "https://api.nal.usda.gov/fdc/v1/foods/search"

# first matching name wins
_NUTRIENT_NAMES = {
    "calories": ("Energy",),
    "protein": ("Protein",),
    "carbs": ("Carbohydrate, by difference", "Carbohydrate"),
    "fat": ("Total lipid (fat)",),
}


class FoodLookupError(RuntimeError):
    """Upstream search failed (network error, non-2xx, or unreadable body)."""


class FoodHit(BaseModel):
    id: int
    name: str
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    unit: str = "kcal"


def _find_nutrient(food: dict[str, Any], names: tuple[str, ...]) -> float | None:
    nutrients = food.get("foodNutrients") or []
    for name in names:
        for n in nutrients:
            if n.get("nutrientName") == name:
                return n.get("value")
    return None


def parse_foods(payload: Any) -> list[FoodHit]:
    """Raise ``FoodLookupError`` when the reply is not the documented shape."""
    if not isinstance(payload, dict):
        raise FoodLookupError("unexpected USDA payload")
    try:
        return [
            FoodHit(
                id=food["fdcId"],
                name=food.get("description", ""),
                **{key: _find_nutrient(food, names) for key, names in _NUTRIENT_NAMES.items()},
            )
            for food in payload.get("foods") or []
        ]
    except (KeyError, TypeError, AttributeError, ValueError) as exc:
        raise FoodLookupError(f"malformed USDA food entry: {exc!r}") from exc


async def search_foods(
    http: httpx.AsyncClient,
    query: str,
    api_key: str,
    page_size: int | None = None,
) -> list[FoodHit]:
    params = {
        "api_key": api_key,
        "query": query,
        "pageSize": str(page_size or settings.usda_page_size),
    }
    try:
        r = await http.get(USDA_SEARCH_URL, params=params)
    except httpx.HTTPError as exc:
        _LOG.warning("USDA search %r failed: %s", query, exc)
        raise FoodLookupError(str(exc)) from exc

    if r.status_code >= 400:
        _LOG.warning("USDA search %r → HTTP %s", query, r.status_code)
        raise FoodLookupError(f"USDA API error {r.status_code}")

    try:
        payload = r.json()
    except ValueError as exc:
        _LOG.warning("USDA search %r returned a non-JSON body", query)
        raise FoodLookupError("USDA reply is not JSON") from exc
    return parse_foods(payload)


async def usda_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """FastAPI dependency: one short-lived client per search request."""
    async with httpx.AsyncClient(timeout=settings.usda_timeout_seconds) as http:
        yield http
