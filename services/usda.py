"""
services/usda.py
────────────────────────────────────────────────────────────────────────
USDA FoodData Central lookups.

Nutrient ids used:

    1008 energy (kcal) · 1003 protein · 1004 total fat · 1005 carbohydrate

Every public call degrades to an empty result instead of raising, the
catalog treats USDA as an optional second source.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from config import settings

_LOG = logging.getLogger(__name__)

USDA_PREFIX = "usda-"
DATA_TYPES = "Branded,Foundation,SR Legacy"

_NUTRIENTS = {"calories": 1008, "protein": 1003, "fat": 1004, "carbs": 1005}


def _search_value(food: dict[str, Any], nutrient_id: int) -> float:
    for n in food.get("foodNutrients") or []:
        if n.get("nutrientId") == nutrient_id or n.get("nutrientNumber") == str(nutrient_id):
            return float(n.get("value") or 0)
    return 0.0


def _detail_value(food: dict[str, Any], nutrient_id: int) -> float:
    for n in food.get("foodNutrients") or []:
        if (n.get("nutrient") or {}).get("id") == nutrient_id:
            return float(n.get("amount") or 0)
    return 0.0


def normalize_search_hit(food: dict[str, Any]) -> dict[str, Any] | None:
    """Map one `/foods/search` hit to a catalog entry; None if unusable."""
    values = {k: _search_value(food, nid) for k, nid in _NUTRIENTS.items()}
    if not food.get("description") or not any(values.values()):
        return None
    return {
        "id": f"{USDA_PREFIX}{food.get('fdcId')}",
        "name": food["description"],
        **values,
        "serving_size": 100.0,
        "serving_unit": "g",
    }


async def search_foods(query: str, page_size: int = 20) -> List[Dict[str, Any]]:
    if not settings.usda_api_key:
        _LOG.warning("USDA_API_KEY is not configured, skipping USDA search")
        return []

    params = {
        "api_key": settings.usda_api_key,
        "query": query,
        "pageSize": page_size,
        "dataType": DATA_TYPES,
    }
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as http:
            r = await http.get(f"{settings.usda_base_url}/foods/search", params=params)
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as exc:
        _LOG.error("USDA search failed: %s", exc)
        return []

    hits = (normalize_search_hit(f) for f in data.get("foods") or [])
    return [h for h in hits if h is not None]


async def fetch_food(fdc_id: str) -> Dict[str, Any] | None:
    """Details for one FDC id, normalised to a 100 g serving."""
    if not settings.usda_api_key:
        return None

    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as http:
            r = await http.get(
                f"{settings.usda_base_url}/food/{fdc_id}",
                params={"api_key": settings.usda_api_key},
            )
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as exc:
        _LOG.error("USDA lookup for %s failed: %s", fdc_id, exc)
        return None

    if not data.get("description"):
        return None
    return {
        "name": data["description"],
        **{k: _detail_value(data, nid) for k, nid in _NUTRIENTS.items()},
        "serving_size": 100.0,
        "serving_unit": "g",
    }
