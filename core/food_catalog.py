"""
core/food_catalog.py
────────────────────────────────────────────────────────────────────────
Local food catalog plus the USDA cache-fill.

A USDA food is referenced by the string id ``usda-<fdcId>``. The first
time such an id is logged its details are fetched once and stored as a
local row whose ``barcode_upc`` is that id, later lookups hit the row.
There is no eviction, and two concurrent misses may insert twice.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services import usda
from services.db import FoodItem

_LOG = logging.getLogger(__name__)

SEARCH_LIMIT = 20


def food_to_dict(row: FoodItem) -> Dict[str, Any]:
    return {
        "id": str(row.id),
        "name": row.name,
        "calories": float(row.calories or 0),
        "protein": float(row.protein or 0),
        "carbs": float(row.carbs or 0),
        "fat": float(row.fat or 0),
        "serving_size": float(row.serving_size or 0),
        "serving_unit": row.serving_unit,
    }


async def search_local(db: AsyncSession, query: str) -> List[Dict[str, Any]]:
    """Case-insensitive name search, errors degrade to an empty list."""
    stmt = (
        select(FoodItem)
        .where(func.lower(FoodItem.name).like(f"%{query.lower()}%"))
        .order_by(FoodItem.id)
        .limit(SEARCH_LIMIT)
    )
    try:
        rows = (await db.execute(stmt)).scalars().all()
    except SQLAlchemyError:
        _LOG.exception("local food search failed")
        return []
    return [food_to_dict(r) for r in rows]


async def find_by_barcode(db: AsyncSession, upc: str) -> FoodItem | None:
    return (
        await db.execute(select(FoodItem).where(FoodItem.barcode_upc == upc).limit(1))
    ).scalar_one_or_none()


async def ensure_food_exists(db: AsyncSession, food_id: int | str) -> int | None:
    """Resolve `food_id` to a local food id, filling from USDA on a miss."""
    if isinstance(food_id, int) or not str(food_id).startswith(usda.USDA_PREFIX):
        try:
            local_id = int(food_id)
        except (TypeError, ValueError):
            return None
        return local_id if await db.get(FoodItem, local_id) else None

    key = str(food_id)
    cached = await find_by_barcode(db, key)
    if cached is not None:
        return cached.id

    details = await usda.fetch_food(key[len(usda.USDA_PREFIX):])
    if not details:
        return None

    item = FoodItem(barcode_upc=key, **details)
    db.add(item)
    await db.flush()
    _LOG.info("cached USDA food %s as local id %s", key, item.id)
    return item.id
