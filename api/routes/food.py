# api/routes/food.py
from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.food_catalog import find_by_barcode, food_to_dict, search_local
from services import usda
from services.auth import current_user
from services.db import FoodItem, get_session
from api.routes.schemas import CustomFoodIn, FoodOut

router = APIRouter()


@router.get("", summary="Search the local catalog and USDA")
async def search_food(
    search: str = "",
    db: AsyncSession = Depends(get_session),
) -> dict[str, list[FoodOut]]:
    query = search.strip()
    if not query:
        return {"foods": await search_local(db, "")}

    local, remote = await asyncio.gather(
        search_local(db, query),
        usda.search_foods(query),
    )
    return {"foods": [*local, *remote]}


@router.get("/barcode/{upc}", summary="Find a catalog item by barcode")
async def by_barcode(
    upc: str,
    db: AsyncSession = Depends(get_session),
) -> dict[str, FoodOut]:
    if not upc.strip():
        raise HTTPException(400, "Barcode (UPC) is required")
    item = await find_by_barcode(db, upc.strip())
    if item is None:
        raise HTTPException(404, "Food item not found for this barcode")
    return {"food": food_to_dict(item)}


@router.post("/custom", status_code=status.HTTP_201_CREATED)
async def create_custom(
    body: CustomFoodIn,
    _: dict[str, Any] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    if not body.name or not body.calories or not body.serving_unit:
        raise HTTPException(400, "Missing required fields (Name, Calories, Serving Unit).")

    item = FoodItem(
        name=body.name.strip(),
        calories=body.calories,
        protein=body.protein or 0.0,
        carbs=body.carbs or 0.0,
        fat=body.fat or 0.0,
        serving_size=body.serving_size or 1.0,
        serving_unit=body.serving_unit,
    )
    db.add(item)
    await db.commit()
    return {"message": "Custom food saved", "foodId": item.id}
