from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from services.db import DiaryLog, FoodItem

MACROS = ("calories", "protein", "carbs", "fat")


def _day_query(user_id: int, day: date):
    return (
        select(DiaryLog, FoodItem)
        .join(FoodItem, DiaryLog.food_id == FoodItem.id)
        .where(DiaryLog.user_id == user_id, DiaryLog.log_date == day)
        .order_by(DiaryLog.created_at, DiaryLog.id)
    )


def log_to_dict(log: DiaryLog) -> Dict[str, Any]:
    return {
        "id": log.id,
        "user_id": log.user_id,
        "food_id": log.food_id,
        "meal_type": log.meal_type,
        "quantity": log.quantity,
        "log_date": log.log_date.isoformat(),
        "created_at": log.created_at.isoformat() if log.created_at else None,
    }


async def entries_for_day(db: AsyncSession, user_id: int, day: date) -> List[Dict[str, Any]]:
    """Logs of one day joined with their food, oldest first."""
    rows = (await db.execute(_day_query(user_id, day))).all()
    out: List[Dict[str, Any]] = []
    for log, food in rows:
        entry = log_to_dict(log)
        del entry["user_id"]
        entry.update(
            name=food.name,
            calories=food.calories,
            protein=food.protein,
            carbs=food.carbs,
            fat=food.fat,
            serving_size=food.serving_size,
            serving_unit=food.serving_unit,
        )
        out.append(entry)
    return out


async def find_duplicate(
    db: AsyncSession, user_id: int, food_id: int, meal_type: str, day: date
) -> DiaryLog | None:
    return (
        await db.execute(
            select(DiaryLog)
            .where(
                DiaryLog.user_id == user_id,
                DiaryLog.food_id == food_id,
                DiaryLog.meal_type == meal_type,
                DiaryLog.log_date == day,
            )
            .limit(1)
        )
    ).scalar_one_or_none()


async def daily_totals(db: AsyncSession, user_id: int, day: date) -> Dict[str, float]:
    """Macros eaten on `day`: per-serving values × logged quantity."""
    totals = {k: 0.0 for k in MACROS}
    for log, food in (await db.execute(_day_query(user_id, day))).all():
        qty = log.quantity or 0
        for k in MACROS:
            totals[k] += (getattr(food, k) or 0) * qty
    return {k: round(v, 1) for k, v in totals.items()}
