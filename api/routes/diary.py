# api/routes/diary.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.diary import entries_for_day, find_duplicate, log_to_dict
from core.food_catalog import ensure_food_exists
from services.auth import current_user
from services.db import DiaryLog, get_session
from api.routes.schemas import DiaryLogIn

router = APIRouter()
_LOG = logging.getLogger(__name__)


@router.get("", summary="A user's diary for one day")
async def get_diary(
    raw_date: str | None = Query(None, alias="date"),
    auth: dict[str, Any] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, list[dict[str, Any]]]:
    if not raw_date:
        raise HTTPException(400, "Date is required")
    try:
        day = _parse_day(raw_date)
    except ValueError as exc:
        raise HTTPException(400, "Date must be YYYY-MM-DD") from exc

    return {"diary": await entries_for_day(db, auth["id"], day)}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Log a food for today")
async def log_food(
    body: DiaryLogIn,
    auth: dict[str, Any] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    if not body.food_id or not body.meal_type:
        raise HTTPException(400, "Required fields missing")

    local_id = await ensure_food_exists(db, body.food_id)
    if not local_id:
        raise HTTPException(400, "Invalid food item")

    today = date.today()
    if await find_duplicate(db, auth["id"], local_id, body.meal_type, today):
        # keep a freshly cached USDA row even though nothing is logged
        await db.commit()
        raise HTTPException(409, f"This item is already in your {body.meal_type} list.")

    log = DiaryLog(
        user_id=auth["id"],
        food_id=local_id,
        meal_type=body.meal_type,
        quantity=body.quantity,
        log_date=today,
    )
    db.add(log)
    await db.commit()
    await db.refresh(log)
    _LOG.debug("user %s logged food %s for %s", auth["id"], local_id, body.meal_type)
    return {"message": "Food logged successfully", "log": log_to_dict(log)}


def _parse_day(raw: str) -> date:
    return date.fromisoformat(raw.strip())
