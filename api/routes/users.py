from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from core.allergies import decode_allergies
from core.nutrition_calc import estimate_calories
from services.auth import current_user
from services.db import User, get_session
from api.routes.schemas import ProfileOut, UserOut

router = APIRouter()


@router.get("/me")
async def me(
    auth: dict[str, Any] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, ProfileOut]:
    usr = await db.get(User, auth["id"])
    if usr is None:
        raise HTTPException(status_code=404, detail="User not found")

    base = UserOut.model_validate(usr, from_attributes=True)
    profile = ProfileOut(
        **base.model_dump(),
        allergies=decode_allergies(usr.allergies),
        daily_calories=estimate_calories(usr),
    )
    return {"user": profile}
