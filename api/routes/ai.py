# api/routes/ai.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from core.dietitian import get_recommendation
from services.auth import current_user
from services.db import get_session
from api.routes.schemas import RecommendIn

router = APIRouter()

# kinds that make sense without a free-text query
_DEFAULT_QUERIES = {
    "plan": "Please create my meal plan for today.",
    "challenge": "Please create a challenge for me.",
}


@router.post("/recommend", summary="One-shot plan / recipe / challenge / answer")
async def recommend(
    body: RecommendIn,
    auth: dict[str, Any] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, str]:
    query = (body.query or "").strip() or _DEFAULT_QUERIES.get(body.type or "", "")
    if not query:
        raise HTTPException(400, "Query is required")

    reply = await get_recommendation(db, auth["id"], query, body.type)
    return {"reply": reply}
