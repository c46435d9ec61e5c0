# api/routes/chat.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from core.dietitian import get_ai_reply, transcript
from services.auth import current_user
from services.db import AI_USER_ID, Message, get_session
from api.routes.schemas import ChatIn, MessageOut

router = APIRouter()


@router.get("", summary="Full transcript with the AI dietitian")
async def get_messages(
    auth: dict[str, Any] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, list[MessageOut]]:
    rows = await transcript(db, auth["id"])
    return {"messages": [MessageOut.model_validate(m) for m in rows]}


@router.post("", summary="Send a message, get the dietitian's reply")
async def post_message(
    body: ChatIn,
    auth: dict[str, Any] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, str]:
    text = (body.message or "").strip()
    if not text:
        raise HTTPException(400, "Message cannot be empty")

    user_id = auth["id"]
    sent = Message(sender_id=user_id, receiver_id=AI_USER_ID, message=text)
    db.add(sent)
    await db.commit()

    reply = await get_ai_reply(db, user_id, text, before_id=sent.id)

    db.add(Message(sender_id=AI_USER_ID, receiver_id=user_id, message=reply))
    await db.commit()
    return {"reply": reply}
