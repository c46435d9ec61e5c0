"""
core/dietitian.py
────────────────────────────────────────────────────────────────────────
AI dietitian replies.

`get_ai_reply()` runs one chat turn:

  • profile + calorie target from the `users` row
  • allergies mentioned in the message are added to the stored list
  • hard allergy block, answered locally without calling Gemini
  • last few transcript rows as conversational memory
  • Gemini call, answer cleaned of markdown

`get_recommendation()` is the one-shot variant used by /ai/recommend.
Gemini failures never propagate, they turn into canned replies.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Tuple

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.allergies import (
    decode_allergies,
    detect_allergies,
    encode_allergies,
    enforce_allergy_rules,
    merge_allergies,
)
from core.diary import daily_totals
from core.intent import active_intent
from core.nutrition_calc import estimate_calories
from core.prompts import chat_system_prompt, recommend_system_prompt
from core.text_cleanup import sanitize_text
from services import gemini
from services.db import AI_USER_ID, Message, User

_LOG = logging.getLogger(__name__)

HISTORY_TURNS = 5

UNAVAILABLE_REPLY = "I am unavailable right now."
EMPTY_REPLY = "Please try again."
CONNECTION_REPLY = "I am having trouble connecting. Please try again."
RECOMMEND_FALLBACK = "I'm sorry, I couldn't generate a recommendation right now."

# fixed targets used when the profile is too sparse for the estimator
_LOSE_TARGET = 1800
_DEFAULT_TARGET = 2500


def conversation_filter(user_id: int):
    """Rows exchanged between `user_id` and the AI, in either direction."""
    return or_(
        and_(Message.sender_id == user_id, Message.receiver_id == AI_USER_ID),
        and_(Message.sender_id == AI_USER_ID, Message.receiver_id == user_id),
    )


async def transcript(db: AsyncSession, user_id: int) -> List[Message]:
    return list(
        (
            await db.execute(
                select(Message)
                .where(conversation_filter(user_id))
                .order_by(Message.created_at, Message.id)
            )
        ).scalars()
    )


async def recent_history(
    db: AsyncSession, user_id: int, limit: int = HISTORY_TURNS, before_id: int | None = None
) -> List[Tuple[str, str]]:
    """Last `limit` turns as (role, text), oldest first."""
    stmt = select(Message).where(conversation_filter(user_id))
    if before_id is not None:
        stmt = stmt.where(Message.id < before_id)
    rows = (
        await db.execute(
            stmt.order_by(Message.created_at.desc(), Message.id.desc()).limit(limit)
        )
    ).scalars().all()
    return [
        ("model" if m.sender_id == AI_USER_ID else "user", m.message)
        for m in reversed(rows)
    ]


async def get_ai_reply(
    db: AsyncSession, user_id: int, query: str, before_id: int | None = None
) -> str:
    if not gemini.is_configured():
        return UNAVAILABLE_REPLY

    user = await db.get(User, user_id)
    goal = user.goal if user else None
    calories = estimate_calories(user) if user else None
    saved = decode_allergies(user.allergies) if user else []

    # 1. remember allergies the user just told us about
    allergies = saved
    detected = detect_allergies(query)
    if detected and user is not None:
        allergies = merge_allergies(saved, detected)
        if allergies != saved:
            user.allergies = encode_allergies(allergies)
            await db.commit()
            _LOG.info("user %s allergies now %s", user_id, allergies)

    # 2. hard block
    violation = enforce_allergy_rules(query, allergies)
    if violation:
        return violation

    # 3. memory + prompt
    history = await recent_history(db, user_id, before_id=before_id)
    prompt = chat_system_prompt(active_intent(query, goal), calories, allergies)

    try:
        raw = await gemini.generate_reply(prompt, query, history)
    except Exception:
        _LOG.exception("Gemini chat call failed for user %s", user_id)
        return CONNECTION_REPLY
    return sanitize_text(raw) if raw else EMPTY_REPLY


def target_calories(user: User | None) -> int:
    estimated = estimate_calories(user) if user else None
    if estimated:
        return estimated
    return _LOSE_TARGET if user and user.goal == "lose_weight" else _DEFAULT_TARGET


async def get_recommendation(
    db: AsyncSession, user_id: int, query: str, kind: str | None
) -> str:
    user = await db.get(User, user_id)
    profile: Dict[str, Any] = (
        {
            "goal": user.goal,
            "age": user.age,
            "gender": user.gender,
            "activity_level": user.activity_level,
        }
        if user
        else {}
    )
    totals = await daily_totals(db, user_id, date.today())
    prompt = recommend_system_prompt(profile, target_calories(user), kind, query, totals)

    if not gemini.is_configured():
        _LOG.warning("GEMINI_API_KEY missing, serving fallback recommendation")
        return RECOMMEND_FALLBACK
    try:
        raw = await gemini.generate_reply(prompt, query)
    except Exception:
        _LOG.exception("Gemini recommendation call failed for user %s", user_id)
        return RECOMMEND_FALLBACK
    return sanitize_text(raw) if raw else RECOMMEND_FALLBACK
