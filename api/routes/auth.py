from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth import create_token, hash_password, verify_password
from services.db import User, get_session
from api.routes.schemas import LoginIn, RegisterIn, UserOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


async def _by_email(db: AsyncSession, email: str) -> User | None:
    return (
        await db.execute(select(User).where(User.email == email))
    ).scalar_one_or_none()


# ───────────────────────── register ─────────────────────────
@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterIn,
    db: AsyncSession = Depends(get_session),
) -> dict[str, str]:
    name = (body.name or "").strip()
    email = (body.email or "").strip().lower()
    if not (name and email and body.password and body.goal):
        raise HTTPException(400, "Please provide all required fields.")

    if await _by_email(db, email):
        raise HTTPException(409, "Email already exists.")

    user = User(
        name=name,
        email=email,
        password=hash_password(body.password),
        goal=body.goal.value,
        age=body.age,
        current_weight=body.current_weight,
        target_weight=body.target_weight,
        gender=body.gender.value if body.gender else None,
        activity_level=body.activity_level.value if body.activity_level else None,
        height=body.height,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # lost a race with a concurrent signup for the same address
        await db.rollback()
        raise HTTPException(409, "Email already exists.") from exc

    _LOG.info("registered user %s", user.id)
    return {"message": "User registered successfully!"}


# ───────────────────────── login ────────────────────────────
@router.post("/login")
async def login(
    body: LoginIn,
    db: AsyncSession = Depends(get_session),
) -> dict:
    if not body.email or not body.password:
        raise HTTPException(400, "Please provide email and password.")

    user = await _by_email(db, body.email.strip().lower())
    if user is None:
        raise HTTPException(404, "User not found.")
    if not verify_password(body.password, user.password):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid credentials.")

    token = create_token(user.id, user.email, user.name)
    return {
        "message": "Login successful!",
        "user": UserOut.model_validate(user, from_attributes=True).model_dump(),
        "token": token,
    }
