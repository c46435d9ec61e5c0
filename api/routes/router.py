# api/routes/router.py
from fastapi import APIRouter

from . import ai, auth, chat, diary, food, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/user", tags=["Users"])
api_router.include_router(food.router, prefix="/food", tags=["Food"])
api_router.include_router(diary.router, prefix="/diary", tags=["Diary"])
api_router.include_router(chat.router, prefix="/chat", tags=["Chat"])
api_router.include_router(ai.router, prefix="/ai", tags=["AI"])
