"""Re-export individual schema modules for easy imports."""

from .user import LoginIn, ProfileOut, RegisterIn, UserOut
from .food import CustomFoodIn, FoodOut
from .diary import DiaryLogIn
from .chat import ChatIn, MessageOut, RecommendIn

__all__ = [
    "RegisterIn",
    "LoginIn",
    "UserOut",
    "ProfileOut",
    "FoodOut",
    "CustomFoodIn",
    "DiaryLogIn",
    "ChatIn",
    "MessageOut",
    "RecommendIn",
]
