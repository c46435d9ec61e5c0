from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Goal(str, Enum):
    lose_weight = "lose_weight"
    gain_weight = "gain_weight"
    maintenance = "maintenance"


class Gender(str, Enum):
    male = "male"
    female = "female"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"


class RegisterIn(BaseModel):
    """Signup body, camelCase keys as sent by the web client."""
    name: str | None = None
    email: str | None = None
    password: str | None = None
    goal: Goal | None = None
    age: int | None = Field(None, gt=0)
    current_weight: float | None = Field(None, alias="currentWeight", gt=0)
    target_weight: float | None = Field(None, alias="targetWeight", gt=0)
    gender: Gender | None = None
    activity_level: ActivityLevel | None = Field(None, alias="activityLevel")
    height: float | None = Field(None, gt=0)

    model_config = ConfigDict(populate_by_name=True)


class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    goal: str
    age: int | None = None
    current_weight: float | None = None
    target_weight: float | None = None
    gender: str | None = None
    activity_level: str | None = None
    height: float | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileOut(UserOut):
    allergies: list[str] = []
    daily_calories: int | None = None
