from __future__ import annotations

from pydantic import BaseModel, Field


class FoodOut(BaseModel):
    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: float | None = None
    serving_unit: str | None = None


class CustomFoodIn(BaseModel):
    name: str | None = None
    calories: float | None = Field(None, ge=0)
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)
    serving_size: float | None = Field(None, ge=0)
    serving_unit: str | None = None
