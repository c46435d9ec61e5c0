from __future__ import annotations

from pydantic import BaseModel, Field


class DiaryLogIn(BaseModel):
    food_id: int | str | None = None     # local id or "usda-<fdcId>"
    meal_type: str | None = None
    quantity: float = Field(1, gt=0)
