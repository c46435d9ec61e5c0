"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Daily calorie target:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity multiplier)
3. Goal offset (±400 kcal)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping

Logger = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
}

GOAL_OFFSETS = {
    "lose_weight": -400,
    "gain_weight": 400,
    "maintenance": 0,
}


# ──────────────────────────────────────────────────────────────────────
#  Profile dataclass
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class BodyProfile:
    age: int
    gender: str            # "male" | "female"
    weight_kg: float
    height_cm: float
    activity_level: str    # key of ACTIVITY_MULTIPLIERS
    goal: str | None = None

    @classmethod
    def from_row(cls, row: Any) -> "BodyProfile | None":
        """Build from a `users` row (or mapping); None when incomplete."""
        get = row.get if isinstance(row, Mapping) else lambda k: getattr(row, k, None)
        age, height, weight = get("age"), get("height"), get("current_weight")
        gender, activity = get("gender"), get("activity_level")
        if not (age and height and weight and gender and activity):
            return None
        if activity not in ACTIVITY_MULTIPLIERS:
            Logger.debug("unknown activity level %r", activity)
            return None
        return cls(
            age=int(age),
            gender=str(gender).lower(),
            weight_kg=float(weight),
            height_cm=float(height),
            activity_level=activity,
            goal=get("goal"),
        )


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionalCalculator:
    """Source-of-truth for the daily kcal target."""

    def bmr(self, p: BodyProfile) -> float:
        base = 10 * p.weight_kg + 6.25 * p.height_cm - 5 * p.age
        return base + (5 if p.gender == "male" else -161)

    def tdee(self, p: BodyProfile) -> float:
        return self.bmr(p) * ACTIVITY_MULTIPLIERS[p.activity_level]

    def daily_calories(self, p: BodyProfile) -> int:
        kcal = self.tdee(p) + GOAL_OFFSETS.get(p.goal or "", 0)
        return math.floor(kcal + 0.5)  # half up


_calc = NutritionalCalculator()


def estimate_calories(row: Any) -> int | None:
    """Daily kcal for a user row, or None if the profile is incomplete."""
    profile = BodyProfile.from_row(row)
    if profile is None:
        return None
    return _calc.daily_calories(profile)
