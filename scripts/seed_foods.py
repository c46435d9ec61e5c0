"""
Seed common foods into the `food_items` catalog.

Usage
-----

    # default hard-coded set of staples
    python -m scripts.seed_foods

    # custom list (same keys as the defaults) in a JSON file
    python -m scripts.seed_foods --file path/to/foods.json

Foods whose name already exists in the catalog are skipped.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List

from sqlalchemy import select

from services.db import FoodItem, create_tables, session_scope

_LOG = logging.getLogger(__name__)

# ────────────────────────────────────────────────────────────────────
DEFAULT_FOODS: List[dict[str, Any]] = [
    {"name": "Boiled Egg", "calories": 78, "protein": 6.3, "carbs": 0.6, "fat": 5.3,
     "serving_size": 1, "serving_unit": "egg"},
    {"name": "Grilled Chicken Breast", "calories": 165, "protein": 31, "carbs": 0, "fat": 3.6,
     "serving_size": 100, "serving_unit": "g"},
    {"name": "Cooked White Rice", "calories": 130, "protein": 2.7, "carbs": 28, "fat": 0.3,
     "serving_size": 100, "serving_unit": "g"},
    {"name": "Hummus", "calories": 166, "protein": 7.9, "carbs": 14.3, "fat": 9.6,
     "serving_size": 100, "serving_unit": "g"},
    {"name": "Banana", "calories": 105, "protein": 1.3, "carbs": 27, "fat": 0.4,
     "serving_size": 1, "serving_unit": "medium"},
    {"name": "Greek Yogurt, plain", "calories": 59, "protein": 10, "carbs": 3.6, "fat": 0.4,
     "serving_size": 100, "serving_unit": "g"},
    {"name": "Falafel", "calories": 57, "protein": 2.3, "carbs": 5.4, "fat": 3,
     "serving_size": 1, "serving_unit": "piece"},
]


async def seed(foods: list[dict[str, Any]]) -> int:
    """Insert `foods`, skipping names already present. Returns rows inserted."""
    await create_tables()
    inserted = 0
    async with session_scope() as db:
        existing = set((await db.execute(select(FoodItem.name))).scalars())
        for f in foods:
            if f["name"] in existing:
                continue
            db.add(FoodItem(**f))
            existing.add(f["name"])
            inserted += 1
        await db.commit()
    return inserted


def _load(path: Path | None) -> list[dict[str, Any]]:
    if path is None:
        return DEFAULT_FOODS
    return json.loads(path.read_text(encoding="utf-8"))


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the local food catalog")
    ap.add_argument("--file", type=Path, help="JSON list of foods")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO)
    count = asyncio.run(seed(_load(args.file)))
    _LOG.info("inserted %d foods", count)


if __name__ == "__main__":
    main()
