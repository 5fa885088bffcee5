from __future__ import annotations

import datetime as dt
import logging
import math
import re
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.errors import InvalidInput, NotFound
from fittrack.jsonutil import loads_list
from fittrack.models import Food, FoodLog
from fittrack.repositories import FoodLogRepo, FoodRepo


logger = logging.getLogger(__name__)


MEALS: tuple[str, ...] = ("breakfast", "lunch", "dinner", "snacks")

_NUMERIC_FIELDS = ("serving_size", "calories", "protein_g", "carbs_g", "fat_g", "fiber_g")


def _number_or_zero(x: Any) -> float:
    """
    Lenient form number: "12", "12.5", "12,5" -> float; anything unparsable -> 0.
    """
    if isinstance(x, bool) or x is None:
        return 0.0
    if isinstance(x, (int, float)):
        return float(x) if math.isfinite(x) else 0.0
    s = str(x).strip().replace(",", ".")
    if not re.fullmatch(r"-?\d+(?:\.\d+)?", s):
        return 0.0
    return float(s)


def _round1(x: float) -> float:
    # one decimal, half-up like the rest of the calculations
    return math.floor(x * 10 + 0.5) / 10


def clean_food_form(raw: dict[str, Any]) -> dict[str, Any]:
    name = str(raw.get("name") or "").strip()
    if not name:
        raise InvalidInput("Please provide a name for the food.")
    tags_raw = raw.get("tags") or ""
    if isinstance(tags_raw, str):
        tags = [t.strip() for t in tags_raw.split(",")]
    else:
        tags = [str(t).strip() for t in tags_raw]
    out: dict[str, Any] = {
        "name": name,
        "serving_unit": str(raw.get("serving_unit") or "").strip() or "g",
        "category": str(raw.get("category") or "").strip(),
        "tags": [t for t in tags if t],
    }
    for k in _NUMERIC_FIELDS:
        out[k] = _number_or_zero(raw.get(k))
    return out


def food_tags(food: Food) -> list[str]:
    return [str(t) for t in loads_list(food.tags_json)]


def food_form(food: Food) -> dict[str, Any]:
    """Current values of a food in the same shape clean_food_form accepts."""
    return {
        "name": food.name,
        "serving_size": food.serving_size,
        "serving_unit": food.serving_unit,
        "calories": food.calories,
        "protein_g": food.protein_g,
        "carbs_g": food.carbs_g,
        "fat_g": food.fat_g,
        "fiber_g": food.fiber_g,
        "category": food.category,
        "tags": ", ".join(food_tags(food)),
    }


def compute_portion(food: Food, quantity: float) -> dict[str, float]:
    if food.serving_size is None or food.serving_size <= 0:
        raise InvalidInput(f"{food.name}: serving size must be positive to log a portion")
    factor = quantity / food.serving_size
    return {
        "calories": _round1(food.calories * factor),
        "protein_g": _round1(food.protein_g * factor),
        "carbs_g": _round1(food.carbs_g * factor),
        "fat_g": _round1(food.fat_g * factor),
    }


class FoodService:
    def __init__(self, db: AsyncSession):
        self.foods = FoodRepo(db)
        self.logs = FoodLogRepo(db)

    async def add_food(self, raw: dict[str, Any]) -> Food:
        food = await self.foods.add(clean_food_form(raw))
        logger.info("food added: #%d %s", food.id, food.name)
        return food

    async def update_food(self, food_id: int, raw: dict[str, Any]) -> Food:
        food = await self._get(food_id)
        # partial edits keep the untouched fields
        merged = {**food_form(food), **raw}
        return await self.foods.update(food, clean_food_form(merged))

    async def delete_food(self, food_id: int) -> None:
        if not await self.foods.delete(food_id):
            raise NotFound("Food not found!")
        logger.info("food deleted: #%d", food_id)

    async def list_foods(self, *, search: str | None = None, category: str | None = None) -> list[Food]:
        return await self.foods.list_foods(search=search, category=category)

    async def categories(self) -> list[str]:
        return await self.foods.categories()

    async def log_food(self, *, date: dt.date, meal: str, food_id: int, quantity: Any) -> FoodLog:
        m = str(meal or "").strip().lower()
        if m == "snack":
            m = "snacks"
        if m not in MEALS:
            raise InvalidInput(f"unknown meal {meal!r} (expected one of: {', '.join(MEALS)})")
        q = _number_or_zero(quantity)
        if q <= 0:
            raise InvalidInput("Please select a food and enter a valid quantity.")
        food = await self._get(food_id)
        calculated = compute_portion(food, q)
        log = await self.logs.add(
            date=date,
            meal=m,
            food_id=food.id,
            food_name=food.name,
            quantity=q,
            calculated=calculated,
        )
        logger.info("logged %s %g%s to %s %s", food.name, q, food.serving_unit, m, date.isoformat())
        return log

    async def delete_log(self, log_id: int) -> None:
        if not await self.logs.delete(log_id):
            raise NotFound("Food log not found.")

    async def logs_for(self, date: dt.date) -> list[FoodLog]:
        return await self.logs.for_date(date)

    async def _get(self, food_id: int) -> Food:
        food = await self.foods.get(food_id)
        if food is None:
            raise NotFound("Food not found!")
        return food
