from __future__ import annotations

import datetime as dt
from typing import Any

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.config import settings
from fittrack.jsonutil import dumps
from fittrack.models import Food, FoodLog, Profile, WeightLog, WorkoutLog


class ProfileRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_or_create(self) -> Profile:
        q: Select[tuple[Profile]] = select(Profile).order_by(Profile.id.asc()).limit(1)
        res = await self.db.execute(q)
        p = res.scalar_one_or_none()
        if p:
            return p
        p = Profile(
            display_name="John Doe",
            weight_kg=80.0,
            height_cm=180.0,
            age=30,
            gender="male",
            activity_level="moderate",
            goal="maintain",
            protein_factor=settings.default_protein_factor,
            fat_percentage=settings.default_fat_percentage,
        )
        self.db.add(p)
        await self.db.flush()
        return p


class FoodRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, food_id: int) -> Food | None:
        return await self.db.get(Food, food_id)

    async def count(self) -> int:
        res = await self.db.execute(select(func.count()).select_from(Food))
        return int(res.scalar_one())

    async def add(self, fields: dict[str, Any]) -> Food:
        f = Food(**_food_columns(fields))
        self.db.add(f)
        await self.db.flush()
        return f

    async def update(self, food: Food, fields: dict[str, Any]) -> Food:
        for k, v in _food_columns(fields).items():
            setattr(food, k, v)
        await self.db.flush()
        return food

    async def delete(self, food_id: int) -> bool:
        res = await self.db.execute(delete(Food).where(Food.id == food_id))
        return bool(res.rowcount)

    async def list_foods(self, *, search: str | None = None, category: str | None = None) -> list[Food]:
        q = select(Food).order_by(Food.id.desc())
        if category and category != "all":
            if category == "other":
                q = q.where((Food.category == "") | (Food.category == "other"))
            else:
                q = q.where(Food.category == category)
        res = await self.db.execute(q)
        foods = list(res.scalars().all())
        s = (search or "").strip().lower()
        if s:
            # substring match on the display name, case-insensitive also for non-ascii names
            foods = [f for f in foods if s in (f.name or "").lower()]
        return foods

    async def categories(self) -> list[str]:
        res = await self.db.execute(select(Food.category).distinct())
        cats: list[str] = []
        for c in res.scalars().all():
            c = (c or "").strip() or "other"
            if c not in cats:
                cats.append(c)
        return ["all", *sorted(cats)]


def _food_columns(fields: dict[str, Any]) -> dict[str, Any]:
    out = {k: v for k, v in fields.items() if k != "tags"}
    if "tags" in fields:
        out["tags_json"] = dumps(list(fields["tags"] or []))
    return out


class FoodLogRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self,
        *,
        date: dt.date,
        meal: str,
        food_id: int,
        food_name: str,
        quantity: float,
        calculated: dict[str, float],
    ) -> FoodLog:
        log = FoodLog(
            date=date,
            meal=meal,
            food_id=food_id,
            food_name=food_name,
            quantity=float(quantity),
            calories=calculated["calories"],
            protein_g=calculated["protein_g"],
            carbs_g=calculated["carbs_g"],
            fat_g=calculated["fat_g"],
        )
        self.db.add(log)
        await self.db.flush()
        return log

    async def delete(self, log_id: int) -> bool:
        res = await self.db.execute(delete(FoodLog).where(FoodLog.id == log_id))
        return bool(res.rowcount)

    async def for_date(self, date: dt.date) -> list[FoodLog]:
        q = select(FoodLog).where(FoodLog.date == date).order_by(FoodLog.id.asc())
        res = await self.db.execute(q)
        return list(res.scalars().all())


class WorkoutLogRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, *, date: dt.date, workout: dict[str, Any]) -> WorkoutLog:
        w = WorkoutLog(
            date=date,
            name=workout["name"],
            type=workout["type"],
            muscle_group=workout["muscle_group"],
            details_json=dumps(workout["details"]),
        )
        self.db.add(w)
        await self.db.flush()
        return w

    async def delete(self, log_id: int) -> bool:
        res = await self.db.execute(delete(WorkoutLog).where(WorkoutLog.id == log_id))
        return bool(res.rowcount)

    async def for_date(self, date: dt.date) -> list[WorkoutLog]:
        q = select(WorkoutLog).where(WorkoutLog.date == date).order_by(WorkoutLog.id.asc())
        res = await self.db.execute(q)
        return list(res.scalars().all())


class WeightLogRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert(self, *, date: dt.date, weight_kg: float) -> WeightLog:
        q: Select[tuple[WeightLog]] = select(WeightLog).where(WeightLog.date == date)
        res = await self.db.execute(q)
        w = res.scalar_one_or_none()
        if w:
            w.weight_kg = float(weight_kg)
            return w
        w = WeightLog(date=date, weight_kg=float(weight_kg))
        self.db.add(w)
        await self.db.flush()
        return w

    async def history(self) -> list[WeightLog]:
        res = await self.db.execute(select(WeightLog).order_by(WeightLog.date.asc()))
        return list(res.scalars().all())
