from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.errors import InvalidInput, NotFound
from fittrack.jsonutil import loads_dict
from fittrack.models import WorkoutLog
from fittrack.repositories import WorkoutLogRepo


logger = logging.getLogger(__name__)


WORKOUT_TYPES: tuple[str, ...] = ("strength", "cardio")
MUSCLE_GROUPS: tuple[str, ...] = ("chest", "back", "legs", "shoulders", "arms", "core", "full body", "cardio")


def _num(field: str, x: Any, *, minimum: float, integer: bool = False) -> float:
    try:
        v = float(str(x).strip().replace(",", ".")) if isinstance(x, str) else float(x)
    except (TypeError, ValueError):
        raise InvalidInput(f"{field}: expected a number, got {x!r}") from None
    if not math.isfinite(v) or v < minimum:
        raise InvalidInput(f"{field}: must be at least {minimum:g}, got {x!r}")
    if integer:
        if v != int(v):
            raise InvalidInput(f"{field}: expected a whole number, got {x!r}")
        return int(v)
    return v


def build_workout(
    *,
    name: str = "",
    muscle_group: str = "",
    type: str = "strength",
    sets: Any = 3,
    reps: Any = 10,
    weight: Any = 50,
    duration: Any = None,
    distance: Any = None,
) -> dict[str, Any]:
    """
    Validate a workout form. Strength keeps sets/reps/weight (kg),
    cardio keeps duration (minutes) and distance (km).
    """
    n = (name or "").strip()
    mg = (muscle_group or "").strip().lower()
    if not n or not mg:
        raise InvalidInput("Please enter workout name and primary muscle group.")
    if mg not in MUSCLE_GROUPS:
        raise InvalidInput(f"unknown muscle group {muscle_group!r} (expected one of: {', '.join(MUSCLE_GROUPS)})")
    t = (type or "").strip().lower()
    if t not in WORKOUT_TYPES:
        raise InvalidInput(f"unknown workout type {type!r} (expected one of: {', '.join(WORKOUT_TYPES)})")

    if t == "strength":
        details = {
            "sets": _num("sets", sets, minimum=1, integer=True),
            "reps": _num("reps", reps, minimum=1, integer=True),
            "weight": _num("weight", weight, minimum=0),
        }
    else:
        details = {
            "duration": _num("duration", 30 if duration is None else duration, minimum=1),
            "distance": _num("distance", 0 if distance is None else distance, minimum=0),
        }
    return {"name": n, "type": t, "muscle_group": mg, "details": details}


def workout_details(log: WorkoutLog) -> dict[str, Any]:
    return loads_dict(log.details_json)


def strength_volume(logs: list[WorkoutLog]) -> float:
    total = 0.0
    for log in logs:
        if log.type != "strength":
            continue
        d = workout_details(log)
        total += float(d.get("sets") or 0) * float(d.get("reps") or 0) * float(d.get("weight") or 0)
    return total


class WorkoutService:
    def __init__(self, db: AsyncSession):
        self.logs = WorkoutLogRepo(db)

    async def log_workout(self, *, date: dt.date, form: dict[str, Any]) -> WorkoutLog:
        workout = build_workout(**form)
        log = await self.logs.add(date=date, workout=workout)
        logger.info("logged workout %s (%s) on %s", workout["name"], workout["type"], date.isoformat())
        return log

    async def delete(self, log_id: int) -> None:
        if not await self.logs.delete(log_id):
            raise NotFound("Workout not found.")

    async def for_date(self, date: dt.date) -> list[WorkoutLog]:
        return await self.logs.for_date(date)
