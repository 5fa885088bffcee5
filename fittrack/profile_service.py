from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.errors import InvalidInput
from fittrack.jsonutil import dumps, loads_dict
from fittrack.models import Profile
from fittrack.nutrition import (
    ACTIVITY_MULTIPLIERS,
    GENDER_OFFSETS,
    GOAL_MULTIPLIERS,
    BodyProfile,
    MacroPreferences,
    TargetResult,
    compute_targets,
)
from fittrack.repositories import ProfileRepo, WeightLogRepo


logger = logging.getLogger(__name__)


_KEY_ALIASES = {
    "name": "display_name",
    "display_name": "display_name",
    "weight": "weight_kg",
    "weight_kg": "weight_kg",
    "height": "height_cm",
    "height_cm": "height_cm",
    "age": "age",
    "gender": "gender",
    "sex": "gender",
    "activity": "activity_level",
    "activity_level": "activity_level",
    "goal": "goal",
    "protein": "protein_factor",
    "protein_factor": "protein_factor",
    "fat": "fat_percentage",
    "fat_percentage": "fat_percentage",
}

_GENDER_ALIASES = {"m": "male", "man": "male", "f": "female", "woman": "female"}
_ACTIVITY_ALIASES = {"very_active": "very", "active": "very", "extra_active": "extra", "athlete": "extra"}
_GOAL_ALIASES = {"maintenance": "maintain"}


def _parse_float(field: str, s: Any) -> float:
    if isinstance(s, bool):
        raise InvalidInput(f"{field}: expected a number, got {s!r}")
    if isinstance(s, (int, float)):
        return float(s)
    t = str(s or "").strip().replace(",", ".")
    if not re.fullmatch(r"-?\d+(?:\.\d+)?", t):
        raise InvalidInput(f"{field}: expected a number, got {s!r}")
    return float(t)


def _parse_int(field: str, s: Any) -> int:
    v = _parse_float(field, s)
    if v != int(v):
        raise InvalidInput(f"{field}: expected a whole number, got {s!r}")
    return int(v)


def _parse_choice(field: str, s: Any, allowed: dict[str, Any], aliases: dict[str, str]) -> str:
    t = str(s or "").strip().lower().replace(" ", "_")
    t = aliases.get(t, t)
    if t not in allowed:
        raise InvalidInput(f"{field}: expected one of {', '.join(allowed)}, got {s!r}")
    return t


def _parse_fraction(field: str, s: Any) -> float:
    t = str(s).strip() if isinstance(s, str) else s
    if isinstance(t, str) and t.endswith("%"):
        return _parse_float(field, t[:-1]) / 100
    return _parse_float(field, t)


def parse_profile_patch(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Turn form input (usually strings) into typed profile fields.

    Only shape is checked here (numbers parse, enum values are known, the body
    metrics are positive). Whether the combination yields valid targets is
    decided by the calculator.
    """
    out: dict[str, Any] = {}
    for key, value in raw.items():
        field = _KEY_ALIASES.get(str(key).strip().lower())
        if field is None:
            raise InvalidInput(f"unknown profile field {key!r}")
        if field == "display_name":
            name = str(value or "").strip()
            if not name:
                raise InvalidInput("display_name: must not be empty")
            out[field] = name[:64]
        elif field in ("weight_kg", "height_cm"):
            v = _parse_float(field, value)
            if v <= 0:
                raise InvalidInput(f"{field}: must be positive, got {value!r}")
            out[field] = v
        elif field == "age":
            v = _parse_int(field, value)
            if v <= 0:
                raise InvalidInput(f"age: must be positive, got {value!r}")
            out[field] = v
        elif field == "gender":
            out[field] = _parse_choice(field, value, GENDER_OFFSETS, _GENDER_ALIASES)
        elif field == "activity_level":
            out[field] = _parse_choice(field, value, ACTIVITY_MULTIPLIERS, _ACTIVITY_ALIASES)
        elif field == "goal":
            out[field] = _parse_choice(field, value, GOAL_MULTIPLIERS, _GOAL_ALIASES)
        elif field == "protein_factor":
            out[field] = _parse_float(field, value)
        elif field == "fat_percentage":
            out[field] = _parse_fraction(field, value)
    return out


def calculator_inputs(profile: Profile, patch: dict[str, Any] | None = None) -> tuple[BodyProfile, str, str, MacroPreferences]:
    p = patch or {}
    body = BodyProfile(
        weight_kg=p.get("weight_kg", profile.weight_kg),
        height_cm=p.get("height_cm", profile.height_cm),
        age=p.get("age", profile.age),
        gender=p.get("gender", profile.gender),
    )
    prefs = MacroPreferences(
        protein_factor=p.get("protein_factor", profile.protein_factor),
        fat_percentage=p.get("fat_percentage", profile.fat_percentage),
    )
    return body, p.get("activity_level", profile.activity_level), p.get("goal", profile.goal), prefs


def targets_for(profile: Profile, patch: dict[str, Any] | None = None) -> TargetResult:
    body, activity, goal, prefs = calculator_inputs(profile, patch)
    return compute_targets(body, activity, goal, prefs)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Baseline:
    date: dt.date
    calorie_target: int
    weight_kg: float
    macros: dict[str, int]


@dataclass(frozen=True)
class WeightSummary:
    latest_kg: float
    initial_kg: float
    change_kg: float
    trend: list[tuple[dt.date, float]]
    baseline: Baseline | None
    change_since_baseline_kg: float | None


def baseline_of(profile: Profile) -> Baseline | None:
    if profile.baseline_date is None or profile.baseline_calorie_target is None or profile.baseline_weight_kg is None:
        return None
    return Baseline(
        date=profile.baseline_date,
        calorie_target=profile.baseline_calorie_target,
        weight_kg=profile.baseline_weight_kg,
        macros=loads_dict(profile.baseline_json),
    )


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.profiles = ProfileRepo(db)
        self.weights = WeightLogRepo(db)

    async def get_profile(self) -> Profile:
        return await self.profiles.get_or_create()

    def preview(self, profile: Profile, patch: dict[str, Any] | None = None) -> TargetResult:
        return targets_for(profile, parse_profile_patch(patch or {}))

    def current_targets(self, profile: Profile) -> TargetResult:
        return targets_for(profile)

    async def apply(self, patch: dict[str, Any], *, today: dt.date) -> TargetResult:
        patch = parse_profile_patch(patch)
        profile = await self.profiles.get_or_create()
        # compute first: a rejected patch leaves the stored profile untouched
        result = targets_for(profile, patch)
        for k, v in patch.items():
            setattr(profile, k, v)
        _store_targets(profile, result)
        if baseline_of(profile) is None:
            profile.baseline_date = today
            profile.baseline_calorie_target = result.calorie_target
            profile.baseline_weight_kg = profile.weight_kg
            profile.baseline_json = dumps(
                {
                    "protein_g": result.macros.protein_g,
                    "fat_g": result.macros.fat_g,
                    "carb_g": result.macros.carb_g,
                }
            )
            logger.info("baseline set on %s at %.1f kg", today.isoformat(), profile.weight_kg)
        logger.info("targets applied: %d kcal (tdee %d)", result.calorie_target, result.tdee)
        return result

    async def reset_baseline(self) -> None:
        profile = await self.profiles.get_or_create()
        profile.baseline_date = None
        profile.baseline_calorie_target = None
        profile.baseline_weight_kg = None
        profile.baseline_json = None

    async def update_weight(self, date: dt.date, weight_kg: Any) -> TargetResult:
        w = parse_profile_patch({"weight_kg": weight_kg})["weight_kg"]
        profile = await self.profiles.get_or_create()
        result = targets_for(profile, {"weight_kg": w})
        await self.weights.upsert(date=date, weight_kg=w)
        profile.weight_kg = w
        _store_targets(profile, result)
        return result

    async def weight_summary(self, days: int = 7) -> WeightSummary:
        profile = await self.profiles.get_or_create()
        history = [(x.date, x.weight_kg) for x in await self.weights.history()]
        latest = history[-1][1] if history else profile.weight_kg
        initial = history[0][1] if history else profile.weight_kg
        base = baseline_of(profile)
        return WeightSummary(
            latest_kg=latest,
            initial_kg=initial,
            change_kg=round(latest - initial, 1),
            trend=history[-days:],
            baseline=base,
            change_since_baseline_kg=round(latest - base.weight_kg, 1) if base else None,
        )


def _store_targets(profile: Profile, result: TargetResult) -> None:
    profile.bmr_kcal = result.bmr
    profile.tdee_kcal = result.tdee
    profile.calorie_target = result.calorie_target
    profile.protein_g_target = result.macros.protein_g
    profile.fat_g_target = result.macros.fat_g
    profile.carb_g_target = result.macros.carb_g
