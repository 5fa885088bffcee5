from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from fittrack.errors import InvalidInput


Gender = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "very", "extra"]
Goal = Literal["cut", "maintain", "bulk"]


ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "very": 1.725,
    "extra": 1.9,
}

GOAL_MULTIPLIERS: dict[str, float] = {
    "cut": 0.8,
    "maintain": 1.0,
    "bulk": 1.15,
}

# Mifflin-St Jeor sex constant
GENDER_OFFSETS: dict[str, float] = {
    "male": 5,
    "female": -161,
}

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARB = 4
KCAL_PER_G_FAT = 9

PROTEIN_FACTOR_RANGE = (1.4, 2.2)
FAT_PERCENTAGE_RANGE = (0.15, 0.35)


@dataclass(frozen=True)
class BodyProfile:
    weight_kg: float
    height_cm: float
    age: int
    gender: Gender


@dataclass(frozen=True)
class MacroPreferences:
    protein_factor: float
    fat_percentage: float


@dataclass(frozen=True)
class Macros:
    protein_g: int
    fat_g: int
    carb_g: int


@dataclass(frozen=True)
class TargetResult:
    bmr: float
    tdee: int
    calorie_target: int
    macros: Macros


def round_half_up(x: float) -> int:
    # same tie-breaking as JS Math.round, unlike the builtin banker's round()
    return int(math.floor(x + 0.5))


def _finite(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be finite, got {value!r}")
    return float(value)


def _positive(name: str, value: float) -> float:
    v = _finite(name, value)
    if v <= 0:
        raise InvalidInput(f"{name} must be positive, got {value!r}")
    return v


def _validate_body(weight_kg: float, height_cm: float, age: int, gender: str) -> None:
    _positive("weight_kg", weight_kg)
    _positive("height_cm", height_cm)
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidInput(f"age must be an integer, got {age!r}")
    if age <= 0:
        raise InvalidInput(f"age must be positive, got {age!r}")
    if gender not in GENDER_OFFSETS:
        raise InvalidInput(f"unknown gender {gender!r} (expected one of: {', '.join(GENDER_OFFSETS)})")


def _activity_multiplier(level: str) -> float:
    try:
        return ACTIVITY_MULTIPLIERS[level]
    except (KeyError, TypeError):
        raise InvalidInput(
            f"unknown activity level {level!r} (expected one of: {', '.join(ACTIVITY_MULTIPLIERS)})"
        ) from None


def _goal_multiplier(goal: str) -> float:
    try:
        return GOAL_MULTIPLIERS[goal]
    except (KeyError, TypeError):
        raise InvalidInput(f"unknown goal {goal!r} (expected one of: {', '.join(GOAL_MULTIPLIERS)})") from None


def _validate_macro_inputs(weight_kg: float, calorie_target: float, protein_factor: float, fat_percentage: float) -> None:
    _positive("weight_kg", weight_kg)
    if _finite("calorie_target", calorie_target) < 0:
        raise InvalidInput(f"calorie_target must not be negative, got {calorie_target!r}")
    if _finite("protein_factor", protein_factor) < 0:
        raise InvalidInput(f"protein_factor must not be negative, got {protein_factor!r}")
    fp = _finite("fat_percentage", fat_percentage)
    if fp < 0 or fp > 1:
        raise InvalidInput(f"fat_percentage must be within [0, 1], got {fat_percentage!r}")


def compute_bmr(weight_kg: float, height_cm: float, age: int, gender: Gender) -> float:
    # BMR = 10W + 6.25H - 5A + s
    _validate_body(weight_kg, height_cm, age, gender)
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + GENDER_OFFSETS[gender]


def compute_tdee(bmr: float, activity_level: ActivityLevel) -> int:
    mult = _activity_multiplier(activity_level)
    if _finite("bmr", bmr) < 0:
        raise InvalidInput(f"bmr must not be negative, got {bmr!r}")
    return round_half_up(bmr * mult)


def compute_calorie_target(tdee: int, goal: Goal) -> int:
    mult = _goal_multiplier(goal)
    if _finite("tdee", tdee) < 0:
        raise InvalidInput(f"tdee must not be negative, got {tdee!r}")
    if goal == "maintain":
        return int(tdee)
    return round_half_up(tdee * mult)


def compute_macros(weight_kg: float, calorie_target: int, protein_factor: float, fat_percentage: float) -> Macros:
    _validate_macro_inputs(weight_kg, calorie_target, protein_factor, fat_percentage)
    protein_g = round_half_up(weight_kg * protein_factor)
    fat_g = round_half_up(calorie_target * fat_percentage / KCAL_PER_G_FAT)

    # carbs take whatever is left; an overcommitted split zeroes carbs instead of failing
    carb_kcal = calorie_target - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    carb_g = max(0, round_half_up(carb_kcal / KCAL_PER_G_CARB))
    return Macros(protein_g=protein_g, fat_g=fat_g, carb_g=carb_g)


def compute_targets(
    profile: BodyProfile,
    activity_level: ActivityLevel,
    goal: Goal,
    prefs: MacroPreferences,
) -> TargetResult:
    """
    BodyProfile + ActivityLevel -> bmr -> tdee; tdee + Goal -> calorie target;
    calorie target + weight + MacroPreferences -> macros.

    Every input is checked before anything is computed, so a bad goal or
    preference never yields a half-built result.
    """
    _validate_body(profile.weight_kg, profile.height_cm, profile.age, profile.gender)
    _activity_multiplier(activity_level)
    _goal_multiplier(goal)
    _validate_macro_inputs(profile.weight_kg, 0, prefs.protein_factor, prefs.fat_percentage)

    bmr = compute_bmr(profile.weight_kg, profile.height_cm, profile.age, profile.gender)
    tdee = compute_tdee(bmr, activity_level)
    calorie_target = compute_calorie_target(tdee, goal)
    macros = compute_macros(profile.weight_kg, calorie_target, prefs.protein_factor, prefs.fat_percentage)
    return TargetResult(bmr=bmr, tdee=tdee, calorie_target=calorie_target, macros=macros)


def outside_recommended(prefs: MacroPreferences) -> list[str]:
    out: list[str] = []
    lo, hi = PROTEIN_FACTOR_RANGE
    if not lo <= prefs.protein_factor <= hi:
        out.append(f"protein factor {prefs.protein_factor:g} g/kg is outside the recommended {lo:g}-{hi:g}")
    lo, hi = FAT_PERCENTAGE_RANGE
    if not lo <= prefs.fat_percentage <= hi:
        out.append(f"fat share {prefs.fat_percentage:.0%} is outside the recommended {lo:.0%}-{hi:.0%}")
    return out
