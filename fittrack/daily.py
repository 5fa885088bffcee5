from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from fittrack.food_service import MEALS
from fittrack.nutrition import TargetResult


class LoggedPortion(Protocol):
    meal: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class DailyTotals:
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0


@dataclass(frozen=True)
class MacroProgress:
    current: float
    target: float
    percentage: float
    exceeded: bool
    bar_width: float


def daily_totals(logs: Iterable[LoggedPortion]) -> DailyTotals:
    kcal = p = c = f = 0.0
    for log in logs:
        kcal += log.calories
        p += log.protein_g
        c += log.carbs_g
        f += log.fat_g
    return DailyTotals(calories=kcal, protein_g=p, carbs_g=c, fat_g=f)


def group_by_meal(logs: Iterable[LoggedPortion]) -> dict[str, list[LoggedPortion]]:
    out: dict[str, list[LoggedPortion]] = {m: [] for m in MEALS}
    for log in logs:
        out.setdefault(log.meal, []).append(log)
    return out


def macro_progress(current: float, target: float) -> MacroProgress:
    pct = current / target * 100 if target > 0 else 0.0
    return MacroProgress(
        current=current,
        target=target,
        percentage=pct,
        exceeded=current > target,
        bar_width=min(pct, 100.0),
    )


def day_progress(totals: DailyTotals, targets: TargetResult) -> dict[str, MacroProgress]:
    return {
        "calories": macro_progress(totals.calories, targets.calorie_target),
        "protein": macro_progress(totals.protein_g, targets.macros.protein_g),
        "carbs": macro_progress(totals.carbs_g, targets.macros.carb_g),
        "fat": macro_progress(totals.fat_g, targets.macros.fat_g),
    }
