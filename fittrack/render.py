from __future__ import annotations

import datetime as dt
from html import escape

from tabulate import tabulate

from fittrack.daily import MacroProgress
from fittrack.food_service import food_tags
from fittrack.models import Food, FoodLog, Profile, WorkoutLog
from fittrack.nutrition import TargetResult, round_half_up
from fittrack.profile_service import WeightSummary
from fittrack.workouts import workout_details


def macros_line(kcal: int | None, p: int | None, f: int | None, c: int | None) -> str:
    if kcal is None:
        return "Targets: —"
    return f"Targets: {kcal} kcal | P {p} g | F {f} g | C {c} g"


def _fmt(x: float) -> str:
    return f"{x:g}"


def targets_summary(result: TargetResult, *, weight_kg: float | None = None, goal: str | None = None) -> str:
    rows = [
        ["BMR (Basal Metabolic Rate)", f"{round_half_up(result.bmr)} kcal"],
        ["TDEE (Total Daily Energy)", f"{result.tdee} kcal"],
    ]
    if weight_kg is not None:
        rows.append(["Current Weight", f"{_fmt(weight_kg)} kg"])
    if goal is not None:
        rows.append(["Fitness Goal", goal.upper()])
    rows.append(["Daily Calorie Target", f"{result.calorie_target} kcal"])
    rows.append(["Protein", f"{result.macros.protein_g} g"])
    rows.append(["Fat", f"{result.macros.fat_g} g"])
    rows.append(["Carbs", f"{result.macros.carb_g} g"])
    return "<pre>" + escape(tabulate(rows, tablefmt="plain")) + "</pre>"


def profile_card(profile: Profile) -> str:
    return (
        f"👤 <b>{escape(profile.display_name)}</b>\n"
        f"⚖️ Weight: <b>{_fmt(profile.weight_kg)} kg</b>\n"
        f"📏 Height: <b>{_fmt(profile.height_cm)} cm</b>\n"
        f"🎂 Age: <b>{profile.age}</b>\n"
        f"🚻 Gender: <b>{profile.gender}</b>\n"
        f"🏃 Activity: <b>{profile.activity_level}</b>\n"
        f"🎯 Goal: <b>{profile.goal}</b>\n"
        f"🥩 Protein factor: <b>{_fmt(profile.protein_factor)} g/kg</b>\n"
        f"🧈 Fat share: <b>{profile.fat_percentage:.0%}</b>\n"
        + macros_line(profile.calorie_target, profile.protein_g_target, profile.fat_g_target, profile.carb_g_target)
    )


def foods_table(foods: list[Food]) -> str:
    if not foods:
        return "No foods found. Try adjusting your search or add a new food to get started."
    rows = []
    for f in foods:
        rows.append(
            [
                f.id,
                f.name,
                f"{_fmt(f.serving_size)}{f.serving_unit}",
                _fmt(f.calories),
                _fmt(f.protein_g),
                _fmt(f.carbs_g),
                _fmt(f.fat_g),
                (f.category or "other"),
                ", ".join(food_tags(f)[:2]),
            ]
        )
    table = tabulate(rows, headers=["#", "Food", "Serving", "kcal", "P", "C", "F", "Category", "Tags"], tablefmt="github")
    return f"<pre>{escape(table)}</pre>\n{len(foods)} foods"


def progress_line(title: str, p: MacroProgress, unit: str) -> str:
    status = "TARGET EXCEEDED" if p.exceeded else f"{round_half_up(p.percentage)}% of target"
    filled = int(p.bar_width // 10)
    bar = "█" * filled + "░" * (10 - filled)
    return f"{title}: {round_half_up(p.current)} / {_fmt(p.target)} {unit} {bar} {status}"


def day_summary(date: dt.date, grouped: dict[str, list[FoodLog]], progress: dict[str, MacroProgress]) -> str:
    lines = [f"📅 <b>{date.isoformat()}</b>"]
    lines.append(progress_line("Calories", progress["calories"], "kcal"))
    lines.append(progress_line("Protein", progress["protein"], "g"))
    lines.append(progress_line("Carbs", progress["carbs"], "g"))
    lines.append(progress_line("Fat", progress["fat"], "g"))
    for meal, logs in grouped.items():
        lines.append("")
        lines.append(f"<b>{meal.capitalize()}</b>")
        if not logs:
            lines.append("  —")
            continue
        for log in logs:
            lines.append(
                f"  [{log.id}] {escape(log.food_name)} {_fmt(log.quantity)} — "
                f"{_fmt(log.calories)} kcal, P {_fmt(log.protein_g)} / C {_fmt(log.carbs_g)} / F {_fmt(log.fat_g)}"
            )
    return "\n".join(lines)


def workout_line(log: WorkoutLog) -> str:
    d = workout_details(log)
    head = f"[{log.id}] <b>{escape(log.name)}</b> — {log.muscle_group} ({log.type})"
    if log.type == "strength":
        return f"{head}\n    {d.get('sets')} Sets | {d.get('reps')} Reps @ {_fmt(float(d.get('weight') or 0))} kg"
    return f"{head}\n    Duration: {_fmt(float(d.get('duration') or 0))} mins | Distance: {_fmt(float(d.get('distance') or 0))} km"


def workouts_list(date: dt.date, logs: list[WorkoutLog], volume: float) -> str:
    header = f"🏋️ <b>Logged Workouts for {date.isoformat()}</b>"
    if not logs:
        return header + "\nNo workouts logged for this day."
    body = "\n".join(workout_line(x) for x in logs)
    return f"{header}\n{body}\n\nStrength volume: {_fmt(volume)} kg"


def weight_report(s: WeightSummary) -> str:
    sign = "+" if s.change_kg > 0 else ""
    lines = [
        "⚖️ <b>Weight Tracking</b>",
        f"Latest Weight: <b>{_fmt(s.latest_kg)} kg</b>",
        f"Change: <b>{sign}{s.change_kg:.1f} kg</b>",
    ]
    if len(s.trend) > 1:
        lines.append("Trend: " + " → ".join(_fmt(w) for _, w in s.trend))
    if s.baseline is not None and s.change_since_baseline_kg is not None:
        b = s.baseline
        lines += [
            "",
            "<b>Baseline Comparison</b>",
            f"Baseline - Calories: {b.calorie_target} kcal ({b.date.isoformat()})",
            f"Weight at Apply: {_fmt(b.weight_kg)} kg",
            f"Change Since Baseline: {s.change_since_baseline_kg:+.1f} kg",
        ]
    return "\n".join(lines)
