from __future__ import annotations

import datetime as dt

from fittrack.daily import macro_progress
from fittrack.jsonutil import dumps
from fittrack.models import Food, FoodLog, WorkoutLog
from fittrack.nutrition import Macros, TargetResult
from fittrack.profile_service import Baseline, WeightSummary
from fittrack.render import day_summary, foods_table, progress_line, targets_summary, weight_report, workouts_list


REFERENCE = TargetResult(bmr=1780.0, tdee=2759, calorie_target=2759, macros=Macros(protein_g=144, fat_g=77, carb_g=373))


def test_targets_summary_lists_every_stage() -> None:
    out = targets_summary(REFERENCE, weight_kg=80.0, goal="maintain")
    assert out.startswith("<pre>") and out.endswith("</pre>")
    for label, value in [
        ("BMR (Basal Metabolic Rate)", "1780 kcal"),
        ("TDEE (Total Daily Energy)", "2759 kcal"),
        ("Current Weight", "80 kg"),
        ("Fitness Goal", "MAINTAIN"),
        ("Daily Calorie Target", "2759 kcal"),
        ("Carbs", "373 g"),
    ]:
        line = next(ln for ln in out.splitlines() if label in ln)
        assert value in line


def test_foods_table_escapes_names() -> None:
    food = Food(
        id=7,
        name="Mac & <Cheese>",
        serving_size=100.0,
        serving_unit="g",
        calories=164.0,
        protein_g=7.0,
        carbs_g=20.0,
        fat_g=6.5,
        category="",
        tags_json=dumps(["comfort"]),
    )
    out = foods_table([food])
    assert "Mac &amp; &lt;Cheese&gt;" in out
    assert "<Cheese>" not in out
    assert "other" in out
    assert out.endswith("1 foods")


def test_foods_table_empty() -> None:
    assert foods_table([]).startswith("No foods found")


def test_progress_line() -> None:
    assert progress_line("Protein", macro_progress(72, 144), "g") == "Protein: 72 / 144 g █████░░░░░ 50% of target"
    assert progress_line("Fat", macro_progress(90, 77), "g").endswith("TARGET EXCEEDED")


def test_day_summary_groups_meals() -> None:
    log = FoodLog(id=3, meal="lunch", food_name="Tuna", quantity=150.0, calories=198.0, protein_g=42.0, carbs_g=0.0, fat_g=1.5)
    progress = {
        "calories": macro_progress(198, 2759),
        "protein": macro_progress(42, 144),
        "carbs": macro_progress(0, 373),
        "fat": macro_progress(1.5, 77),
    }
    out = day_summary(dt.date(2024, 5, 1), {"breakfast": [], "lunch": [log], "dinner": [], "snacks": []}, progress)
    assert "2024-05-01" in out
    assert "<b>Lunch</b>" in out
    assert "[3] Tuna 150" in out
    assert out.index("<b>Breakfast</b>") < out.index("<b>Lunch</b>") < out.index("<b>Snacks</b>")


def test_workouts_list() -> None:
    day = dt.date(2024, 5, 1)
    assert workouts_list(day, [], 0).endswith("No workouts logged for this day.")
    logs = [
        WorkoutLog(id=1, name="Bench", type="strength", muscle_group="chest", details_json=dumps({"sets": 4, "reps": 8, "weight": 60})),
        WorkoutLog(id=2, name="Run", type="cardio", muscle_group="cardio", details_json=dumps({"duration": 25, "distance": 5})),
    ]
    out = workouts_list(day, logs, 1920)
    assert "4 Sets | 8 Reps @ 60 kg" in out
    assert "Duration: 25 mins | Distance: 5 km" in out
    assert out.endswith("Strength volume: 1920 kg")


def test_weight_report_with_baseline() -> None:
    base = Baseline(date=dt.date(2024, 5, 1), calorie_target=2207, weight_kg=80.0, macros={})
    s = WeightSummary(
        latest_kg=79.1,
        initial_kg=80.0,
        change_kg=-0.9,
        trend=[(dt.date(2024, 5, 1), 80.0), (dt.date(2024, 5, 2), 79.1)],
        baseline=base,
        change_since_baseline_kg=-0.9,
    )
    out = weight_report(s)
    assert "Change: <b>-0.9 kg</b>" in out
    assert "Trend: 80 → 79.1" in out
    assert "Baseline - Calories: 2207 kcal (2024-05-01)" in out
    assert "Change Since Baseline: -0.9 kg" in out
