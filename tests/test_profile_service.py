from __future__ import annotations

import datetime as dt

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fittrack.errors import InvalidInput
from fittrack.nutrition import outside_recommended
from fittrack.profile_service import ProfileService, calculator_inputs, parse_profile_patch


def test_parse_patch_accepts_form_strings_and_aliases() -> None:
    patch = parse_profile_patch(
        {
            "weight": "82,5",
            "height": "181",
            "age": "31",
            "sex": "F",
            "activity": "Very Active",
            "goal": "Cut",
            "protein": "2",
            "fat": "30%",
            "name": "  Jane  ",
        }
    )
    assert patch == {
        "weight_kg": 82.5,
        "height_cm": 181.0,
        "age": 31,
        "gender": "female",
        "activity_level": "very",
        "goal": "cut",
        "protein_factor": 2.0,
        "fat_percentage": 0.3,
        "display_name": "Jane",
    }


@pytest.mark.parametrize(
    "raw",
    [
        {"weight": "abc"},
        {"weight": "0"},
        {"height": "-170"},
        {"age": "30.5"},
        {"goal": "lose"},
        {"gender": "x"},
        {"activity": "couch"},
        {"name": "  "},
        {"shoe_size": "44"},
    ],
)
def test_parse_patch_rejects(raw: dict[str, str]) -> None:
    with pytest.raises(InvalidInput):
        parse_profile_patch(raw)


@pytest.mark.asyncio
async def test_fresh_profile_has_defaults(db: AsyncSession) -> None:
    svc = ProfileService(db)
    profile = await svc.get_profile()
    assert (profile.weight_kg, profile.height_cm, profile.age, profile.gender) == (80.0, 180.0, 30, "male")
    r = svc.current_targets(profile)
    assert r.calorie_target == 2759
    assert profile.calorie_target is None


@pytest.mark.asyncio
async def test_preview_does_not_change_profile(db: AsyncSession) -> None:
    svc = ProfileService(db)
    profile = await svc.get_profile()
    r = svc.preview(profile, {"goal": "cut"})
    assert r.calorie_target == 2207
    assert profile.goal == "maintain"
    assert profile.calorie_target is None


@pytest.mark.asyncio
async def test_apply_stores_targets_and_first_baseline(sessions: async_sessionmaker[AsyncSession], day: dt.date) -> None:
    async with sessions() as db:
        svc = ProfileService(db)
        r = await svc.apply({"goal": "cut"}, today=day)
        await db.commit()
    assert r.calorie_target == 2207

    async with sessions() as db:
        svc = ProfileService(db)
        profile = await svc.get_profile()
        assert profile.goal == "cut"
        assert profile.calorie_target == 2207
        assert (profile.protein_g_target, profile.fat_g_target) == (144, 61)
        assert profile.baseline_date == day
        assert profile.baseline_calorie_target == 2207
        assert profile.baseline_weight_kg == 80.0

        # later applies keep the first baseline
        await svc.apply({"goal": "bulk", "weight_kg": 85.0}, today=day + dt.timedelta(days=10))
        assert profile.calorie_target != 2207
        assert profile.baseline_date == day
        assert profile.baseline_calorie_target == 2207


@pytest.mark.asyncio
async def test_rejected_apply_leaves_profile_untouched(db: AsyncSession, day: dt.date) -> None:
    svc = ProfileService(db)
    with pytest.raises(InvalidInput):
        await svc.apply({"weight_kg": 90.0, "fat_percentage": 1.5}, today=day)
    profile = await svc.get_profile()
    assert profile.weight_kg == 80.0
    assert profile.fat_percentage == 0.25
    assert profile.calorie_target is None
    assert profile.baseline_date is None


@pytest.mark.asyncio
async def test_reset_baseline(db: AsyncSession, day: dt.date) -> None:
    svc = ProfileService(db)
    await svc.apply({}, today=day)
    await svc.reset_baseline()
    profile = await svc.get_profile()
    assert profile.baseline_date is None
    assert profile.calorie_target == 2759

    await svc.apply({"weight_kg": 78.0}, today=day + dt.timedelta(days=3))
    assert profile.baseline_weight_kg == 78.0


@pytest.mark.asyncio
async def test_update_weight_recalculates_and_logs(db: AsyncSession, day: dt.date) -> None:
    svc = ProfileService(db)
    r = await svc.update_weight(day, "81.5")
    profile = await svc.get_profile()
    assert profile.weight_kg == 81.5
    assert profile.calorie_target == r.calorie_target
    # +1.5 kg -> +15 kcal BMR
    assert r.bmr == 1795

    # same day overwrites the entry
    await svc.update_weight(day, 81.0)
    await svc.update_weight(day + dt.timedelta(days=1), 80.4)
    history = await svc.weights.history()
    assert [(x.date, x.weight_kg) for x in history] == [(day, 81.0), (day + dt.timedelta(days=1), 80.4)]


@pytest.mark.asyncio
async def test_weight_summary(db: AsyncSession, day: dt.date) -> None:
    svc = ProfileService(db)
    summary = await svc.weight_summary()
    assert summary.latest_kg == 80.0
    assert summary.change_kg == 0
    assert summary.baseline is None

    await svc.apply({}, today=day)
    for i, w in enumerate([80.0, 79.6, 79.1]):
        await svc.update_weight(day + dt.timedelta(days=i), w)

    summary = await svc.weight_summary(days=2)
    assert summary.latest_kg == 79.1
    assert summary.initial_kg == 80.0
    assert summary.change_kg == -0.9
    assert [w for _, w in summary.trend] == [79.6, 79.1]
    assert summary.baseline is not None
    assert summary.baseline.weight_kg == 80.0
    assert summary.baseline.macros == {"protein_g": 144, "fat_g": 77, "carb_g": 373}
    assert summary.change_since_baseline_kg == -0.9


@pytest.mark.asyncio
async def test_update_weight_rejects_garbage(db: AsyncSession, day: dt.date) -> None:
    svc = ProfileService(db)
    with pytest.raises(InvalidInput):
        await svc.update_weight(day, "heavy")
    assert await svc.weights.history() == []


@pytest.mark.asyncio
async def test_apply_parses_form_input(db: AsyncSession, day: dt.date) -> None:
    svc = ProfileService(db)
    r = await svc.apply({"weight": "90", "goal": "Cut"}, today=day)
    profile = await svc.get_profile()
    assert profile.weight_kg == 90.0
    assert profile.goal == "cut"
    assert r.calorie_target == profile.calorie_target
    assert not hasattr(profile, "weight")


@pytest.mark.asyncio
@pytest.mark.parametrize("patch", [{"shoe_size": "44"}, {"weight": "ninety"}, {"goal": "lose"}])
async def test_apply_rejects_unparsable_form(db: AsyncSession, day: dt.date, patch: dict[str, str]) -> None:
    svc = ProfileService(db)
    with pytest.raises(InvalidInput):
        await svc.apply(patch, today=day)
    profile = await svc.get_profile()
    assert profile.weight_kg == 80.0
    assert profile.goal == "maintain"
    assert profile.calorie_target is None


@pytest.mark.asyncio
async def test_preview_parses_form_input(db: AsyncSession) -> None:
    svc = ProfileService(db)
    profile = await svc.get_profile()
    assert svc.preview(profile, {"goal": "Cut"}).calorie_target == 2207
    with pytest.raises(InvalidInput):
        svc.preview(profile, {"weight": "heavy"})


@pytest.mark.asyncio
async def test_calculator_inputs_overlay_patch(db: AsyncSession) -> None:
    profile = await ProfileService(db).get_profile()
    body, activity, goal, prefs = calculator_inputs(profile, {"weight_kg": 90.0, "fat_percentage": 0.4})
    assert body.weight_kg == 90.0
    assert body.height_cm == 180.0
    assert (activity, goal) == ("moderate", "maintain")
    assert prefs.protein_factor == 1.8
    assert prefs.fat_percentage == 0.4
    assert len(outside_recommended(prefs)) == 1
