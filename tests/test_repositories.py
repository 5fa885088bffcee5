from __future__ import annotations

import datetime as dt

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fittrack.init_db import init_db
from fittrack.jsonutil import loads_list
from fittrack.repositories import FoodRepo, ProfileRepo, WeightLogRepo
from fittrack.seed import SAMPLE_FOODS, seed_foods


@pytest.mark.asyncio
async def test_single_profile_row(sessions: async_sessionmaker[AsyncSession]) -> None:
    async with sessions() as db:
        first = await ProfileRepo(db).get_or_create()
        first.display_name = "Alex"
        await db.commit()
    async with sessions() as db:
        again = await ProfileRepo(db).get_or_create()
        assert again.id == first.id
        assert again.display_name == "Alex"


@pytest.mark.asyncio
async def test_food_tags_are_stored_as_json(db: AsyncSession) -> None:
    repo = FoodRepo(db)
    food = await repo.add({"name": "Tofu", "serving_size": 100.0, "calories": 76.0, "tags": ["vegan", "protein"]})
    assert loads_list(food.tags_json) == ["vegan", "protein"]
    await repo.update(food, {"tags": []})
    assert loads_list(food.tags_json) == []
    assert await repo.count() == 1
    assert await repo.delete(food.id)
    assert not await repo.delete(food.id)
    assert await repo.count() == 0


@pytest.mark.asyncio
async def test_weight_history_is_ordered_by_date(db: AsyncSession) -> None:
    repo = WeightLogRepo(db)
    d = dt.date(2024, 5, 1)
    await repo.upsert(date=d + dt.timedelta(days=2), weight_kg=79.0)
    await repo.upsert(date=d, weight_kg=80.0)
    await repo.upsert(date=d + dt.timedelta(days=1), weight_kg=79.5)
    await repo.upsert(date=d, weight_kg=80.2)
    assert [(x.date, x.weight_kg) for x in await repo.history()] == [
        (d, 80.2),
        (d + dt.timedelta(days=1), 79.5),
        (d + dt.timedelta(days=2), 79.0),
    ]


async def _fresh() -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    return engine, async_sessionmaker(engine, expire_on_commit=False)


@pytest.mark.asyncio
async def test_init_db_seeds_sample_foods_once() -> None:
    engine, sessions = await _fresh()
    try:
        await init_db(engine, sessions, seed=True)
        await init_db(engine, sessions, seed=True)
        async with sessions() as db:
            repo = FoodRepo(db)
            assert await repo.count() == len(SAMPLE_FOODS)
            cats = await repo.categories()
            assert cats[0] == "all"
            assert {"meat", "fish", "grains", "vegetables", "fruits"} <= set(cats)
            chicken = await repo.list_foods(search="grilled chicken")
            assert len(chicken) == 1
            assert (chicken[0].calories, chicken[0].protein_g, chicken[0].serving_size) == (165, 31, 100)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_seed_skips_non_empty_table(db: AsyncSession) -> None:
    repo = FoodRepo(db)
    await repo.add({"name": "Own food", "serving_size": 100.0})
    assert await seed_foods(repo) == 0
    assert await repo.count() == 1
