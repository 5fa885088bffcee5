from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fittrack.models import Base
from fittrack.repositories import FoodRepo
from fittrack.seed import seed_foods


logger = logging.getLogger(__name__)


async def init_db(engine: AsyncEngine, sessions: async_sessionmaker[AsyncSession], *, seed: bool = True) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        if engine.dialect.name == "sqlite":
            # Pragmas for better durability on SQLite
            await conn.execute(text("PRAGMA journal_mode=WAL;"))
            await conn.execute(text("PRAGMA synchronous=NORMAL;"))

    if not seed:
        return
    async with sessions() as db:
        n = await seed_foods(FoodRepo(db))
        await db.commit()
    if n:
        logger.info("seeded %d sample foods", n)
