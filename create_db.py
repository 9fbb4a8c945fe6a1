# create_db.py
import asyncio
import os

from sqlalchemy.ext.asyncio import AsyncEngine

from shared.config import DATABASE_PATH, TRACKS, YEARS
from shared.db import Base, build_engine
from shared.logger import get_logger

# Import all models here so they are registered with SQLAlchemy's metadata
import services.book_exchange.models
from services.book_exchange.models.classes import SchoolClass

logger = get_logger(__name__)


def needs_seed(database_path: str) -> bool:
    """Classes are seeded only when the store file is created by this run."""
    return not os.path.exists(database_path)


async def init_models(engine: AsyncEngine, seed: bool = False) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        if seed:
            await conn.execute(
                SchoolClass.__table__.insert(),
                [{"indirizzo": track, "anno": year} for track in TRACKS for year in YEARS],
            )
    if seed:
        logger.info("Database initialized and classes seeded.")
    else:
        logger.info("Database schema checked.")


async def main() -> None:
    seed = needs_seed(DATABASE_PATH)
    engine = build_engine(DATABASE_PATH)
    try:
        await init_models(engine, seed=seed)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
