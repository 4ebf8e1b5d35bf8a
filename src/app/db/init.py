"""Database bootstrap: wait for the server, create tables, seed categories."""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import settings
from app import models  # noqa: F401  (registers every table on the metadata)
from app.models.base import BaseModel
from app.repositories.category import CategoryRepository

logger = logging.getLogger(__name__)


async def wait_for_database(engine: AsyncEngine, retries: int, delay: float) -> None:
    """Ping the database until it answers or the attempts run out.

    Raises:
        The last connection error once ``retries`` attempts have failed.
    """
    for attempt in range(1, retries + 1):
        try:
            logger.info(f"Database connection attempt {attempt} of {retries}")
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connection established")
            return
        except Exception as e:
            logger.warning(
                f"Database connection attempt {attempt} failed",
                extra={"error_type": type(e).__name__},
            )
            if attempt >= retries:
                logger.error("Maximum database connection attempts reached")
                raise
            await asyncio.sleep(delay)


async def init_db(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
    default_categories: list[str] | None = None,
    retries: int | None = None,
    delay: float | None = None,
) -> None:
    """Create tables and seed the default category vocabulary.

    Existing categories (and their frequencies) are left untouched.
    """
    await wait_for_database(
        engine,
        retries=retries if retries is not None else settings.db_init_retries,
        delay=delay if delay is not None else settings.db_init_retry_delay_seconds,
    )

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    names = default_categories if default_categories is not None else settings.default_category_list
    async with session_factory() as session:
        created = await CategoryRepository(session).seed(names)

    logger.info("Database initialized", extra={"seeded_categories": created})
