#!/usr/bin/env python3
"""Create the explorer tables."""

import asyncio
import sys

from loguru import logger

from explorer.config.database import create_engine
from explorer.config.settings import get_settings
from explorer.models import Base

# Configure logger for script
logger.remove()
logger.add(sys.stderr, level="INFO")


async def init_database() -> None:
    """Create all database tables."""
    settings = get_settings()

    logger.info("Connecting to database...")
    engine = create_engine(settings)

    async with engine.begin() as conn:
        logger.info("Creating tables (checkfirst=True)...")
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    await engine.dispose()
    logger.success(f"Created {len(Base.metadata.tables)} tables")


if __name__ == "__main__":
    asyncio.run(init_database())
