#!/usr/bin/env python3
"""Initialize reward vault database tables."""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger

from reward_vault.config.database import create_engine
from reward_vault.config.logging import setup_logging
from reward_vault.config.settings import settings
from reward_vault.models import Base


async def init_database() -> None:
    """Create all reward vault tables."""
    setup_logging(settings)
    logger.info("Connecting to database...")
    engine = create_engine(settings.database_url, echo=False)

    async with engine.begin() as conn:
        logger.info("Creating tables (checkfirst=True)...")
        await conn.run_sync(
            Base.metadata.create_all,
            checkfirst=True
        )

    await engine.dispose()
    logger.success("Database tables created successfully!")


if __name__ == "__main__":
    asyncio.run(init_database())
