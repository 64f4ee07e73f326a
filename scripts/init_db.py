import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import create_engine_from_settings, create_tables
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def init_database():
    logger.info("Connecting to database...")
    engine = create_engine_from_settings(settings)

    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    setup_logging(settings)
    asyncio.run(init_database())
