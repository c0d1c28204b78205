# sitepulse/adapters/outbound/persistence/seeds/__init__.py

"""
Seeds run at startup to populate the database with initial data.
"""

import logging

from sitepulse.adapters.configuration.config import Settings
from sitepulse.adapters.outbound.persistence.database import Database
from sitepulse.adapters.outbound.persistence.seeds.demo_client import seed_demo_client
from sitepulse.adapters.outbound.security.auth_client_manager import ClientAuthManager

logger = logging.getLogger(__name__)


async def run_all_seeds(database: Database, settings: Settings, auth_manager: ClientAuthManager) -> None:
    """
    Runs every seed in order.
    """
    if settings.SEED_DEMO_CLIENT:
        await seed_demo_client(
            database,
            settings.DEMO_CLIENT_ID,
            settings.DEMO_CLIENT_SECRET,
            auth_manager,
        )
    else:
        logger.info("Demo client seed disabled")


__all__ = ["run_all_seeds", "seed_demo_client"]
