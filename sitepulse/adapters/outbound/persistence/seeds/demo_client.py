# sitepulse/adapters/outbound/persistence/seeds/demo_client.py

"""
Seed for the demo client identity used by the browser SDK examples.
"""

import logging
from sqlalchemy.exc import IntegrityError

from sitepulse.adapters.outbound.persistence.database import Database
from sitepulse.adapters.outbound.persistence.models.client_model import Client
from sitepulse.adapters.outbound.persistence.repositories.client_repository import client_repository
from sitepulse.adapters.outbound.security.auth_client_manager import ClientAuthManager

logger = logging.getLogger(__name__)


async def seed_demo_client(database: Database, client_id: str, secret: str,
                           auth_manager: ClientAuthManager) -> bool:
    """
    Insert the demo client if it is absent.

    Safe to run from several workers at once: the loser of a concurrent
    insert hits the unique index on client_id and counts that as done.

    Returns:
        True if this call created the client, False if it already existed
    """
    async with database.session() as db:
        if await client_repository.get_by_client_id(db, client_id) is not None:
            logger.info(f"🟡 Demo client '{client_id}' already exists.")
            return False

        secret_hash = await auth_manager.hash_secret(secret)
        db.add(Client(client_id=client_id, client_secret=secret_hash))
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.info(f"🟡 Demo client '{client_id}' created concurrently.")
            return False

    logger.info(f"🟢 Demo client '{client_id}' created.")
    return True
