# sitepulse/application/use_cases/base_use_cases.py

"""
Base class for application services.

Holds the request's database session and bounds every store call with
the configured timeout, so no request waits on the store indefinitely.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from sitepulse.adapters.configuration.config import Settings
from sitepulse.domain.exceptions import StoreTimeoutException

logger = logging.getLogger(__name__)

T = TypeVar("T")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseService:
    """
    Common plumbing for services backed by the record store.
    """

    def __init__(self, db_session: AsyncSession, settings: Settings):
        """
        Args:
            db_session: Active SQLAlchemy session
            settings: Application settings
        """
        self.db = db_session
        self.settings = settings

    async def _bounded(self, awaitable: Awaitable[T], operation: str) -> T:
        """
        Await a store call, giving up after STORE_TIMEOUT_SECONDS.

        Raises:
            StoreTimeoutException: If the call did not finish in time
        """
        try:
            return await asyncio.wait_for(awaitable, timeout=self.settings.STORE_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.error(f"Store call timed out: {operation}")
            raise StoreTimeoutException(operation)
