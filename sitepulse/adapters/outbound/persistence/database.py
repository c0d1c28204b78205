# sitepulse/adapters/outbound/persistence/database.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from sitepulse.adapters.configuration.config import Settings

# Configure logger
logger = logging.getLogger(__name__)

# Parent class of every ORM model, holds the shared metadata
Base = declarative_base()


class Database:
    """
    Connection handle for the record store.

    Created once at process start (see the lifespan in ``sitepulse.main``),
    passed to whoever needs a session, and disposed explicitly on shutdown.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine_kwargs = {"echo": False, "future": True, "pool_pre_ping": True}
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.STORE_TIMEOUT_SECONDS,
                pool_recycle=1800,
            )

        engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)
        logger.info(f"Connecting to database: {settings.DATABASE_URL.split('@')[-1]}")
        return cls(engine)

    async def create_all(self) -> None:
        """Create tables that don't exist yet."""
        # Registers every model on Base.metadata; imported here to avoid a cycle
        import sitepulse.adapters.outbound.persistence.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provides an async session, committing on success and
        rolling back on error.

        Example:
            ```python
            async with database.session() as db:
                client = await client_repository.get_by_client_id(db, "demo-client")
            ```
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection for use with FastAPI.

    Yields a session from the Database handle stored on ``app.state``.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
