"""
Shared fixtures.

Each test gets its own file-backed SQLite database so concurrent
sessions behave like separate connections to a real store.
"""

from datetime import datetime

import pytest

from sitepulse.adapters.configuration.config import Settings
from sitepulse.adapters.outbound.persistence.database import Database
from sitepulse.adapters.outbound.security.auth_client_manager import ClientAuthManager

T0 = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway database, with cheap bcrypt."""
    return Settings(
        ENVIRONMENT="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'sitepulse.db'}",
        SECRET_HASH_ROUNDS=4,
        TOKEN_TTL_SECONDS=300,
        TOKEN_SLIDING_RENEWAL=True,
        TOKEN_CLEANUP_INTERVAL_SECONDS=3600,
        STORE_TIMEOUT_SECONDS=5.0,
        SEED_DEMO_CLIENT=True,
        DEMO_CLIENT_ID="demo-client",
        DEMO_CLIENT_SECRET="demo-secret",
        ADMIN_API_KEY=None,
    )


@pytest.fixture
def auth_manager(settings):
    return ClientAuthManager.from_settings(settings)


@pytest.fixture
async def database(settings):
    database = Database.from_settings(settings)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
async def db(database):
    async with database.session() as session:
        yield session


@pytest.fixture
async def demo_client(db, auth_manager):
    """Registers demo-client/demo-secret and returns the domain client."""
    from sitepulse.adapters.outbound.persistence.repositories.client_repository import client_repository

    secret_hash = await auth_manager.hash_secret("demo-secret")
    return await client_repository.register(db, "demo-client", secret_hash)
