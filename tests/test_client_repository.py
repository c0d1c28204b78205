"""
Tests for the credential store and the demo client seed.
"""

import asyncio

import pytest
from sqlalchemy import func, select

from sitepulse.adapters.outbound.persistence.models import Client
from sitepulse.adapters.outbound.persistence.repositories.client_repository import client_repository
from sitepulse.adapters.outbound.persistence.seeds import run_all_seeds, seed_demo_client
from sitepulse.domain.exceptions import DuplicateClientException


async def count_clients(database, client_id):
    async with database.session() as db:
        result = await db.execute(select(func.count()).select_from(Client).where(Client.client_id == client_id))
        return result.scalar()


class TestClientRepository:

    @pytest.mark.asyncio
    async def test_get_by_client_id_absent(self, db):
        assert await client_repository.get_by_client_id(db, "nobody") is None

    @pytest.mark.asyncio
    async def test_register_and_find(self, db, auth_manager):
        secret_hash = await auth_manager.hash_secret("s3cret")

        created = await client_repository.register(db, "site-a", secret_hash)
        found = await client_repository.get_by_client_id(db, "site-a")

        assert created.client_id == "site-a"
        assert found.id == created.id
        assert found.client_secret == secret_hash

    @pytest.mark.asyncio
    async def test_register_duplicate(self, db, auth_manager):
        secret_hash = await auth_manager.hash_secret("s3cret")
        await client_repository.register(db, "site-a", secret_hash)

        with pytest.raises(DuplicateClientException) as exc_info:
            await client_repository.register(db, "site-a", secret_hash)

        assert exc_info.value.status_code == 409
        assert exc_info.value.internal_code == "DUPLICATE_CLIENT"


class TestDemoSeed:

    @pytest.mark.asyncio
    async def test_seed_creates_hashed_client(self, database, auth_manager):
        created = await seed_demo_client(database, "demo-client", "demo-secret", auth_manager)

        async with database.session() as db:
            client = await client_repository.get_by_client_id(db, "demo-client")

        assert created is True
        assert client.client_secret != "demo-secret"
        assert await auth_manager.verify_secret("demo-secret", client.client_secret)

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, database, auth_manager):
        first = await seed_demo_client(database, "demo-client", "demo-secret", auth_manager)
        second = await seed_demo_client(database, "demo-client", "other-secret", auth_manager)

        assert (first, second) == (True, False)
        assert await count_clients(database, "demo-client") == 1

        # The existing identity is never rewritten
        async with database.session() as db:
            client = await client_repository.get_by_client_id(db, "demo-client")
        assert await auth_manager.verify_secret("demo-secret", client.client_secret)

    @pytest.mark.asyncio
    async def test_concurrent_seeding_creates_one_client(self, database, auth_manager):
        results = await asyncio.gather(*[
            seed_demo_client(database, "demo-client", "demo-secret", auth_manager)
            for _ in range(5)
        ])

        assert results.count(True) == 1
        assert await count_clients(database, "demo-client") == 1

    @pytest.mark.asyncio
    async def test_run_all_seeds_respects_flag(self, database, settings, auth_manager):
        disabled = settings.model_copy(update={"SEED_DEMO_CLIENT": False})

        await run_all_seeds(database, disabled, auth_manager)
        assert await count_clients(database, "demo-client") == 0

        await run_all_seeds(database, settings, auth_manager)
        assert await count_clients(database, "demo-client") == 1
