"""
Tests for ClientAuthManager: secret hashing and token generation.
"""

import re
import threading
from unittest.mock import patch

import pytest
from passlib.context import CryptContext

from sitepulse.adapters.outbound.security.auth_client_manager import ClientAuthManager

HEX_64 = re.compile(r"^[0-9a-f]{64}$")


@pytest.fixture
def manager():
    return ClientAuthManager(rounds=4)


@pytest.mark.asyncio
async def test_hash_is_not_the_plaintext(manager):
    secret_hash = await manager.hash_secret("demo-secret")

    assert secret_hash != "demo-secret"
    assert secret_hash.startswith("$bcrypt-sha256$")


@pytest.mark.asyncio
async def test_verify_secret(manager):
    secret_hash = await manager.hash_secret("demo-secret")

    assert await manager.verify_secret("demo-secret", secret_hash) is True
    assert await manager.verify_secret("wrong", secret_hash) is False


@pytest.mark.asyncio
async def test_same_secret_hashes_differently(manager):
    """Salted: two hashes of one secret differ but both verify."""
    first = await manager.hash_secret("demo-secret")
    second = await manager.hash_secret("demo-secret")

    assert first != second
    assert await manager.verify_secret("demo-secret", second)


@pytest.mark.asyncio
async def test_dummy_verify_runs(manager):
    assert await manager.dummy_verify() is None


@pytest.mark.asyncio
async def test_secrets_differing_after_72_bytes_do_not_match(manager):
    secret_hash = await manager.hash_secret("a" * 72 + "REAL")

    assert await manager.verify_secret("a" * 72 + "REAL", secret_hash) is True
    assert await manager.verify_secret("a" * 72 + "WRONG", secret_hash) is False


@pytest.mark.asyncio
async def test_plain_bcrypt_hash_still_verifies(manager):
    legacy_hash = CryptContext(schemes=["bcrypt"], bcrypt__rounds=4).hash("demo-secret")

    assert await manager.verify_secret("demo-secret", legacy_hash) is True
    assert manager.crypt_context.needs_update(legacy_hash)


@pytest.mark.asyncio
async def test_hashing_runs_off_the_event_loop(manager):
    loop_thread = threading.get_ident()
    seen = []
    original_hash = manager.crypt_context.hash

    def recording_hash(secret):
        seen.append(threading.get_ident())
        return original_hash(secret)

    with patch.object(manager.crypt_context, "hash", side_effect=recording_hash):
        await manager.hash_secret("demo-secret")

    assert seen and seen[0] != loop_thread


def test_generate_token_format():
    token = ClientAuthManager.generate_token()

    assert HEX_64.match(token)


def test_generate_token_uniqueness():
    tokens = {ClientAuthManager.generate_token() for _ in range(10_000)}

    assert len(tokens) == 10_000
