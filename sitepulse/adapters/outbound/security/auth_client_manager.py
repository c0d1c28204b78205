# sitepulse/adapters/outbound/security/auth_client_manager.py

import secrets
from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext

# 32 random bytes -> 64 hex characters, 256 bits of entropy
TOKEN_BYTES = 32


class ClientAuthManager:
    """
    Credential and token primitives for API clients.

    Secrets are stored as bcrypt-sha256 hashes, so every byte of a secret
    counts (plain bcrypt only reads the first 72). Tokens are opaque random
    strings whose meaning lives entirely in the token store.

    Hashing is CPU-bound and runs in the threadpool to keep the event loop free.
    """

    def __init__(self, rounds: int = 12):
        self.crypt_context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
            bcrypt__rounds=rounds,
        )

    @classmethod
    def from_settings(cls, settings) -> "ClientAuthManager":
        return cls(rounds=settings.SECRET_HASH_ROUNDS)

    async def hash_secret(self, secret: str) -> str:
        """
        Generate a secure secret hash for storage in the database.
        """
        return await run_in_threadpool(self.crypt_context.hash, secret)

    async def verify_secret(self, plain_secret: str, hashed_secret: str) -> bool:
        """
        Compare a plain text secret with the stored hash.
        """
        return await run_in_threadpool(self.crypt_context.verify, plain_secret, hashed_secret)

    async def dummy_verify(self) -> None:
        """
        Spend the same time a real verification would, for unknown client ids.
        """
        await run_in_threadpool(self.crypt_context.dummy_verify)

    @staticmethod
    def generate_token() -> str:
        return secrets.token_hex(TOKEN_BYTES)
