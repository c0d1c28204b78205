# sitepulse/application/use_cases/auth_use_cases.py

"""
Service for client authentication.

Implements token issuance (client credentials -> opaque bearer token),
token validation with optional sliding renewal, and client registration.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from sitepulse.adapters.configuration.config import Settings
from sitepulse.adapters.outbound.persistence.repositories.client_repository import client_repository
from sitepulse.adapters.outbound.persistence.repositories.token_repository import token_repository
from sitepulse.adapters.outbound.security.auth_client_manager import ClientAuthManager
from sitepulse.application.dtos.client_credentials_dto import ClientTokenResponse
from sitepulse.application.ports.inbound import IAuthUseCase
from sitepulse.application.use_cases.base_use_cases import BaseService, utcnow
from sitepulse.domain.exceptions import (
    DuplicateTokenException,
    InvalidCredentialsException,
    InvalidInputException,
    InvalidTokenException,
    MissingTokenException,
    ServerErrorException,
    TokenIssuanceException,
)
from sitepulse.domain.models.client_domain_model import Client

logger = logging.getLogger(__name__)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


class AsyncAuthService(BaseService, IAuthUseCase):
    """
    Service for client authentication.

    Unknown client ids and wrong secrets produce the same
    InvalidCredentialsException so callers cannot probe which ids exist.
    """

    def __init__(self, db_session: AsyncSession, settings: Settings, auth_manager: ClientAuthManager,
                 clients=client_repository, tokens=token_repository):
        super().__init__(db_session, settings)
        self.auth_manager = auth_manager
        self.clients = clients
        self.tokens = tokens

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.settings.TOKEN_TTL_SECONDS)

    async def issue_token(self, client_id: Any, client_secret: Any,
                          now: Optional[datetime] = None) -> ClientTokenResponse:
        """
        Verify client credentials and issue a new access token.

        Args:
            client_id: Public client identifier
            client_secret: Plain text client secret
            now: Issuance time (naive UTC), defaults to the current time

        Returns:
            The token, its type and its lifetime

        Raises:
            InvalidInputException: If either value is missing or not a non-empty string
            InvalidCredentialsException: If the client is unknown or the secret is wrong
            TokenIssuanceException: If no unique token could be stored
        """
        if not _is_non_empty_string(client_id):
            raise InvalidInputException(detail="clientId and clientSecret required",
                                        fields={"clientId": "must be a non-empty string"})
        if not _is_non_empty_string(client_secret):
            raise InvalidInputException(detail="clientId and clientSecret required",
                                        fields={"clientSecret": "must be a non-empty string"})

        client = await self._bounded(
            self.clients.get_by_client_id(self.db, client_id), "get_by_client_id"
        )
        if client is None:
            await self.auth_manager.dummy_verify()
            logger.warning(f"Token request for unknown client: {client_id}")
            raise InvalidCredentialsException()

        if not await self.auth_manager.verify_secret(client_secret, client.client_secret):
            logger.warning(f"Token request with incorrect secret: {client_id}")
            raise InvalidCredentialsException()

        issued_at = now or utcnow()
        expires_at = issued_at + self.ttl
        attempts = self.settings.TOKEN_ISSUE_MAX_ATTEMPTS
        last_error = None

        for attempt in range(1, attempts + 1):
            token = self.auth_manager.generate_token()
            try:
                await self._bounded(
                    self.tokens.insert(self.db, token, client_id, expires_at), "insert_token"
                )
            except DuplicateTokenException as e:
                last_error = e
                logger.error(f"Token collision for client {client_id} (attempt {attempt}/{attempts})")
                continue

            logger.info(f"Access token issued for client: {client_id}")
            return ClientTokenResponse(
                access_token=token,
                token_type="Bearer",
                expires_in=self.settings.TOKEN_TTL_SECONDS,
                expires_at=expires_at,
            )

        logger.critical(f"Could not store a unique token after {attempts} attempts; check the random source")
        raise TokenIssuanceException(original_error=last_error)

    async def validate_token(self, token: Any, now: Optional[datetime] = None,
                             sliding_renewal: Optional[bool] = None) -> str:
        """
        Resolve a presented token to the client that owns it.

        Args:
            token: Token value extracted from the request
            now: Validation time (naive UTC), defaults to the current time
            sliding_renewal: Push the expiry to ``now + TTL`` on success;
                defaults to TOKEN_SLIDING_RENEWAL

        Returns:
            The owning client_id

        Raises:
            MissingTokenException: If no token was presented
            InvalidTokenException: If the token is unknown or expired
        """
        if not _is_non_empty_string(token):
            raise MissingTokenException()

        now = now or utcnow()
        record = await self._bounded(self.tokens.find_valid(self.db, token, now), "find_valid")
        if record is None:
            logger.warning(f"Rejected invalid or expired token {token[:8]}...")
            raise InvalidTokenException()

        if sliding_renewal is None:
            sliding_renewal = self.settings.TOKEN_SLIDING_RENEWAL

        if sliding_renewal:
            try:
                await self._bounded(
                    self.tokens.extend_expiry(self.db, token, now + self.ttl), "extend_expiry"
                )
            except ServerErrorException as e:
                # The token was valid when checked; renewal is best-effort
                logger.warning(f"Could not extend token expiry for client {record.client_id}: {e.detail}")

        return record.client_id

    async def register_client(self, client_id: Any, client_secret: Any) -> Client:
        """
        Register a new client identity with a hashed secret.

        Raises:
            InvalidInputException: If either value is missing or empty
            DuplicateClientException: If client_id is already registered
        """
        if not _is_non_empty_string(client_id) or not _is_non_empty_string(client_secret):
            raise InvalidInputException(detail="clientId and clientSecret required")

        secret_hash = await self.auth_manager.hash_secret(client_secret)
        return await self._bounded(
            self.clients.register(self.db, client_id, secret_hash), "register_client"
        )
