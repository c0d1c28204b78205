"""
Tests for AsyncAuthService: token issuance and validation.
"""

import asyncio
import re
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from sitepulse.application.use_cases.auth_use_cases import AsyncAuthService
from sitepulse.domain.exceptions import (
    DatabaseOperationException,
    DuplicateClientException,
    DuplicateTokenException,
    InvalidCredentialsException,
    InvalidInputException,
    InvalidTokenException,
    MissingTokenException,
    StoreTimeoutException,
    TokenIssuanceException,
)
from sitepulse.domain.models.client_domain_model import Client
from sitepulse.domain.models.token_domain_model import IssuedToken
from tests.conftest import T0

T = 300
SECOND = timedelta(seconds=1)


@pytest.fixture
def service(db, settings, auth_manager):
    return AsyncAuthService(db, settings, auth_manager)


class TestIssueToken:

    @pytest.mark.asyncio
    async def test_demo_scenario(self, service, demo_client):
        response = await service.issue_token("demo-client", "demo-secret", now=T0)

        assert re.match(r"^[0-9a-f]{64}$", response.access_token)
        assert response.token_type == "Bearer"
        assert response.expires_in == 300
        assert response.expires_at == T0 + timedelta(seconds=300)
        assert response.model_dump(mode="json")["expires_at"] == "2024-01-01T12:05:00+00:00"

        assert await service.validate_token(response.access_token, now=T0) == "demo-client"

    @pytest.mark.asyncio
    async def test_wrong_secret_and_unknown_client_are_indistinguishable(self, service, demo_client):
        with pytest.raises(InvalidCredentialsException) as wrong_secret:
            await service.issue_token("demo-client", "wrong")
        with pytest.raises(InvalidCredentialsException) as unknown_client:
            await service.issue_token("no-such-client", "demo-secret")

        assert wrong_secret.value.status_code == unknown_client.value.status_code == 401
        assert wrong_secret.value.detail == unknown_client.value.detail
        assert wrong_secret.value.internal_code == unknown_client.value.internal_code

    @pytest.mark.asyncio
    @pytest.mark.parametrize("client_id, client_secret", [
        (None, "demo-secret"),
        ("", "demo-secret"),
        ("demo-client", None),
        ("demo-client", ""),
        (123, "demo-secret"),
        ("demo-client", ["demo-secret"]),
    ])
    async def test_rejects_malformed_input_before_store(self, settings, auth_manager, client_id, client_secret):
        clients = MagicMock()
        clients.get_by_client_id = AsyncMock()
        service = AsyncAuthService(None, settings, auth_manager, clients=clients, tokens=MagicMock())

        with pytest.raises(InvalidInputException) as exc_info:
            await service.issue_token(client_id, client_secret)

        assert exc_info.value.status_code == 400
        clients.get_by_client_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_each_issue_yields_a_new_token(self, service, demo_client):
        first = await service.issue_token("demo-client", "demo-secret")
        second = await service.issue_token("demo-client", "demo-secret")

        assert first.access_token != second.access_token
        # Re-issuing does not revoke the earlier token
        assert await service.validate_token(first.access_token) == "demo-client"
        assert await service.validate_token(second.access_token) == "demo-client"


class TestIssueTokenRetries:

    @pytest.fixture
    async def stored_client(self, auth_manager):
        return Client(id=1, client_id="demo-client", client_secret=await auth_manager.hash_secret("demo-secret"))

    def make_service(self, settings, auth_manager, stored_client, insert_side_effect):
        clients = MagicMock()
        clients.get_by_client_id = AsyncMock(return_value=stored_client)
        tokens = MagicMock()
        tokens.insert = AsyncMock(side_effect=insert_side_effect)
        return AsyncAuthService(None, settings, auth_manager, clients=clients, tokens=tokens), tokens

    @pytest.mark.asyncio
    async def test_collision_is_retried_with_fresh_token(self, settings, auth_manager, stored_client):
        service, tokens = self.make_service(
            settings, auth_manager, stored_client,
            [DuplicateTokenException(), DuplicateTokenException(), None],
        )

        response = await service.issue_token("demo-client", "demo-secret")

        assert tokens.insert.await_count == 3
        attempted = [call.args[1] for call in tokens.insert.await_args_list]
        assert len(set(attempted)) == 3
        assert response.access_token == attempted[-1]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, settings, auth_manager, stored_client):
        service, tokens = self.make_service(
            settings, auth_manager, stored_client,
            DuplicateTokenException(),
        )

        with pytest.raises(TokenIssuanceException) as exc_info:
            await service.issue_token("demo-client", "demo-secret")

        assert exc_info.value.status_code == 500
        assert tokens.insert.await_count == settings.TOKEN_ISSUE_MAX_ATTEMPTS

    @pytest.mark.asyncio
    async def test_other_store_errors_are_not_retried(self, settings, auth_manager, stored_client):
        service, tokens = self.make_service(
            settings, auth_manager, stored_client,
            DatabaseOperationException(),
        )

        with pytest.raises(DatabaseOperationException):
            await service.issue_token("demo-client", "demo-secret")

        assert tokens.insert.await_count == 1

    @pytest.mark.asyncio
    async def test_store_timeout(self, settings, auth_manager):
        async def hang(*args, **kwargs):
            await asyncio.sleep(10)

        clients = MagicMock()
        clients.get_by_client_id = hang
        fast = settings.model_copy(update={"STORE_TIMEOUT_SECONDS": 0.05})
        service = AsyncAuthService(None, fast, auth_manager, clients=clients, tokens=MagicMock())

        with pytest.raises(StoreTimeoutException) as exc_info:
            await service.issue_token("demo-client", "demo-secret")

        assert exc_info.value.status_code == 500
        assert exc_info.value.internal_code == "STORE_TIMEOUT"


class TestValidateToken:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None, 42])
    async def test_missing_token_never_hits_store(self, settings, auth_manager, token):
        tokens = MagicMock()
        tokens.find_valid = AsyncMock()
        service = AsyncAuthService(None, settings, auth_manager, clients=MagicMock(), tokens=tokens)

        with pytest.raises(MissingTokenException) as exc_info:
            await service.validate_token(token)

        assert exc_info.value.status_code == 400
        tokens.find_valid.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_token(self, service):
        with pytest.raises(InvalidTokenException) as exc_info:
            await service.validate_token("f" * 64)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_ttl_boundaries_without_renewal(self, service, demo_client):
        issued = await service.issue_token("demo-client", "demo-secret", now=T0)

        assert await service.validate_token(
            issued.access_token, now=T0 + timedelta(seconds=T) - SECOND, sliding_renewal=False
        ) == "demo-client"

        with pytest.raises(InvalidTokenException):
            await service.validate_token(
                issued.access_token, now=T0 + timedelta(seconds=T) + SECOND, sliding_renewal=False
            )

    @pytest.mark.asyncio
    async def test_invalid_exactly_at_expiry(self, service, demo_client):
        issued = await service.issue_token("demo-client", "demo-secret", now=T0)

        with pytest.raises(InvalidTokenException):
            await service.validate_token(issued.access_token, now=issued.expires_at, sliding_renewal=False)

    @pytest.mark.asyncio
    async def test_sliding_renewal_extends_validity(self, service, demo_client):
        issued = await service.issue_token("demo-client", "demo-secret", now=T0)

        await service.validate_token(issued.access_token, now=T0 + timedelta(seconds=T) - SECOND,
                                     sliding_renewal=True)

        assert await service.validate_token(
            issued.access_token, now=T0 + timedelta(seconds=T) + SECOND, sliding_renewal=True
        ) == "demo-client"

    @pytest.mark.asyncio
    async def test_sliding_renewal_follows_settings(self, db, settings, auth_manager, demo_client):
        no_renewal = settings.model_copy(update={"TOKEN_SLIDING_RENEWAL": False})
        service = AsyncAuthService(db, no_renewal, auth_manager)
        issued = await service.issue_token("demo-client", "demo-secret", now=T0)

        await service.validate_token(issued.access_token, now=T0 + timedelta(seconds=T) - SECOND)

        with pytest.raises(InvalidTokenException):
            await service.validate_token(issued.access_token, now=T0 + timedelta(seconds=T) + SECOND)

    @pytest.mark.asyncio
    async def test_renewal_failure_does_not_fail_request(self, settings, auth_manager):
        tokens = MagicMock()
        tokens.find_valid = AsyncMock(return_value=IssuedToken("tok", "demo-client", T0 + timedelta(seconds=T)))
        tokens.extend_expiry = AsyncMock(side_effect=DatabaseOperationException())
        service = AsyncAuthService(None, settings, auth_manager, clients=MagicMock(), tokens=tokens)

        assert await service.validate_token("tok", now=T0, sliding_renewal=True) == "demo-client"
        tokens.extend_expiry.assert_awaited_once_with(None, "tok", T0 + timedelta(seconds=T))

    @pytest.mark.asyncio
    async def test_renewal_of_vanished_token_is_not_an_error(self, settings, auth_manager):
        tokens = MagicMock()
        tokens.find_valid = AsyncMock(return_value=IssuedToken("tok", "demo-client", T0 + timedelta(seconds=T)))
        tokens.extend_expiry = AsyncMock(return_value=False)
        service = AsyncAuthService(None, settings, auth_manager, clients=MagicMock(), tokens=tokens)

        assert await service.validate_token("tok", now=T0) == "demo-client"


class TestRegisterClient:

    @pytest.mark.asyncio
    async def test_register_then_issue(self, service):
        client = await service.register_client("site-b", "b-secret")

        assert client.client_secret != "b-secret"
        issued = await service.issue_token("site-b", "b-secret")
        assert await service.validate_token(issued.access_token) == "site-b"

    @pytest.mark.asyncio
    async def test_register_duplicate(self, service, demo_client):
        with pytest.raises(DuplicateClientException):
            await service.register_client("demo-client", "another")

    @pytest.mark.asyncio
    async def test_register_requires_both_fields(self, service):
        with pytest.raises(InvalidInputException):
            await service.register_client("site-c", "")

    @pytest.mark.asyncio
    async def test_long_secret_must_match_in_full(self, service):
        await service.register_client("site-long", "a" * 72 + "REAL")

        with pytest.raises(InvalidCredentialsException):
            await service.issue_token("site-long", "a" * 72 + "WRONG")

        issued = await service.issue_token("site-long", "a" * 72 + "REAL")
        assert await service.validate_token(issued.access_token) == "site-long"
