# sitepulse/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

This module is the authentication boundary: it pulls the bearer token
out of the request, hands it to the token validator and binds the
resolved client id to the request for downstream handlers.
"""

import logging
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sitepulse.adapters.configuration.config import Settings
from sitepulse.adapters.outbound.persistence.database import get_db
from sitepulse.adapters.outbound.security.auth_client_manager import ClientAuthManager
from sitepulse.application.use_cases.auth_use_cases import AsyncAuthService
from sitepulse.application.use_cases.event_use_cases import AsyncEventService
from sitepulse.domain.exceptions import MalformedAuthorizationException, MissingTokenException

# Configure logger
logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


########################################################################
# Application state
########################################################################

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_manager(request: Request) -> ClientAuthManager:
    return request.app.state.auth_manager


# Alias kept for readability in endpoint signatures
get_db_session = get_db


def get_auth_service(
        db: AsyncSession = Depends(get_db_session),
        settings: Settings = Depends(get_settings),
        auth_manager: ClientAuthManager = Depends(get_auth_manager),
) -> AsyncAuthService:
    return AsyncAuthService(db, settings, auth_manager)


def get_event_service(
        db: AsyncSession = Depends(get_db_session),
        settings: Settings = Depends(get_settings),
) -> AsyncEventService:
    return AsyncEventService(db, settings)


########################################################################
# Token extraction
########################################################################

def extract_token(authorization: Optional[str], query_token: Optional[str] = None,
                  allow_query_token: bool = True) -> str:
    """
    Extract a bearer token from the request credentials.

    The Authorization header wins when present and must read
    ``Bearer <token>``. Without a header, the ``token`` query parameter
    is used if allowed.

    Args:
        authorization: Raw Authorization header value
        query_token: Value of the ``token`` query parameter
        allow_query_token: Whether the query parameter fallback is enabled

    Returns:
        The token value

    Raises:
        MalformedAuthorizationException: Header present but not a Bearer credential
        MissingTokenException: No token presented at all
    """
    if authorization is not None and authorization.strip():
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
            raise MalformedAuthorizationException()
        return parts[1]

    if allow_query_token and query_token:
        return query_token

    raise MissingTokenException()


async def get_current_client_id(
        request: Request,
        auth_service: AsyncAuthService = Depends(get_auth_service),
        settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate the request and return the client id bound to its token.

    The client id is also stored on ``request.state.client_id``.

    Raises:
        MissingTokenException: If no token was presented (400)
        MalformedAuthorizationException: If the header is not a Bearer credential (400)
        InvalidTokenException: If the token is unknown or expired (401)
    """
    token = extract_token(
        request.headers.get("authorization"),
        request.query_params.get("token"),
        settings.ALLOW_QUERY_TOKEN,
    )
    client_id = await auth_service.validate_token(token)
    request.state.client_id = client_id
    return client_id
