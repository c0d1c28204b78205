# sitepulse/adapters/inbound/api/v1/endpoints/auth_endpoint.py

"""
Endpoints for client authentication.

Token issuance from client credentials, token introspection and
admin-only client registration.
"""

import logging
import secrets
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Header, Request, status

from sitepulse.adapters.configuration.config import Settings
from sitepulse.adapters.inbound.api.deps import get_auth_service, get_current_client_id, get_settings
from sitepulse.application.dtos.client_credentials_dto import (
    ClientRegisterResponse,
    ClientTokenResponse,
    TokenIntrospectionResponse,
)
from sitepulse.application.use_cases.auth_use_cases import AsyncAuthService
from sitepulse.domain.exceptions import (
    InvalidInputException,
    PermissionDeniedException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Raises:
        InvalidInputException: If the body is not valid JSON or not an object
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidInputException(detail="Invalid JSON")
    if not isinstance(body, dict):
        raise InvalidInputException(detail="Request body must be a JSON object")
    return body


@router.post(
    "/token",
    response_model=ClientTokenResponse,
    summary="Issue Token - Exchanges client credentials for an access token",
    description="""
    Body: `{"clientId": "...", "clientSecret": "..."}`.

    Returns an opaque bearer token valid for `expires_in` seconds.
    Unknown clients and wrong secrets both answer 401.
    """,
)
async def issue_token(
        request: Request,
        auth_service: AsyncAuthService = Depends(get_auth_service),
):
    body = await read_json_object(request)
    return await auth_service.issue_token(body.get("clientId"), body.get("clientSecret"))


@router.get(
    "/token",
    response_model=TokenIntrospectionResponse,
    summary="Check Token - Returns the client owning a token",
)
async def introspect_token(client_id: str = Depends(get_current_client_id)):
    return TokenIntrospectionResponse(client_id=client_id)


@router.post(
    "/clients",
    response_model=ClientRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Client - Creates a new client identity (admin)",
    include_in_schema=False,
)
async def register_client(
        request: Request,
        x_admin_key: Optional[str] = Header(None),
        settings: Settings = Depends(get_settings),
        auth_service: AsyncAuthService = Depends(get_auth_service),
):
    if not settings.ADMIN_API_KEY:
        raise ResourceNotFoundException(detail="Not Found")

    if not x_admin_key or not secrets.compare_digest(x_admin_key, settings.ADMIN_API_KEY):
        logger.warning("Client registration attempt with invalid admin key")
        raise PermissionDeniedException(detail="Invalid admin key")

    body = await read_json_object(request)
    client = await auth_service.register_client(body.get("clientId"), body.get("clientSecret"))
    return ClientRegisterResponse(client_id=client.client_id)
