# sitepulse/application/dtos/client_credentials_dto.py

"""
Schemas for client credentials and access tokens.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ClientTokenResponse(BaseModel):
    """
    Response of a successful token issuance.

    ``expires_at`` is held as naive UTC, like every stored timestamp, and
    rendered with an explicit UTC offset.
    """
    access_token: str = Field(..., description="Opaque access token")
    token_type: str = Field("Bearer", description="Token type")
    expires_in: int = Field(..., description="Lifetime in seconds")
    expires_at: datetime = Field(..., description="Absolute expiry (UTC)")

    @field_serializer("expires_at")
    def serialize_expires_at(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


class ClientRegisterResponse(BaseModel):
    """
    Response of a client registration. The secret is never echoed back.
    """
    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(..., alias="clientId", description="Registered client identifier")


class TokenIntrospectionResponse(BaseModel):
    """
    Result of checking a token: which client it belongs to.
    """
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    client_id: str = Field(..., alias="clientId")
