# sitepulse/adapters/outbound/persistence/models/token_model.py

"""
Model for issued access tokens.

Rows are removed by the periodic cleanup task once ``expires_at`` has
passed. Reads must still compare ``expires_at`` themselves, since the
sweep only runs every TOKEN_CLEANUP_INTERVAL_SECONDS.
"""

from sqlalchemy import Column, String, DateTime, func
from sitepulse.adapters.outbound.persistence.database import Base


class AccessToken(Base):
    """
    Opaque bearer token issued to a client.

    Attributes:
        token: Token value (primary key, so collisions are rejected by the store)
        client_id: Public id of the owning client
        expires_at: Absolute expiry, naive UTC
        created_at: Issuance timestamp
    """
    __tablename__ = "access_tokens"

    token = Column(String(128), primary_key=True)
    client_id = Column(String(255), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
