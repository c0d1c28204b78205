# sitepulse/adapters/outbound/persistence/models/client_model.py

"""
Client model for API authentication.

A client is a site (or any other SDK consumer) allowed to push
analytics events with its own credentials.
"""

from sqlalchemy import Column, String, DateTime, func
from sitepulse.adapters.outbound.persistence.database import Base
from sitepulse.adapters.outbound.persistence.models.types import BigIntegerPK


class Client(Base):
    """
    Registered API client.

    Attributes:
        id: Surrogate key
        client_id: Public client identifier (unique)
        client_secret: bcrypt hash of the client secret
        created_at: Creation timestamp
    """
    __tablename__ = "clients"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    client_id = Column(String(255), unique=True, nullable=False, index=True)
    client_secret = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<Client(client_id={self.client_id})>"
