# sitepulse/domain/models/token_domain_model.py

from dataclasses import dataclass
from datetime import datetime


@dataclass
class IssuedToken:
    """Domain model for an opaque access token bound to a client."""
    token: str
    client_id: str
    expires_at: datetime  # naive UTC; the token is invalid at and after this instant
