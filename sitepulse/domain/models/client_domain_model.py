# sitepulse/domain/models/client_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Client:
    """Domain model for a registered API client (a site running the SDK)."""
    id: int
    client_id: str  # Public identifier
    client_secret: str  # bcrypt hash, never the plaintext
    created_at: Optional[datetime] = None
