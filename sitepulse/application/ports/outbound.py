# sitepulse/application/ports/outbound.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from sitepulse.domain.models.client_domain_model import Client
from sitepulse.domain.models.token_domain_model import IssuedToken


class IClientRepository(ABC):
    """Credential store interface."""

    @abstractmethod
    def get_by_client_id(self, db, client_id: str) -> Optional[Client]:
        """Get client by client_id."""
        pass

    @abstractmethod
    def register(self, db, client_id: str, secret_hash: str) -> Client:
        """Store a new client; fails if client_id exists."""
        pass


class ITokenRepository(ABC):
    """Token store interface."""

    @abstractmethod
    def insert(self, db, token: str, client_id: str, expires_at: datetime) -> IssuedToken:
        """Store a token; fails on a duplicate value."""
        pass

    @abstractmethod
    def find_valid(self, db, token: str, now: datetime) -> Optional[IssuedToken]:
        """Get a token that is still valid at ``now``."""
        pass

    @abstractmethod
    def extend_expiry(self, db, token: str, new_expires_at: datetime) -> bool:
        """Move a token's expiry; no-op if it is gone."""
        pass

    @abstractmethod
    def cleanup_expired(self, db, now: datetime) -> int:
        """Delete tokens expired at ``now``."""
        pass
