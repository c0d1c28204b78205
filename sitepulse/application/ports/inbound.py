# sitepulse/application/ports/inbound.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from sitepulse.application.dtos.client_credentials_dto import ClientTokenResponse
from sitepulse.domain.models.client_domain_model import Client


class IAuthUseCase(ABC):
    """Interface for client authentication use cases."""

    @abstractmethod
    def issue_token(self, client_id: Any, client_secret: Any) -> ClientTokenResponse:
        """Verify client credentials and issue an access token."""
        pass

    @abstractmethod
    def validate_token(self, token: Any, now: Optional[datetime] = None,
                       sliding_renewal: Optional[bool] = None) -> str:
        """Resolve a token to its client id."""
        pass

    @abstractmethod
    def register_client(self, client_id: Any, client_secret: Any) -> Client:
        """Register a new client identity."""
        pass


class IEventUseCase(ABC):
    """Interface for analytics event use cases."""

    @abstractmethod
    def record(self, kind: str, client_id: str, payload: Dict[str, Any]) -> int:
        """Store one event and return its id."""
        pass

    @abstractmethod
    def list_events(self, kind: str, client_id: str, **filters) -> List[Dict[str, Any]]:
        """List events of one kind."""
        pass

    @abstractmethod
    def get_session(self, client_id: str, session_id: str) -> Dict[str, List[Dict[str, Any]]]:
        """All events of a session, grouped by kind."""
        pass

    @abstractmethod
    def remove_path(self, client_id: str, path_id: int) -> int:
        """Delete one path entry."""
        pass
