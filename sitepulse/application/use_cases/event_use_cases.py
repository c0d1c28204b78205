# sitepulse/application/use_cases/event_use_cases.py

"""
Service for analytics events.

Stores validated SDK payloads tagged with the authenticated client and
reads them back by URL or session. Reads are always scoped to that client.
"""

import logging
from typing import Any, Dict, List

from sitepulse.adapters.outbound.persistence.repositories.event_repository import (
    EVENT_KINDS,
    event_repositories,
    path_repository,
)
from sitepulse.application.ports.inbound import IEventUseCase
from sitepulse.application.use_cases.base_use_cases import BaseService

logger = logging.getLogger(__name__)

# Column name -> name used by the browser SDK
_PUBLIC_FIELD_NAMES = {
    "client_id": "clientId",
    "session_id": "sessionId",
    "prev_url": "prevUrl",
}


def to_public(record: Dict[str, Any]) -> Dict[str, Any]:
    return {_PUBLIC_FIELD_NAMES.get(key, key): value for key, value in record.items()}


class AsyncEventService(BaseService, IEventUseCase):
    """
    Service for recording and reading analytics events.
    """

    def _repository(self, kind: str):
        try:
            return event_repositories[kind]
        except KeyError:
            raise ValueError(f"Unknown event kind: {kind}")

    async def record(self, kind: str, client_id: str, payload: Dict[str, Any]) -> int:
        """
        Store one event for ``client_id``.

        Returns:
            The id of the new record
        """
        repository = self._repository(kind)
        obj_in = dict(payload, client_id=client_id)
        event = await self._bounded(repository.create(self.db, obj_in=obj_in), f"create_{kind}")
        logger.debug(f"Recorded {kind} event {event.id} for client {client_id}")
        return event.id

    async def list_events(self, kind: str, client_id: str, **filters) -> List[Dict[str, Any]]:
        """
        List events of one kind, filtered by equality on the given fields.
        """
        repository = self._repository(kind)
        events = await self._bounded(
            repository.get_multi(self.db, client_id=client_id, **filters), f"list_{kind}"
        )
        return [to_public(event.to_dict()) for event in events]

    async def get_session(self, client_id: str, session_id: str) -> Dict[str, List[Dict[str, Any]]]:
        """
        All events of one session, grouped by kind.
        """
        # One session is shared by the queries, so they run one after the other
        result = {}
        for kind in EVENT_KINDS:
            result[kind] = await self.list_events(kind, client_id, session_id=session_id)
        return result

    async def remove_path(self, client_id: str, path_id: int) -> int:
        """
        Delete one path entry owned by ``client_id``.

        Returns:
            Number of deleted rows (0 or 1)
        """
        deleted = await self._bounded(
            path_repository.delete_where(self.db, id=path_id, client_id=client_id), "remove_path"
        )
        logger.info(f"Removed {deleted} path entries (id={path_id}) for client {client_id}")
        return deleted
