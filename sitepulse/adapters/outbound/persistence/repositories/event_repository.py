# sitepulse/adapters/outbound/persistence/repositories/event_repository.py

"""
Repositories for analytics events.

Every event kind shares the same operations, so a single generic
repository is instantiated once per model.
"""

from typing import Dict, List

from sitepulse.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from sitepulse.adapters.outbound.persistence.models.event_models import (
    Visit, Click, Scroll, PathEntry
)


class AsyncEventCRUD(AsyncCRUDBase):
    """Insert/list/delete for one event table."""


visit_repository = AsyncEventCRUD(Visit)
click_repository = AsyncEventCRUD(Click)
scroll_repository = AsyncEventCRUD(Scroll)
path_repository = AsyncEventCRUD(PathEntry)

# Keyed by the name used in the public routes
event_repositories: Dict[str, AsyncEventCRUD] = {
    "visits": visit_repository,
    "clicks": click_repository,
    "scroll": scroll_repository,
    "paths": path_repository,
}

EVENT_KINDS: List[str] = list(event_repositories)
