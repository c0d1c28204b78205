# sitepulse/adapters/outbound/persistence/repositories/__init__.py

"""
Repository module.

Exports repository classes and their singleton instances.
"""

from sitepulse.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from sitepulse.adapters.outbound.persistence.repositories.client_repository import (
    AsyncClientCRUD,
    client_repository,
)
from sitepulse.adapters.outbound.persistence.repositories.token_repository import (
    AsyncTokenRepository,
    token_repository,
)
from sitepulse.adapters.outbound.persistence.repositories.event_repository import (
    AsyncEventCRUD,
    event_repositories,
    visit_repository,
    click_repository,
    scroll_repository,
    path_repository,
)

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncClientCRUD",
    "AsyncTokenRepository",
    "AsyncEventCRUD",

    # Instances
    "client_repository",
    "token_repository",
    "event_repositories",
    "visit_repository",
    "click_repository",
    "scroll_repository",
    "path_repository",
]
