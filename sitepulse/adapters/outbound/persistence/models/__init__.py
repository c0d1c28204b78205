# sitepulse/adapters/outbound/persistence/models/__init__.py

"""
Data models.

Importing this package registers every table on ``Base.metadata``.
"""

from sitepulse.adapters.outbound.persistence.database import Base
from sitepulse.adapters.outbound.persistence.models.client_model import Client
from sitepulse.adapters.outbound.persistence.models.token_model import AccessToken
from sitepulse.adapters.outbound.persistence.models.event_models import Visit, Click, Scroll, PathEntry

__all__ = [
    "Base",
    "Client",
    "AccessToken",
    "Visit",
    "Click",
    "Scroll",
    "PathEntry",
]
