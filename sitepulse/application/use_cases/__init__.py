# sitepulse/application/use_cases/__init__.py

"""
Application service module.

Services implementing the business logic, organized by functional domain.
"""

from sitepulse.application.use_cases.base_use_cases import BaseService, utcnow
from sitepulse.application.use_cases.auth_use_cases import AsyncAuthService
from sitepulse.application.use_cases.event_use_cases import AsyncEventService

__all__ = [
    "BaseService",
    "AsyncAuthService",
    "AsyncEventService",
    "utcnow",
]
