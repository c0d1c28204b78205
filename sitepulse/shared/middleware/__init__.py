# sitepulse/shared/middleware/__init__.py

from sitepulse.shared.middleware.exception_middleware import (
    AsyncExceptionMiddleware,
    register_exception_handlers,
)
from sitepulse.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware

__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "register_exception_handlers",
]
