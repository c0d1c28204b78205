# sitepulse/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from sitepulse.adapters.configuration.config import Settings

# Configure logger
logger = logging.getLogger(__name__)

# Query parameters never written to the log
REDACTED_PARAMS = {"token"}


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each received request and the response sent back.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next):
        # Log the request - with limited information in production
        if self.settings.ENVIRONMENT == "production":
            logger.info(f"Request: {request.method} {request.url.path}")
        else:
            query_params = {
                key: ("***" if key in REDACTED_PARAMS else value)
                for key, value in request.query_params.items()
            }
            logger.info(
                f"Request: {request.method} {request.url.path} | "
                f"Query: {query_params if query_params else 'N/A'} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if self.settings.ENVIRONMENT == "production":
            logger.info(f"Response: {response.status_code} for {request.method} {request.url.path}")
        else:
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} | "
                f"Time: {process_time:.4f}s"
            )

        return response
