# sitepulse/shared/middleware/exception_middleware.py

"""
Centralized exception handling.

Domain exceptions are rendered by ``sitepulse_exception_handler``;
``AsyncExceptionMiddleware`` catches whatever escapes the endpoints.
All error bodies share the shape ``{"error": ..., "code": ...}``.
"""

import time
import logging
import traceback
from typing import Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from sitepulse.adapters.configuration.config import Settings
from sitepulse.domain.exceptions import ServerErrorException, SitePulseException

# Configure logger
logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server error"


def error_response(status_code: int, message: str, code: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code, **extra},
    )


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "N/A"


async def sitepulse_exception_handler(request: Request, exc: SitePulseException) -> JSONResponse:
    """Render a domain exception; 5xx messages are replaced by a generic one."""
    if isinstance(exc, ServerErrorException):
        original = getattr(exc, "original_error", None)
        logger.error(
            f"Server error: {exc.detail} | Code: {exc.internal_code} | "
            f"Cause: {type(original).__name__ if original else 'N/A'} | "
            f"Path: {request.url.path}"
        )
        message = GENERIC_SERVER_ERROR
    else:
        logger.warning(
            f"Domain exception: {exc.detail} | Code: {exc.internal_code} | "
            f"Path: {request.url.path} | Client: {_client_host(request)}"
        )
        message = exc.detail

    response = error_response(exc.status_code, message, exc.internal_code or "ERROR")
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request schema failures are plain 400s."""
    errors = {
        ".".join(str(part) for part in error["loc"] if part != "body"): error["msg"]
        for error in exc.errors()
    }
    logger.warning(f"Validation error: {errors} | Path: {request.url.path}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Missing or invalid fields", "INVALID_INPUT",
                          errors=errors)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SitePulseException, sitepulse_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for exceptions not handled by the registered handlers.
    Also stamps every response with X-Process-Time.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except SQLAlchemyError as exc:
            logger.error(
                f"Database error: Type={type(exc).__name__} | "
                f"Path: {request.url.path} | "
                f"Client: {_client_host(request)}"
            )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR, "DATABASE_ERROR")

        except Exception as exc:
            if self.settings.ENVIRONMENT == "production":
                error_message = "Internal server error"
                logger.exception(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | "
                    f"Client: {_client_host(request)}"
                )
            else:
                error_message = str(exc)
                stack_trace = traceback.format_exc()
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path} | "
                    f"Client: {_client_host(request)}\n"
                    f"Traceback: {stack_trace}"
                )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, error_message, "INTERNAL_SERVER_ERROR")
