# sitepulse/domain/exceptions.py

"""
Application-specific exceptions.

Every exception carries an HTTP status code and a stable ``internal_code``
that ends up in the JSON error body, so clients can branch on the code
instead of parsing messages. Server-side failures keep the original error
on the instance for logging and never put it in the response.
"""

from fastapi import HTTPException, status
from typing import Any, Dict, Optional


class SitePulseException(HTTPException):
    """
    Base exception for all SitePulse errors.
    Extends FastAPI's HTTPException with an internal code.
    """

    def __init__(
            self,
            status_code: int,
            detail: Any = None,
            headers: Optional[Dict[str, Any]] = None,
            internal_code: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.internal_code = internal_code


class InvalidInputException(SitePulseException):
    """Malformed or missing input."""

    def __init__(self, detail: str = "Invalid input", fields: Optional[Dict[str, str]] = None):
        field_errors = ""
        if fields:
            field_errors = ": " + ", ".join([f"{field}: {error}" for field, error in fields.items()])

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{detail}{field_errors}",
            internal_code="INVALID_INPUT"
        )


class MissingTokenException(SitePulseException):
    """No bearer token was presented."""

    def __init__(self, detail: str = "Missing access token", internal_code: str = "MISSING_TOKEN"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            internal_code=internal_code
        )


class MalformedAuthorizationException(MissingTokenException):
    """Authorization header present but not in the 'Bearer <token>' form."""

    def __init__(self, detail: str = "Bad Authorization format"):
        super().__init__(detail=detail, internal_code="MALFORMED_AUTHORIZATION")


class InvalidCredentialsException(SitePulseException):
    """Unknown client id or wrong secret. Both cases are reported identically."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            internal_code="INVALID_CREDENTIALS"
        )


class InvalidTokenException(SitePulseException):
    """Token unknown or past its expiry."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
            internal_code="INVALID_OR_EXPIRED_TOKEN"
        )


class PermissionDeniedException(SitePulseException):
    """Permission denied."""

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            internal_code="PERMISSION_DENIED"
        )


class ResourceNotFoundException(SitePulseException):
    """Resource not found."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            internal_code="RESOURCE_NOT_FOUND"
        )


class DuplicateClientException(SitePulseException):
    """A client with the same client_id is already registered."""

    def __init__(self, client_id: Optional[str] = None):
        client_info = f" (ID: {client_id})" if client_id is not None else ""
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Client already exists{client_info}",
            internal_code="DUPLICATE_CLIENT"
        )


class ServerErrorException(SitePulseException):
    """Base for 5xx failures. The message sent to the caller is always generic."""

    def __init__(self, detail: str = "Server error", internal_code: str = "SERVER_ERROR",
                 original_error: Optional[Exception] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            internal_code=internal_code
        )
        self.original_error = original_error


class DuplicateTokenException(ServerErrorException):
    """Generated token value collided with an existing one."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(internal_code="DUPLICATE_TOKEN", original_error=original_error)


class TokenIssuanceException(ServerErrorException):
    """Token could not be stored after the allowed number of attempts."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(internal_code="SERVER_ERROR", original_error=original_error)


class DatabaseOperationException(ServerErrorException):
    """Store operation failed."""

    def __init__(self, detail: str = "Server error", original_error: Optional[Exception] = None):
        super().__init__(detail=detail, internal_code="DATABASE_OPERATION_ERROR",
                         original_error=original_error)


class StoreTimeoutException(ServerErrorException):
    """Store call did not finish within STORE_TIMEOUT_SECONDS."""

    def __init__(self, operation: str = ""):
        super().__init__(internal_code="STORE_TIMEOUT")
        self.operation = operation
