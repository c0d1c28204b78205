# sitepulse/domain/__init__.py

"""
Domain layer: pure data models and the exception taxonomy.
"""

from sitepulse.domain.exceptions import (
    SitePulseException,
    InvalidInputException,
    MissingTokenException,
    MalformedAuthorizationException,
    InvalidCredentialsException,
    InvalidTokenException,
    PermissionDeniedException,
    ResourceNotFoundException,
    DuplicateClientException,
    ServerErrorException,
    DuplicateTokenException,
    TokenIssuanceException,
    DatabaseOperationException,
    StoreTimeoutException,
)

__all__ = [
    "SitePulseException",
    "InvalidInputException",
    "MissingTokenException",
    "MalformedAuthorizationException",
    "InvalidCredentialsException",
    "InvalidTokenException",
    "PermissionDeniedException",
    "ResourceNotFoundException",
    "DuplicateClientException",
    "ServerErrorException",
    "DuplicateTokenException",
    "TokenIssuanceException",
    "DatabaseOperationException",
    "StoreTimeoutException",
]
