"""Domain error taxonomy shared by stores, handlers and the HTTP layer.

Every error carries the HTTP status it renders as, so the exception handlers in
`blog_engine.main` can translate them into the JSON error envelope without
knowing about individual error kinds.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class BlogError(Exception):
    """Base class for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Message that is safe to return to clients."""
        return self.message


class ValidationFailed(BlogError):
    """Request payload failed field constraints."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


# Store-level name for rejected arguments (e.g. an unknown role value).
InvalidArgument = ValidationFailed


class Unauthorized(BlogError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class InvalidToken(Unauthorized):
    """Token signature, encoding or claims are invalid."""

    default_message = "Invalid token"


class TokenExpired(Unauthorized):
    """Token was well-formed but its `exp` claim lies in the past."""

    default_message = "Token has expired"


class Forbidden(BlogError):
    """Authenticated caller lacks permission for the resource or action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Permission denied"


class NotFound(BlogError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(BlogError):
    """Uniqueness violation."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class CredentialError(BlogError):
    """Password hashing or verification failed for reasons unrelated to the password."""

    default_message = "Password processing error"

    @property
    def public_message(self) -> str:
        return self.default_message


class StorageError(BlogError):
    """Failure reported by the backing store."""

    default_message = "Database operation failed"

    @property
    def public_message(self) -> str:
        return self.default_message


class ConfigurationError(BlogError):
    """Configuration is unusable (raised at startup)."""

    default_message = "Invalid configuration"


__all__ = [
    "BlogError",
    "ValidationFailed",
    "InvalidArgument",
    "Unauthorized",
    "InvalidToken",
    "TokenExpired",
    "Forbidden",
    "NotFound",
    "Conflict",
    "CredentialError",
    "StorageError",
    "ConfigurationError",
]
