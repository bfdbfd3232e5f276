"""Error taxonomy for the user service and its HTTP status mapping."""
from __future__ import annotations

from fastapi import status


class UserServiceError(Exception):
    """Base class for errors reported to API clients as ``{"message": ...}``."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(UserServiceError):
    """Missing or malformed input."""

    default_message = "All Fields are Required"


class NotFoundError(UserServiceError):
    """Referenced record does not exist."""

    default_message = "User Not Found"


class DependencyError(UserServiceError):
    """Operation blocked by records that still reference the target."""

    default_message = "User has assigned notes"


class ConflictError(UserServiceError):
    """Uniqueness violation."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Duplicate username"


class DuplicateKeyError(ConflictError):
    """The store rejected a write on a unique constraint."""

    default_message = "Duplicate key"


class StorageUnavailable(UserServiceError):
    """The store could not be reached or failed mid-call."""

    default_message = "Storage unavailable"
