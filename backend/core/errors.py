"""
core/errors.py: Error taxonomy.

Every domain error is an HTTPException subclass carrying its own status code,
so route handlers just raise and the handlers registered in core/app.py render
``{"message": ..., "detail": ...}``.
"""

from typing import Optional

from fastapi import HTTPException, status


class FiladexError(HTTPException):
    """Base exception for Filadex domain errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class ValidationError(FiladexError):
    """Missing or malformed required field."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class DuplicateError(FiladexError):
    """Unique-name violation."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Item already exists"


class InUseError(FiladexError):
    """A reference item is still referenced by filaments."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Item is in use by filaments"


class IncorrectPasswordError(FiladexError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Current password is incorrect"


class NotFoundError(FiladexError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ForbiddenError(FiladexError):
    """Role or ownership violation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Insufficient permissions"


class InvalidCredentialsError(FiladexError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid credentials"


class NotAuthenticatedError(FiladexError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class SessionExpiredError(FiladexError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Session expired"


class InternalError(FiladexError):
    """Unexpected or database failure."""
