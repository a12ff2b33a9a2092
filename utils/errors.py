"""
Application error types.

Every error carries the HTTP status and the user-facing message that the
exception handlers in ``api.middleware`` render as ``{"message": ...}``.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body"


class ConflictError(AppError):
    """A unique field is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email or username already exists"


class AuthError(AppError):
    """Missing, invalid or expired credentials, or an identity that no longer resolves."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access token required"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Route not found"


class InternalError(AppError):
    pass
