"""Application exceptions mapped to JSON error responses.

Each exception carries the HTTP status code and the fixed message returned
to the client as ``{"error": message}``.
"""

from fastapi import status

from app import messages


class ApiError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = messages.SERVER_ERROR) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ApiError):
    """Request payload failed validation (client-correctable)."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ApiError):
    """Resource already exists, e.g. duplicate registration."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ApiError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AccessDeniedError(AuthError):
    """Caller is authenticated but not allowed to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN


class UpstreamError(ApiError):
    """The store or an outbound service call failed."""
