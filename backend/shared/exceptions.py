"""
Base exception classes for the Garage Console backend.

Each module should define its own exceptions that inherit from these bases.
The API layer renders any GarageConsoleError with its ``http_status``,
so modules never need to know about HTTP.
"""

from typing import Optional, Any


class GarageConsoleError(Exception):
    """
    Base exception for all Garage Console errors.

    All custom exceptions should inherit from this class.
    """

    http_status: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(GarageConsoleError):
    """Resource not found."""

    http_status = 404


class ValidationError(GarageConsoleError):
    """Input validation failed."""

    http_status = 422


class ConflictError(GarageConsoleError):
    """Resource already exists or clashes with existing state."""

    http_status = 409


class AuthenticationError(GarageConsoleError):
    """Authentication failed (invalid or missing credentials)."""

    http_status = 401


class AuthorizationError(GarageConsoleError):
    """Authorization failed (insufficient permissions)."""

    http_status = 403


class ExternalServiceError(GarageConsoleError):
    """Error communicating with an external service."""

    http_status = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
