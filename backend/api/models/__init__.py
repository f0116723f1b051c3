"""API models package."""

from .errors import ErrorResponse
from .session import LoginRequest, SessionStateResponse

__all__ = [
    "ErrorResponse",
    "LoginRequest",
    "SessionStateResponse",
]
