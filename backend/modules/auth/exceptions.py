"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class IdentityProviderError(ExternalServiceError):
    """Raised when the federated identity provider cannot be reached."""

    def __init__(self, message: str = "Identity provider unavailable"):
        super().__init__(message, service="supabase-auth", code="IDENTITY_PROVIDER_ERROR")


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password or username/password pair is rejected."""

    def __init__(self, message: str = "Credenciales inválidas o usuario no encontrado."):
        super().__init__(message, code="INVALID_CREDENTIALS")


class NotAuthenticatedError(AuthenticationError):
    """Raised when an operation needs a principal and there is none."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class ProfileNotFoundError(NotFoundError):
    """Raised when no profiles row exists for a federated user."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile not found: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidShadowSessionError(ValidationError):
    """Raised when a record offered for shadow adoption is malformed."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid shadow session: {reason}",
            code="INVALID_SHADOW_SESSION",
            details={"reason": reason},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_roles: list[str], user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {', '.join(required_roles)}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_roles": required_roles, "user_role": user_role},
        )
