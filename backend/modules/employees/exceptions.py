"""
Employee accounts module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class InvalidEmployeeError(ValidationError):
    """Raised when an employee request breaks a creation rule."""

    def __init__(self, message: str, field: str):
        super().__init__(message, code="INVALID_EMPLOYEE", details={"field": field})

class UsernameTakenError(ConflictError):
    """Raised when the username is already used by another employee."""

    def __init__(self, username: str):
        super().__init__(
            "El nombre de usuario ya está en uso.",
            code="USERNAME_TAKEN",
            details={"username": username},
        )

class EmployeePermissionDeniedError(AuthorizationError):
    """Raised when RLS rejects a write on employee accounts."""

    def __init__(self):
        super().__init__(
            "Permiso denegado: No eres el dueño de este garaje.",
            code="EMPLOYEE_PERMISSION_DENIED",
        )

class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee account does not exist for the owner."""

    def __init__(self, employee_id: str):
        super().__init__(
            f"Employee not found: {employee_id}",
            code="EMPLOYEE_NOT_FOUND",
            details={"employee_id": employee_id},
        )
