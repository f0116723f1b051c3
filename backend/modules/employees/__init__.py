"""
Employee accounts module.

Owner-managed staff accounts that sign in through shadow sessions.

Public API:
- IEmployeeService: Interface for employee account management
- IEmployeeAuthenticator: Interface for the employee credential check
- EmployeeAccount, CreateEmployeeRequest, EmployeeListResponse: Models
- Employee exceptions: UsernameTakenError, EmployeePermissionDeniedError, etc.
"""

from .interfaces import IEmployeeService, IEmployeeAuthenticator
from .models import EmployeeAccount, CreateEmployeeRequest, EmployeeListResponse
from .exceptions import (
    InvalidEmployeeError,
    UsernameTakenError,
    EmployeePermissionDeniedError,
    EmployeeNotFoundError,
)

__all__ = [
    # Interfaces
    "IEmployeeService",
    "IEmployeeAuthenticator",
    # Models
    "EmployeeAccount",
    "CreateEmployeeRequest",
    "EmployeeListResponse",
    # Exceptions
    "InvalidEmployeeError",
    "UsernameTakenError",
    "EmployeePermissionDeniedError",
    "EmployeeNotFoundError",
]
