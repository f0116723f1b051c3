"""
Employee accounts module interface.

Routes depend on IEmployeeService; the login flow depends only on
IEmployeeAuthenticator.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.auth.models import ShadowSession

from .models import CreateEmployeeRequest, EmployeeAccount, EmployeeListResponse


@runtime_checkable
class IEmployeeService(Protocol):
    """Interface for owner-scoped employee account management."""

    async def create_employee(
        self,
        owner_id: str,
        request: CreateEmployeeRequest,
    ) -> EmployeeAccount:
        """
        Create an employee account owned by ``owner_id``.

        Raises:
            InvalidEmployeeError: If username or password are too short
            UsernameTakenError: If the username already exists
            EmployeePermissionDeniedError: If RLS rejects the insert
        """
        ...

    async def list_employees(self, owner_id: str) -> EmployeeListResponse:
        """List the owner's employees, newest first."""
        ...

    async def delete_employee(self, owner_id: str, employee_id: str) -> None:
        """
        Revoke an employee account.

        Raises:
            EmployeeNotFoundError: If the owner has no such employee
        """
        ...


@runtime_checkable
class IEmployeeAuthenticator(Protocol):
    """Credential check for employee accounts, performed by the database."""

    async def authenticate(self, username: str, password: str) -> Optional[ShadowSession]:
        """
        Verify a username/password pair.

        Returns:
            The shadow session record if the credentials match, None otherwise
        """
        ...
