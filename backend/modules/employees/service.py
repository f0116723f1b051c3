"""
Employee accounts service implementation.

Creates, lists and revokes the employee accounts an owner manages, and
verifies employee credentials for shadow sign-in.
"""

import logging
from typing import Optional

from postgrest.exceptions import APIError

from shared.config import Settings, get_settings
from shared.repository import INSUFFICIENT_PRIVILEGE_CODE, UNIQUE_VIOLATION_CODE
from modules.auth.models import ShadowSession

from .exceptions import (
    EmployeeNotFoundError,
    EmployeePermissionDeniedError,
    InvalidEmployeeError,
    UsernameTakenError,
)
from .models import CreateEmployeeRequest, EmployeeAccount, EmployeeListResponse
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """
    Owner-scoped employee account management.

    Implements IEmployeeService. Creating an account does not sign anyone
    in: shadow adoption only happens through the login flow.
    """

    def __init__(self, repository: EmployeeRepository, settings: Optional[Settings] = None):
        self._repository = repository
        self._settings = settings or get_settings()

    def _validate(self, request: CreateEmployeeRequest) -> None:
        if len(request.password) < self._settings.employee_min_password_length:
            raise InvalidEmployeeError(
                "La contraseña debe tener al menos "
                f"{self._settings.employee_min_password_length} caracteres.",
                field="password",
            )
        if len(request.username) < self._settings.employee_min_username_length:
            raise InvalidEmployeeError(
                "El usuario debe tener al menos "
                f"{self._settings.employee_min_username_length} caracteres.",
                field="username",
            )

    async def create_employee(
        self,
        owner_id: str,
        request: CreateEmployeeRequest,
    ) -> EmployeeAccount:
        """Create an employee account owned by ``owner_id``."""
        self._validate(request)

        data = {
            "owner_id": owner_id,
            "first_name": request.first_name,
            "last_name": request.last_name,
            "username": request.username,
            # Sent in plaintext, the database trigger hashes it on insert
            "password_hash": request.password,
            "role": request.role.value,
        }

        try:
            account = self._repository.create(data)
        except APIError as e:
            code = self._repository.error_code(e)
            if code == UNIQUE_VIOLATION_CODE or "unique_username_global" in str(e):
                raise UsernameTakenError(request.username) from e
            if code == INSUFFICIENT_PRIVILEGE_CODE:
                raise EmployeePermissionDeniedError() from e
            raise

        logger.info(f"Employee account {account.username} created by owner {owner_id}")
        return account

    async def list_employees(self, owner_id: str) -> EmployeeListResponse:
        items = self._repository.list_by_owner(owner_id)
        return EmployeeListResponse(items=items, total=len(items))

    async def delete_employee(self, owner_id: str, employee_id: str) -> None:
        try:
            deleted = self._repository.delete(owner_id, employee_id)
        except APIError as e:
            if self._repository.error_code(e) == INSUFFICIENT_PRIVILEGE_CODE:
                raise EmployeePermissionDeniedError() from e
            raise

        if not deleted:
            raise EmployeeNotFoundError(employee_id)
        logger.info(f"Employee account {employee_id} revoked by owner {owner_id}")


class EmployeeAuthenticator:
    """IEmployeeAuthenticator backed by the ``login_employee`` database function."""

    def __init__(self, repository: EmployeeRepository):
        self._repository = repository

    async def authenticate(self, username: str, password: str) -> Optional[ShadowSession]:
        return self._repository.login(username.strip().lower(), password)
