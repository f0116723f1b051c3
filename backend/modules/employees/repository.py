"""
Employee account repository for database access.

Encapsulates the Supabase queries on ``employee_accounts`` and the
``login_employee`` database function.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from modules.auth.models import ShadowSession

from .models import EmployeeAccount

# Every column except password_hash
EMPLOYEE_COLUMNS = "id, owner_id, username, first_name, last_name, role, created_at"


class EmployeeRepository(BaseRepository[EmployeeAccount]):
    """
    Repository for employee accounts.

    Built over a user-authenticated client for writes, so RLS limits every
    query to the accounts of the signed-in owner.

    Note: PostgREST errors are propagated as APIError; the service maps them.
    """

    def create(self, data: dict[str, Any]) -> EmployeeAccount:
        """
        Insert an employee account.

        Args:
            data: Row values, with the plaintext password in password_hash.

        Returns:
            The created account.
        """
        result = self._db.table("employee_accounts").insert(data).execute()
        return EmployeeAccount.model_validate(result.data[0])

    def list_by_owner(self, owner_id: str) -> list[EmployeeAccount]:
        result = (
            self._db.table("employee_accounts")
            .select(EMPLOYEE_COLUMNS)
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [EmployeeAccount.model_validate(row) for row in result.data or []]

    def delete(self, owner_id: str, employee_id: str) -> bool:
        """Delete an account. Returns False if nothing was deleted."""
        result = (
            self._db.table("employee_accounts")
            .delete()
            .eq("id", employee_id)
            .eq("owner_id", owner_id)
            .execute()
        )
        return bool(result.data)

    def login(self, username: str, password: str) -> Optional[ShadowSession]:
        """
        Run the ``login_employee`` credential check.

        Returns:
            The session record built by the database, or None if rejected.
        """
        result = self._db.rpc(
            "login_employee",
            {"p_username": username, "p_password": password},
        ).execute()

        if not result.data:
            return None
        return ShadowSession.model_validate(result.data)
