"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the mapping of PostgREST errors.
"""

from typing import TypeVar, Generic, Optional
from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# PostgREST / PostgreSQL error codes the repositories care about
NO_ROWS_CODE = "PGRST116"
UNIQUE_VIOLATION_CODE = "23505"
INSUFFICIENT_PRIVILEGE_CODE = "42501"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            def get_profile(self, user_id: str) -> Profile:
                result = self._db.table("profiles").select("*").eq("id", user_id).execute()
                if not result.data:
                    raise ProfileNotFoundError(user_id)
                return Profile.model_validate(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def error_code(error: APIError) -> Optional[str]:
        """Return the PostgREST/PostgreSQL code carried by an API error."""
        return getattr(error, "code", None)
