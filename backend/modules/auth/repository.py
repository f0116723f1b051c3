"""
Profile repository for database access.

Encapsulates the Supabase query against the ``profiles`` table.
"""

from shared.repository import BaseRepository

from .exceptions import ProfileNotFoundError
from .models import Profile


class ProfileRepository(BaseRepository[Profile]):
    """
    Point lookups on the ``profiles`` table.

    Note: This repository does NOT fall back on missing rows.
    The profile resolver owns that decision.
    """

    async def get_profile(self, user_id: str) -> Profile:
        """
        Get a profile by primary key.

        Args:
            user_id: Federated user id (UUID).

        Returns:
            The stored profile.

        Raises:
            ProfileNotFoundError: If no row exists.
            APIError: If PostgREST rejects the query.
        """
        result = self._db.table("profiles").select("*").eq("id", user_id).limit(1).execute()

        if not result.data:
            raise ProfileNotFoundError(user_id)

        return Profile.model_validate(result.data[0])
