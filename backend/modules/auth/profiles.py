"""
Profile resolution.

Turns a federated user id into an application profile. A missing row
never blocks sign-in: a fallback profile is synthesized from the
provider metadata instead.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.config import get_settings

from .exceptions import ProfileNotFoundError
from .interfaces import IProfileRepository
from .models import Profile, ShadowSession, UserRole

logger = logging.getLogger(__name__)


def profile_from_shadow(record: ShadowSession) -> Profile:
    """Map a shadow session record to the profile shape."""
    return Profile(
        id=record.id,
        email=None,
        full_name=record.full_name,
        role=record.role,
    )


def _text(value: Any) -> Optional[str]:
    """Metadata strings only; anything else counts as absent."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _coerce_role(value: Any) -> Optional[UserRole]:
    if value is None:
        return None
    try:
        return UserRole(value)
    except (ValueError, TypeError):
        logger.warning(f"Ignoring unknown role in provider metadata: {value!r}")
        return None


def fallback_profile(
    user_id: str,
    metadata: Optional[dict[str, Any]] = None,
    default_role: Optional[UserRole] = None,
    default_full_name: Optional[str] = None,
) -> Profile:
    """
    Synthesize a profile from provider metadata.

    Missing values fall back to the configured defaults
    (``owner`` and ``Usuario`` unless overridden).
    """
    metadata = metadata or {}
    settings = get_settings()
    if default_role is None:
        default_role = UserRole(settings.fallback_profile_role)
    if default_full_name is None:
        default_full_name = settings.fallback_profile_full_name

    role = _coerce_role(metadata.get("role"))
    if role is None:
        logger.warning(
            f"No role in metadata for user {user_id}, defaulting to '{default_role.value}'"
        )
        role = default_role

    return Profile(
        id=user_id,
        email=_text(metadata.get("email")),
        full_name=_text(metadata.get("full_name")) or default_full_name,
        role=role,
    )


class ProfileResolver:
    """
    Resolves the canonical profile for a federated user.

    ``resolve_profile`` never raises: lookup errors yield a fallback
    profile, unexpected failures are logged and yield None.
    """

    def __init__(self, repository: IProfileRepository):
        self._repository = repository

    async def resolve_profile(
        self,
        user_id: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Optional[Profile]:
        """
        Resolve the profile for ``user_id``.

        Args:
            user_id: Federated user id
            metadata: Provider metadata used if the row is missing

        Returns:
            The stored profile, a fallback profile, or None if the
            lookup failed in transport
        """
        try:
            return await self._repository.get_profile(user_id)
        except (ProfileNotFoundError, APIError) as e:
            logger.info(f"Profile lookup for {user_id} failed ({e}), using fallback profile")
        except Exception:
            logger.exception(f"Profile fetch exception for user {user_id}")
            return None

        try:
            return fallback_profile(user_id, metadata)
        except Exception:
            logger.exception(f"Could not build fallback profile for user {user_id}")
            return None
