"""
Route guards over the current principal.

Consumers gate screens on ``principal.role``; these helpers keep the
entry rules in one place.
"""

from typing import Optional

from .exceptions import InsufficientPermissionsError, NotAuthenticatedError
from .models import Principal, SessionSnapshot, SessionSource, UserRole

LOGIN_PATH = "/login"
ONBOARDING_PATH = "/setup/onboarding"
GLOBAL_ADMIN_PATH = "/admin/global"


def landing_path(snapshot: SessionSnapshot) -> Optional[str]:
    """
    Where a console session should land after authentication settles.

    Returns None while the outcome is still unknown: either the session
    is loading, or a federated user is signed in but has no profile yet.
    """
    if snapshot.loading:
        return None

    principal = snapshot.principal
    if principal.source == SessionSource.SHADOW:
        return ONBOARDING_PATH
    if principal.source == SessionSource.FEDERATED:
        if principal.profile is None:
            return None
        if principal.role == UserRole.SUPERADMIN:
            return GLOBAL_ADMIN_PATH
        return ONBOARDING_PATH
    return LOGIN_PATH


def require_role(
    principal: Principal,
    *roles: UserRole,
    sources: Optional[set[SessionSource]] = None,
) -> Principal:
    """
    Ensure the principal holds one of ``roles``.

    Args:
        principal: Current principal
        roles: Accepted roles
        sources: Accepted identity sources, any if omitted

    Returns:
        The principal, for chaining

    Raises:
        NotAuthenticatedError: If there is no principal
        InsufficientPermissionsError: If the role or source is not accepted
    """
    if not principal.is_authenticated:
        raise NotAuthenticatedError()

    required = [role.value for role in roles]
    current = principal.role.value if principal.role else "none"
    if principal.role not in roles:
        raise InsufficientPermissionsError(required, current)
    if sources is not None and principal.source not in sources:
        raise InsufficientPermissionsError(required, f"{current} ({principal.source.value})")
    return principal
