"""
Console session resolution.

Every request belongs to a console session identified by a cookie. The
session's facade holds the principal; route dependencies gate on it.
"""

from typing import Optional

from fastapi import Depends, Request, Response

from shared.config import get_settings
from modules.auth.guards import require_role
from modules.auth.models import SessionSource, UserRole
from modules.auth.registry import ConsoleSession, ConsoleSessionRegistry

from ..dependencies import get_session_registry


async def get_console_session(
    request: Request,
    response: Response,
    registry: ConsoleSessionRegistry = Depends(get_session_registry),
) -> ConsoleSession:
    """
    Dependency returning the caller's console session.

    Unknown or missing cookies open a new console session and set the cookie.
    """
    settings = get_settings()
    session_id = request.cookies.get(settings.console_session_cookie)
    console = await registry.get_or_open(session_id)

    if console.id != session_id:
        response.set_cookie(
            settings.console_session_cookie,
            console.id,
            httponly=True,
            samesite="lax",
        )
    return console


def require_roles(
    *roles: UserRole,
    sources: Optional[set[SessionSource]] = None,
):
    """
    Build a dependency that only lets ``roles`` through.

    Usage:
        @router.get("/staff")
        async def staff(console: ConsoleSession = Depends(require_roles(UserRole.OWNER))):
            ...
    """

    async def dependency(
        console: ConsoleSession = Depends(get_console_session),
    ) -> ConsoleSession:
        await console.facade.wait_idle()
        require_role(console.facade.principal, *roles, sources=sources)
        return console

    return dependency


# Owners (and superadmins) signed in through the federated provider
require_owner = require_roles(
    UserRole.OWNER,
    UserRole.SUPERADMIN,
    sources={SessionSource.FEDERATED},
)
