"""
Console session endpoints.

Sign-in, sign-out and state of the caller's console session.
"""

from fastapi import APIRouter, Depends, Response

from shared.config import get_settings
from modules.auth.interfaces import IAuthService
from modules.auth.registry import ConsoleSession, ConsoleSessionRegistry

from ..dependencies import get_auth_service, get_session_registry
from ..middleware.console_session import get_console_session
from ..models.errors import ErrorResponse
from ..models.session import LoginRequest, SessionStateResponse

router = APIRouter()


@router.get("", response_model=SessionStateResponse)
async def get_session_state(
    console: ConsoleSession = Depends(get_console_session),
) -> SessionStateResponse:
    """
    Get the current principal of the console session.

    Opens a console session (and sets its cookie) on first contact.
    """
    await console.facade.wait_idle()
    return SessionStateResponse.from_snapshot(console.facade.snapshot())


@router.post(
    "/login",
    response_model=SessionStateResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    console: ConsoleSession = Depends(get_console_session),
    auth: IAuthService = Depends(get_auth_service),
) -> SessionStateResponse:
    """
    Sign in with an email (owners) or an employee username.
    """
    await auth.sign_in(console.facade, request.identifier, request.password)
    return SessionStateResponse.from_snapshot(console.facade.snapshot())


@router.post("/logout", response_model=SessionStateResponse)
async def logout(
    console: ConsoleSession = Depends(get_console_session),
) -> SessionStateResponse:
    """
    Sign out of both identity sources.

    Always succeeds, even if the identity provider is unreachable.
    """
    await console.facade.sign_out()
    return SessionStateResponse.from_snapshot(console.facade.snapshot())


@router.post("/reload", response_model=SessionStateResponse)
async def reload_session(
    console: ConsoleSession = Depends(get_console_session),
    registry: ConsoleSessionRegistry = Depends(get_session_registry),
) -> SessionStateResponse:
    """
    Re-run session resolution as a page reload would.

    Shadow sessions are restored from the console session storage;
    federated sessions are not persisted and require a new sign-in.
    """
    console = await registry.reload(console.id)
    await console.facade.wait_idle()
    return SessionStateResponse.from_snapshot(console.facade.snapshot())


@router.delete("", status_code=204)
async def close_session(
    response: Response,
    console: ConsoleSession = Depends(get_console_session),
    registry: ConsoleSessionRegistry = Depends(get_session_registry),
) -> None:
    """
    Close the console session, discarding any shadow session it held.
    """
    await registry.close(console.id)
    response.delete_cookie(get_settings().console_session_cookie)
