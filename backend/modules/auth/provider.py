"""
Supabase Auth identity provider.

Adapts a Supabase client (one per console session) to IIdentityProvider,
translating Supabase session objects into FederatedSession models.

The Supabase client is synchronous; its network calls run in a worker
thread so that a slow identity service never blocks the event loop.
"""

import asyncio
import logging
from typing import Any, Optional

from supabase import AuthApiError, AuthError, Client

from .exceptions import IdentityProviderError, InvalidCredentialsError
from .interfaces import ISubscription, SessionChangeCallback
from .models import FederatedSession

logger = logging.getLogger(__name__)


def to_federated_session(session: Any) -> Optional[FederatedSession]:
    """Convert a Supabase ``Session`` into a FederatedSession."""
    if session is None:
        return None
    if isinstance(session, FederatedSession):
        return session
    data = session.model_dump() if hasattr(session, "model_dump") else dict(session)
    return FederatedSession.model_validate(data)


class SupabaseIdentityProvider:
    """
    IIdentityProvider backed by Supabase Auth.

    The wrapped client is created with persistence disabled, so the
    session only lives as long as this provider does.
    """

    def __init__(self, client: Client):
        self._client = client

    async def get_current_session(self) -> Optional[FederatedSession]:
        try:
            session = await asyncio.to_thread(self._client.auth.get_session)
        except AuthError as e:
            raise IdentityProviderError(f"Could not read the current session: {e}") from e
        return to_federated_session(session)

    def on_session_change(self, callback: SessionChangeCallback) -> ISubscription:
        def _forward(event: Any, session: Any) -> None:
            callback(str(getattr(event, "value", event)), to_federated_session(session))

        return self._client.auth.on_auth_state_change(_forward)

    async def sign_in_with_password(self, email: str, password: str) -> FederatedSession:
        try:
            response = await asyncio.to_thread(
                self._client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except AuthApiError as e:
            raise InvalidCredentialsError(str(e)) from e
        except AuthError as e:
            raise IdentityProviderError(f"Sign-in failed: {e}") from e

        session = to_federated_session(response.session)
        if session is None:
            raise InvalidCredentialsError()
        return session

    async def sign_out(self) -> None:
        try:
            await asyncio.to_thread(self._client.auth.sign_out)
        except AuthError as e:
            raise IdentityProviderError(f"Sign-out failed: {e}") from e

    async def release(self) -> None:
        """
        Drop the local session and stop its token refresh timer.

        Only this client's session is revoked; other sessions of the same
        user are left alone.
        """
        try:
            await asyncio.to_thread(self._client.auth.sign_out, {"scope": "local"})
        except AuthError as e:
            raise IdentityProviderError(f"Could not release identity client: {e}") from e
