"""
Public session facade.

The only surface the rest of the application uses to read the current
principal or change it. State is owned by the SessionReconciler; the
facade hands out read-only snapshots.
"""

import asyncio
import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings

from .exceptions import InvalidShadowSessionError
from .interfaces import IIdentityProvider
from .models import (
    FederatedSession,
    FederatedUser,
    Principal,
    Profile,
    SessionSnapshot,
    ShadowSession,
)
from .profiles import ProfileResolver
from .reconciler import SessionReconciler
from .storage import ShadowSessionStore

logger = logging.getLogger(__name__)


class SessionFacade:
    """
    Read/write surface over the session reconciler.

    Exposes session, user, profile and shadow session as separate fields
    for convenience, plus the unified ``principal``.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        resolver: ProfileResolver,
        store: ShadowSessionStore,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self._provider = provider
        self._store = store
        self._sign_out_timeout = settings.sign_out_timeout_seconds
        self._reconciler = SessionReconciler(provider, resolver, store, settings)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def session(self) -> Optional[FederatedSession]:
        return self._reconciler.session

    @property
    def user(self) -> Optional[FederatedUser]:
        return self._reconciler.user

    @property
    def profile(self) -> Optional[Profile]:
        return self._reconciler.profile

    @property
    def shadow_session(self) -> Optional[ShadowSession]:
        return self._reconciler.shadow_session

    @property
    def principal(self) -> Principal:
        return self._reconciler.principal

    @property
    def loading(self) -> bool:
        return self._reconciler.loading

    @property
    def error(self) -> Optional[str]:
        return self._reconciler.error

    def snapshot(self) -> SessionSnapshot:
        """Return a frozen copy of the current state."""
        return SessionSnapshot(
            principal=self.principal,
            session=self.session,
            user=self.user,
            profile=self.profile,
            shadow_session=self.shadow_session,
            loading=self.loading,
            error=self.error,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def mount(self) -> None:
        await self._reconciler.mount()

    def unmount(self) -> None:
        self._reconciler.unmount()

    async def wait_idle(self) -> None:
        await self._reconciler.wait_idle()

    async def close(self) -> None:
        """
        Unmount and release the identity client for good.

        Releasing is best-effort and bounded by the sign-out timeout.
        """
        self.unmount()
        try:
            await asyncio.wait_for(self._provider.release(), timeout=self._sign_out_timeout)
        except Exception as e:
            logger.warning(f"Identity client release failed or timed out: {e!r}")

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def adopt_shadow_session(
        self,
        record: Union[ShadowSession, Mapping[str, Any]],
    ) -> ShadowSession:
        """
        Make an already-authenticated employee record the current principal.

        Does not contact the identity provider. Calling it again replaces
        the previous shadow session.

        Args:
            record: Record returned by the employee credential check

        Returns:
            The adopted shadow session

        Raises:
            InvalidShadowSessionError: If the record is malformed or carries
                a role that employees cannot hold
        """
        if not isinstance(record, ShadowSession):
            try:
                record = ShadowSession.model_validate(dict(record))
            except PydanticValidationError as e:
                raise InvalidShadowSessionError(str(e.errors()[0]["msg"])) from e

        self._reconciler.adopt_shadow(record)
        logger.info(f"Shadow session adopted for {record.id} ({record.role.value})")
        return record

    async def sign_in_with_password(self, email: str, password: str) -> None:
        """
        Start a federated sign-in.

        The new session reaches the reconciler through the provider's
        session-change stream; this waits until it has been applied.
        """
        await self._provider.sign_in_with_password(email, password)
        await self._reconciler.wait_idle()

    async def sign_out(self) -> None:
        """
        Sign out of every identity source.

        The federated sign-out is best-effort and bounded by a timeout; the
        shadow store and the principal are cleared whatever happens.
        """
        token = self._reconciler.token
        self._reconciler.begin_loading()
        try:
            await asyncio.wait_for(self._provider.sign_out(), timeout=self._sign_out_timeout)
        except Exception as e:
            logger.warning(f"Federated sign-out failed or timed out: {e!r}")
        finally:
            self._store.clear()
            self._reconciler.clear_principal(token)
