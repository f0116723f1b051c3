"""
Session reconciliation.

The SessionReconciler is the single owner of the current principal. It
decides which identity source is authoritative (federated session, shadow
session, or none) at mount time and after every identity provider event.

Rules:
- A federated session always wins: any event carrying a user evicts the
  shadow session from memory and from the shadow session store.
- Profile fetches are keyed by user id: an event for the user whose
  profile is already resolved (e.g. a token refresh) does not refetch.
- ``loading`` is cleared after initial resolution and after every event,
  whatever the outcome and whatever order they arrive in.
- After unmount, the cancellation token suppresses every deferred write.
"""

import asyncio
import logging
from typing import Optional

from shared.config import Settings, get_settings

from .interfaces import IIdentityProvider, ISubscription
from .models import (
    ANONYMOUS,
    FederatedSession,
    FederatedUser,
    Principal,
    Profile,
    SessionSource,
    ShadowSession,
)
from .profiles import ProfileResolver, profile_from_shadow
from .storage import ShadowSessionStore

logger = logging.getLogger(__name__)


class CancellationToken:
    """Liveness flag shared by every continuation started during one mount."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class SessionReconciler:
    """
    State machine reconciling federated and shadow sessions.

    Consumers should go through SessionFacade; the reconciler only exposes
    read-only properties plus the commit methods the facade needs.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        resolver: ProfileResolver,
        store: ShadowSessionStore,
        settings: Optional[Settings] = None,
    ):
        self._provider = provider
        self._resolver = resolver
        self._store = store
        self._connectivity_error = (settings or get_settings()).identity_connectivity_error

        self._session: Optional[FederatedSession] = None
        self._user: Optional[FederatedUser] = None
        self._profile: Optional[Profile] = None
        self._shadow: Optional[ShadowSession] = None
        self._loading = True
        self._error: Optional[str] = None

        self._token: Optional[CancellationToken] = None
        self._subscription: Optional[ISubscription] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._pending: set[asyncio.Task] = set()
        self._profile_fetches: set[str] = set()
        self._event_applied = False

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def session(self) -> Optional[FederatedSession]:
        return self._session

    @property
    def user(self) -> Optional[FederatedUser]:
        return self._user

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def shadow_session(self) -> Optional[ShadowSession]:
        return self._shadow

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def token(self) -> Optional[CancellationToken]:
        return self._token

    @property
    def is_mounted(self) -> bool:
        return self._token is not None and not self._token.cancelled

    @property
    def principal(self) -> Principal:
        """The unified principal derived from the current state."""
        if self._shadow is not None:
            return Principal(
                id=self._shadow.id,
                profile=self._profile or profile_from_shadow(self._shadow),
                role=self._shadow.role,
                source=SessionSource.SHADOW,
            )
        if self._user is not None:
            return Principal(
                id=self._user.id,
                profile=self._profile,
                role=self._profile.role if self._profile else None,
                source=SessionSource.FEDERATED,
            )
        return ANONYMOUS

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def mount(self) -> None:
        """
        Subscribe to provider events and run the initial resolution.

        Raises:
            RuntimeError: If the reconciler is already mounted
        """
        if self.is_mounted:
            raise RuntimeError("SessionReconciler is already mounted")

        token = CancellationToken()
        self._token = token
        self._loop = asyncio.get_running_loop()
        self._event_applied = False
        self._loading = True
        self._subscription = self._provider.on_session_change(self._on_session_change)

        await self.resolve_initial(token)

    def unmount(self) -> None:
        """Cancel deferred writes and release the provider subscription."""
        if self._token is not None:
            self._token.cancel()
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def wait_idle(self) -> None:
        """Wait until every scheduled session-change event has been handled."""
        # Let callbacks queued with call_soon_threadsafe create their tasks
        await asyncio.sleep(0)
        while self._pending:
            await asyncio.wait(list(self._pending))
            await asyncio.sleep(0)

    # -------------------------------------------------------------------------
    # Initial resolution
    # -------------------------------------------------------------------------

    async def resolve_initial(self, token: CancellationToken) -> None:
        """
        Resolve the principal once: federated session first, shadow store second.

        Any failure surfaces the generic connectivity error; ``loading`` is
        cleared exactly once on every path.
        """
        try:
            session = await self._provider.get_current_session()
            if token.cancelled:
                return

            if session is not None:
                if self._event_applied:
                    # A session-change event already set the federated state
                    logger.debug("Initial session superseded by an earlier event")
                else:
                    self._set_federated(session)
                    self._evict_shadow()
                    await self._ensure_profile(session.user, token)
            elif self._user is None:
                shadow = self._store.load()
                if shadow is not None:
                    logger.debug(f"Restored shadow session for {shadow.id}")
                    self._set_shadow(shadow)
        except Exception:
            logger.exception("Session initialization failed")
            if not token.cancelled:
                self._error = self._connectivity_error
        finally:
            if not token.cancelled:
                self._loading = False

    # -------------------------------------------------------------------------
    # Ongoing reconciliation
    # -------------------------------------------------------------------------

    def _on_session_change(self, event: str, session: Optional[FederatedSession]) -> None:
        # Provider callbacks may fire from the provider's refresh thread
        token = self._token
        if token is None or token.cancelled or self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._schedule, event, session, token)

    def _schedule(
        self,
        event: str,
        session: Optional[FederatedSession],
        token: CancellationToken,
    ) -> None:
        if token.cancelled:
            return
        task = asyncio.create_task(self.handle_session_change(event, session, token))
        self._pending.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Session change handler failed", exc_info=task.exception())

    async def handle_session_change(
        self,
        event: str,
        session: Optional[FederatedSession],
        token: Optional[CancellationToken] = None,
    ) -> None:
        """
        Apply one identity provider event.

        Args:
            event: Event kind (SIGNED_IN, TOKEN_REFRESHED, SIGNED_OUT, ...)
            session: Session carried by the event, None on sign-out
            token: Token of the mount the event belongs to
        """
        token = token or self._token
        if token is None or token.cancelled:
            return

        logger.debug(f"Session change: {event}")
        self._event_applied = True
        self._set_federated(session)

        try:
            if session is not None:
                self._evict_shadow()
                await self._ensure_profile(session.user, token)
            elif self._shadow is None:
                # A null event only ends the federated session; shadow sessions end through sign_out()
                self._profile = None
        finally:
            if not token.cancelled:
                self._loading = False

    async def _ensure_profile(self, user: FederatedUser, token: CancellationToken) -> None:
        """Resolve the profile for ``user`` unless it is already resolved or in flight."""
        if self._profile is not None and self._profile.id == user.id:
            return
        if user.id in self._profile_fetches:
            return

        # Never keep another identity's profile around while fetching
        self._profile = None
        self._profile_fetches.add(user.id)
        try:
            profile = await self._resolver.resolve_profile(user.id, user.profile_metadata())
        finally:
            self._profile_fetches.discard(user.id)

        if token.cancelled:
            return
        if self._user is None or self._user.id != user.id:
            logger.debug(f"Discarding profile for {user.id}: user changed while fetching")
            return
        if profile is not None:
            self._profile = profile

    # -------------------------------------------------------------------------
    # Commits (used by SessionFacade)
    # -------------------------------------------------------------------------

    def adopt_shadow(self, record: ShadowSession) -> None:
        """Make ``record`` the authoritative principal and persist it."""
        self._set_federated(None)
        self._set_shadow(record)
        self._store.save(record)
        self._loading = False

    def begin_loading(self) -> None:
        self._loading = True

    def clear_principal(self, token: Optional[CancellationToken] = None) -> None:
        """Reset to no principal; skipped if ``token`` was cancelled meanwhile."""
        if token is not None and token.cancelled:
            return
        self._set_federated(None)
        self._shadow = None
        self._profile = None
        self._loading = False

    def _set_federated(self, session: Optional[FederatedSession]) -> None:
        self._session = session
        self._user = session.user if session is not None else None

    def _set_shadow(self, record: ShadowSession) -> None:
        self._shadow = record
        self._profile = profile_from_shadow(record)

    def _evict_shadow(self) -> None:
        if self._shadow is not None:
            logger.info(f"Federated session supersedes shadow session {self._shadow.id}")
            self._shadow = None
            self._profile = None
        self._store.clear()
