"""
Console session registry.

A console session is the server-side counterpart of a browser tab: it
owns a session-scoped storage medium and a mounted SessionFacade with its
own identity client. Reloading a console session re-mounts a fresh facade
over the same storage, so shadow sessions survive a reload while federated
sessions (whose persistence is disabled) do not.

Console sessions idle for longer than the configured TTL are closed the
next time a session is opened, the way a browser discards a closed tab.
"""

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Optional

from shared.config import Settings, get_settings

from .facade import SessionFacade
from .interfaces import IIdentityProvider
from .profiles import ProfileResolver
from .storage import InMemorySessionStorage, ShadowSessionStore

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], IIdentityProvider]
Clock = Callable[[], float]


@dataclass
class ConsoleSession:
    """One console session: its storage medium, its mounted facade, and when it was last used."""

    id: str
    storage: InMemorySessionStorage
    facade: SessionFacade
    last_seen: float = 0.0


class ConsoleSessionRegistry:
    """
    Tracks the open console sessions of this process.

    Session ids are always minted here; unknown ids presented by clients
    open a new session instead of being adopted.
    """

    def __init__(
        self,
        provider_factory: ProviderFactory,
        resolver: ProfileResolver,
        settings: Optional[Settings] = None,
        clock: Clock = time.monotonic,
    ):
        self._provider_factory = provider_factory
        self._resolver = resolver
        self._settings = settings or get_settings()
        self._clock = clock
        self._sessions: dict[str, ConsoleSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def _build_facade(self, storage: InMemorySessionStorage) -> SessionFacade:
        store = ShadowSessionStore(storage, key=self._settings.shadow_session_storage_key)
        return SessionFacade(
            provider=self._provider_factory(),
            resolver=self._resolver,
            store=store,
            settings=self._settings,
        )

    async def open(self) -> ConsoleSession:
        """Open a new console session and mount its facade."""
        await self.sweep()

        session_id = secrets.token_urlsafe(32)
        storage = InMemorySessionStorage()
        console = ConsoleSession(
            id=session_id,
            storage=storage,
            facade=self._build_facade(storage),
            last_seen=self._clock(),
        )
        self._sessions[session_id] = console

        await console.facade.mount()
        logger.debug(f"Opened console session ({len(self._sessions)} open)")
        return console

    def get(self, session_id: Optional[str]) -> Optional[ConsoleSession]:
        """Return a known console session and mark it as used."""
        if session_id is None:
            return None
        console = self._sessions.get(session_id)
        if console is not None:
            console.last_seen = self._clock()
        return console

    async def get_or_open(self, session_id: Optional[str]) -> ConsoleSession:
        """Return the console session for ``session_id``, opening a new one if unknown."""
        console = self.get(session_id)
        if console is None:
            console = await self.open()
        return console

    async def reload(self, session_id: str) -> ConsoleSession:
        """
        Tear down the facade and mount a fresh one over the same storage.

        Raises:
            KeyError: If the console session is unknown
        """
        console = self._sessions[session_id]
        await console.facade.close()

        reloaded = ConsoleSession(
            id=session_id,
            storage=console.storage,
            facade=self._build_facade(console.storage),
            last_seen=self._clock(),
        )
        self._sessions[session_id] = reloaded
        await reloaded.facade.mount()
        return reloaded

    async def close(self, session_id: str) -> bool:
        """Close the facade and discard the storage. Returns False if unknown."""
        console = self._sessions.pop(session_id, None)
        if console is None:
            return False
        await console.facade.close()
        return True

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close(session_id)

    async def sweep(self) -> int:
        """
        Close console sessions idle for longer than the configured TTL.

        Returns:
            Number of console sessions closed
        """
        cutoff = self._clock() - self._settings.console_session_idle_ttl_seconds
        expired = [sid for sid, console in self._sessions.items() if console.last_seen < cutoff]
        for session_id in expired:
            await self.close(session_id)

        if expired:
            logger.info(f"Closed {len(expired)} idle console sessions")
        return len(expired)
