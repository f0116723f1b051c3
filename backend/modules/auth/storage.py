"""
Shadow session storage.

Shadow sessions live in a medium scoped to one console session, never in
a durable store: staff authenticated through a shadow session must sign in
again whenever their console session ends.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .interfaces import ISessionStorage
from .models import ShadowSession

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "garage_shadow_user"


class InMemorySessionStorage:
    """
    Session-scoped key/value medium.

    One instance belongs to exactly one console session and is dropped
    together with it.
    """

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class ShadowSessionStore:
    """
    Persists a single shadow session under a fixed key.

    Every write replaces the whole record, so no coordination is needed
    between writers on the event loop.
    """

    def __init__(self, storage: ISessionStorage, key: str = DEFAULT_STORAGE_KEY):
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, record: ShadowSession) -> None:
        """Replace the stored shadow session with ``record``."""
        self._storage.set_item(self._key, record.model_dump_json())

    def load(self) -> Optional[ShadowSession]:
        """
        Load the stored shadow session.

        A record that no longer parses is removed and treated as absent.
        """
        raw = self._storage.get_item(self._key)
        if raw is None:
            return None

        try:
            return ShadowSession.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Invalid shadow session in storage, clearing")
            self.clear()
            return None

    def clear(self) -> None:
        self._storage.remove_item(self._key)
