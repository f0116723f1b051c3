"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
a scriptable identity provider, an in-memory profile repository and the
session core wired over them.
"""

import asyncio
from typing import Optional

import pytest
import pytest_asyncio

from modules.auth.exceptions import (
    IdentityProviderError,
    InvalidCredentialsError,
    ProfileNotFoundError,
)
from modules.auth.facade import SessionFacade
from modules.auth.models import FederatedSession, Profile, SessionEvent, UserRole
from modules.auth.profiles import ProfileResolver
from modules.auth.service import reset_auth_service
from modules.auth.storage import InMemorySessionStorage, ShadowSessionStore
from shared.config import Settings


def make_federated_session(
    user_id: str = "owner-123",
    email: Optional[str] = "owner@example.com",
    access_token: str = "access-token",
    **user_metadata,
) -> FederatedSession:
    """
    Create a federated session for tests.

    Args:
        user_id: Federated user id
        email: User email
        access_token: Access token carried by the session
        **user_metadata: Metadata such as full_name or role

    Returns:
        FederatedSession
    """
    return FederatedSession.model_validate(
        {
            "access_token": access_token,
            "refresh_token": "refresh-token",
            "user": {"id": user_id, "email": email, "user_metadata": user_metadata},
        }
    )


class FakeSubscription:
    """Subscription handle recording whether it was released."""

    def __init__(self, provider: "FakeIdentityProvider", callback):
        self._provider = provider
        self.callback = callback
        self.unsubscribed = False

    def unsubscribe(self) -> None:
        self.unsubscribed = True
        if self.callback in self._provider.callbacks:
            self._provider.callbacks.remove(self.callback)


class FakeIdentityProvider:
    """
    Scriptable IIdentityProvider.

    ``emit`` delivers an event synchronously to every subscriber, the way
    the Supabase client invokes its callbacks.
    """

    def __init__(self, session: Optional[FederatedSession] = None):
        self.session = session
        self.callbacks: list = []
        self.subscriptions: list[FakeSubscription] = []
        self.get_session_error: Optional[Exception] = None
        self.get_session_gate: Optional[asyncio.Event] = None
        self.sign_out_error: Optional[Exception] = None
        self.sign_out_delay: float = 0.0
        self.accounts: dict[str, tuple[str, FederatedSession]] = {}
        self.get_session_calls = 0
        self.sign_out_calls = 0
        self.release_calls = 0

    async def get_current_session(self) -> Optional[FederatedSession]:
        self.get_session_calls += 1
        if self.get_session_gate is not None:
            await self.get_session_gate.wait()
        if self.get_session_error is not None:
            raise self.get_session_error
        return self.session

    def on_session_change(self, callback) -> FakeSubscription:
        self.callbacks.append(callback)
        subscription = FakeSubscription(self, callback)
        self.subscriptions.append(subscription)
        return subscription

    def emit(self, event: str, session: Optional[FederatedSession]) -> None:
        for callback in list(self.callbacks):
            callback(event, session)

    async def sign_in_with_password(self, email: str, password: str) -> FederatedSession:
        if email not in self.accounts or self.accounts[email][0] != password:
            raise InvalidCredentialsError("Invalid login credentials")
        self.session = self.accounts[email][1]
        self.emit(SessionEvent.SIGNED_IN.value, self.session)
        return self.session

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        if self.sign_out_delay:
            await asyncio.sleep(self.sign_out_delay)
        if self.sign_out_error is not None:
            raise self.sign_out_error
        self.session = None
        self.emit(SessionEvent.SIGNED_OUT.value, None)

    async def release(self) -> None:
        self.release_calls += 1
        self.session = None


class InMemoryProfileRepository:
    """IProfileRepository over a dict, counting lookups per user id."""

    def __init__(self, profiles: Optional[dict[str, Profile]] = None):
        self.profiles = dict(profiles or {})
        self.calls: list[str] = []
        self.error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None

    async def get_profile(self, user_id: str) -> Profile:
        self.calls.append(user_id)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if user_id not in self.profiles:
            raise ProfileNotFoundError(user_id)
        return self.profiles[user_id]


@pytest.fixture(autouse=True)
def reset_auth_singleton():
    """Reset the auth service singleton before and after each test."""
    reset_auth_service()
    yield
    reset_auth_service()


@pytest.fixture
def settings() -> Settings:
    """Settings with the defaults used by the session core."""
    return Settings(sign_out_timeout_seconds=0.2)


@pytest.fixture
def owner_profile() -> Profile:
    return Profile(id="owner-123", email="owner@example.com", full_name="Olga Owner", role=UserRole.OWNER)


@pytest.fixture
def provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def profiles(owner_profile: Profile) -> InMemoryProfileRepository:
    return InMemoryProfileRepository({owner_profile.id: owner_profile})


@pytest.fixture
def resolver(profiles: InMemoryProfileRepository) -> ProfileResolver:
    return ProfileResolver(profiles)


@pytest.fixture
def storage() -> InMemorySessionStorage:
    return InMemorySessionStorage()


@pytest.fixture
def store(storage: InMemorySessionStorage) -> ShadowSessionStore:
    return ShadowSessionStore(storage)


@pytest.fixture
def facade(provider, resolver, store, settings) -> SessionFacade:
    """Unmounted facade over the fakes."""
    return SessionFacade(provider=provider, resolver=resolver, store=store, settings=settings)


@pytest.fixture
def shadow_record() -> dict:
    return {"id": "e1", "full_name": "Ana", "role": "manager"}


@pytest.fixture
def connectivity_error() -> IdentityProviderError:
    return IdentityProviderError("connection refused")


@pytest.fixture
def make_session():
    """Factory fixture building federated sessions (see make_federated_session)."""
    return make_federated_session


@pytest.fixture
def provider_factory():
    """Factory fixture building fresh identity providers, recording each one."""
    created: list[FakeIdentityProvider] = []

    def factory() -> FakeIdentityProvider:
        provider = FakeIdentityProvider()
        created.append(provider)
        return provider

    factory.created = created
    return factory


@pytest_asyncio.fixture
async def mounted(facade: SessionFacade):
    """Mounted facade, unmounted at teardown."""
    await facade.mount()
    yield facade
    facade.unmount()
