"""
Authentication module interfaces.

The session core depends on these protocols, not on Supabase directly.
This enables testing with fakes and swapping the identity provider.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from .models import FederatedSession, Profile

SessionChangeCallback = Callable[[str, Optional[FederatedSession]], None]


@runtime_checkable
class ISubscription(Protocol):
    """Handle returned by a session-change subscription."""

    def unsubscribe(self) -> None:
        """Stop delivering events to the subscribed callback."""
        ...


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for the federated identity provider.

    Implementations wrap an external service (Supabase Auth in production)
    and translate its session objects into FederatedSession models.
    """

    async def get_current_session(self) -> Optional[FederatedSession]:
        """
        Return the session currently held by the provider client.

        Raises:
            IdentityProviderError: If the provider cannot be reached
        """
        ...

    def on_session_change(self, callback: SessionChangeCallback) -> ISubscription:
        """
        Subscribe to sign-in, sign-out and token refresh events.

        The callback is invoked synchronously with ``(event, session)``;
        ``session`` is None on sign-out.
        """
        ...

    async def sign_in_with_password(self, email: str, password: str) -> FederatedSession:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the provider rejects the credentials
            IdentityProviderError: If the provider cannot be reached
        """
        ...

    async def sign_out(self) -> None:
        """Sign out of the federated session."""
        ...

    async def release(self) -> None:
        """Drop the provider client's local session and background work."""
        ...


@runtime_checkable
class IProfileRepository(Protocol):
    """Point lookups against the canonical profile store."""

    async def get_profile(self, user_id: str) -> Profile:
        """
        Get the profile for a federated user id.

        Raises:
            ProfileNotFoundError: If no row exists for the id
        """
        ...


@runtime_checkable
class ISessionStorage(Protocol):
    """
    String key/value medium scoped to a single console session.

    Mirrors the browser's sessionStorage: values are strings and the
    medium is discarded when the console session ends.
    """

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for console sign-in.

    Other modules and routes should depend on IAuthService,
    not the concrete implementation.
    """

    async def sign_in(self, facade, identifier: str, password: str) -> None:
        """
        Authenticate ``identifier`` and update the facade's principal.

        Identifiers containing ``@`` go through the federated provider;
        anything else is treated as an employee username.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
        """
        ...
