"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.profiles import ProfileResolver
    from modules.auth.registry import ConsoleSessionRegistry
    from modules.employees.interfaces import IEmployeeService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    Process-wide services are cached as singletons within the container.
    Employee services are built per request, because they act with the
    signed-in owner's token. Use reset() to clear all cached services
    for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._profile_resolver: "ProfileResolver | None" = None
        self._session_registry: "ConsoleSessionRegistry | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import get_auth_service
            self._auth_service = get_auth_service()
        return self._auth_service

    @property
    def profile_resolver(self) -> "ProfileResolver":
        """Get the profile resolver instance."""
        if self._profile_resolver is None:
            from modules.auth.profiles import ProfileResolver
            from modules.auth.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_resolver = ProfileResolver(ProfileRepository(get_supabase_client()))
        return self._profile_resolver

    @property
    def sessions(self) -> "ConsoleSessionRegistry":
        """Get the console session registry."""
        if self._session_registry is None:
            from modules.auth.provider import SupabaseIdentityProvider
            from modules.auth.registry import ConsoleSessionRegistry
            from shared.database import create_identity_client
            self._session_registry = ConsoleSessionRegistry(
                provider_factory=lambda: SupabaseIdentityProvider(create_identity_client()),
                resolver=self.profile_resolver,
            )
        return self._session_registry

    def employees_for(self, access_token: str) -> "IEmployeeService":
        """Build an employee service acting with the owner's access token."""
        from modules.employees.repository import EmployeeRepository
        from modules.employees.service import EmployeeService
        from shared.database import get_supabase_user_client
        return EmployeeService(EmployeeRepository(get_supabase_user_client(access_token)))

    async def aclose(self) -> None:
        """Close every open console session."""
        if self._session_registry is not None:
            await self._session_registry.close_all()

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh service
        instances with different mock dependencies.
        """
        self._auth_service = None
        self._profile_resolver = None
        self._session_registry = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None


async def close_container() -> None:
    """Close open console sessions, then reset the container (app shutdown)."""
    if _container is not None:
        await _container.aclose()
    reset_container()


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_session_registry() -> "ConsoleSessionRegistry":
    """FastAPI dependency for the console session registry."""
    return get_container().sessions
