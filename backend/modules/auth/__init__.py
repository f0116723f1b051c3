"""
Authentication module.

Reconciles federated (Supabase Auth) sessions and shadow (employee)
sessions into a single principal per console session.

Public API:
- SessionFacade: Read/write surface over the current principal
- ConsoleSessionRegistry: Console sessions of this process
- IAuthService / AuthService: Console sign-in
- Models: Principal, Profile, ShadowSession, FederatedSession, UserRole
- Guards: landing_path, require_role
- Auth exceptions: InvalidCredentialsError, InsufficientPermissionsError, etc.
"""

from .interfaces import (
    IAuthService,
    IIdentityProvider,
    IProfileRepository,
    ISessionStorage,
    ISubscription,
)
from .models import (
    FederatedSession,
    FederatedUser,
    Principal,
    Profile,
    SessionEvent,
    SessionSnapshot,
    SessionSource,
    ShadowSession,
    UserRole,
)
from .exceptions import (
    IdentityProviderError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    ProfileNotFoundError,
    InvalidShadowSessionError,
    InsufficientPermissionsError,
)
from .facade import SessionFacade
from .guards import landing_path, require_role
from .profiles import ProfileResolver, fallback_profile, profile_from_shadow
from .reconciler import CancellationToken, SessionReconciler
from .registry import ConsoleSession, ConsoleSessionRegistry
from .storage import InMemorySessionStorage, ShadowSessionStore

__all__ = [
    # Interfaces
    "IAuthService",
    "IIdentityProvider",
    "IProfileRepository",
    "ISessionStorage",
    "ISubscription",
    # Models
    "FederatedSession",
    "FederatedUser",
    "Principal",
    "Profile",
    "SessionEvent",
    "SessionSnapshot",
    "SessionSource",
    "ShadowSession",
    "UserRole",
    # Exceptions
    "IdentityProviderError",
    "InvalidCredentialsError",
    "NotAuthenticatedError",
    "ProfileNotFoundError",
    "InvalidShadowSessionError",
    "InsufficientPermissionsError",
    # Session core
    "SessionFacade",
    "SessionReconciler",
    "CancellationToken",
    "ProfileResolver",
    "fallback_profile",
    "profile_from_shadow",
    "InMemorySessionStorage",
    "ShadowSessionStore",
    "ConsoleSession",
    "ConsoleSessionRegistry",
    # Guards
    "landing_path",
    "require_role",
]
