"""
Authentication module data models.

These models define the two identity sources (federated Supabase sessions
and locally-issued shadow sessions) and the unified principal the rest
of the application trusts.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class UserRole(str, Enum):
    """Roles stored in the ``user_role`` database enum."""

    SUPERADMIN = "superadmin"
    OWNER = "owner"
    MANAGER = "manager"
    AUDITOR = "auditor"
    OPERATOR = "operador"  # Matches the PostgreSQL enum value exactly


# Roles an employee account (and therefore a shadow session) may carry
SHADOW_ROLES = frozenset({UserRole.MANAGER, UserRole.AUDITOR, UserRole.OPERATOR})


class SessionSource(str, Enum):
    """Which identity source a principal came from."""

    FEDERATED = "federated"
    SHADOW = "shadow"
    NONE = "none"


class SessionEvent(str, Enum):
    """Session change events emitted by the identity provider."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    MFA_CHALLENGE_VERIFIED = "MFA_CHALLENGE_VERIFIED"


class Profile(BaseModel):
    """
    Denormalized view of a user, as stored in the ``profiles`` table.

    Shadow principals get a profile too, mapped from their session record.
    """

    id: str = Field(..., description="Profile ID (federated user id or employee account id)")
    email: Optional[str] = Field(None, description="Email, always null for shadow principals")
    full_name: Optional[str] = Field(None, description="Display name")
    role: Optional[UserRole] = Field(None, description="Application role")

    model_config = {"frozen": True, "extra": "ignore"}


class FederatedUser(BaseModel):
    """Identity issued by the federated provider (Supabase Auth user)."""

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    app_metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True, "extra": "ignore"}

    def profile_metadata(self) -> dict[str, Any]:
        """Metadata offered to the profile resolver for fallback synthesis."""
        metadata = dict(self.user_metadata)
        metadata.setdefault("email", self.email)
        return metadata


class FederatedSession(BaseModel):
    """A federated session: tokens plus the user they were issued to."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    user: FederatedUser

    model_config = {"frozen": True, "extra": "ignore"}


class ShadowSession(BaseModel):
    """
    A locally-authenticated employee session.

    Produced by the ``login_employee`` database function after it verified
    the employee's password. Persisted verbatim in the shadow session store.
    """

    id: str = Field(..., description="Employee account ID")
    email: None = Field(None, description="Shadow principals never carry an email")
    full_name: str = Field(..., description="First and last name")
    role: UserRole = Field(..., description="Employee role")
    owner_id: Optional[str] = Field(None, description="Owner that created the account")
    username: Optional[str] = Field(None, description="Login username")
    garage_id: Optional[str] = Field(None, description="Garage the account was scoped to")

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("email", mode="before")
    @classmethod
    def drop_email(cls, value: Any) -> None:
        """Shadow records are stored without an email whatever the caller sent."""
        return None

    @field_validator("role")
    @classmethod
    def check_shadow_role(cls, value: UserRole) -> UserRole:
        if value not in SHADOW_ROLES:
            raise ValueError(f"role '{value.value}' cannot be used by a shadow session")
        return value


class Principal(BaseModel):
    """
    The unified, role-bearing identity for the current console session.

    ``id`` values are only comparable within the same ``source``.
    """

    id: Optional[str] = None
    profile: Optional[Profile] = None
    role: Optional[UserRole] = None
    source: SessionSource = SessionSource.NONE

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.source != SessionSource.NONE


ANONYMOUS = Principal()


class SessionSnapshot(BaseModel):
    """Read-only copy of the facade state handed to consumers."""

    principal: Principal
    session: Optional[FederatedSession] = None
    user: Optional[FederatedUser] = None
    profile: Optional[Profile] = None
    shadow_session: Optional[ShadowSession] = None
    loading: bool = True
    error: Optional[str] = None

    model_config = {"frozen": True}
