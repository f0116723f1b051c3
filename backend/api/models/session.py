"""
Session request/response models.

Responses expose the principal only; federated tokens never leave the
console session.
"""

from pydantic import BaseModel, Field
from typing import Optional

from modules.auth.guards import landing_path
from modules.auth.models import Principal, SessionSnapshot


class LoginRequest(BaseModel):
    """Email (owners) or username (employees) plus password."""

    identifier: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionStateResponse(BaseModel):
    """Current state of a console session."""

    principal: Principal
    loading: bool
    error: Optional[str] = None
    landing_path: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionStateResponse":
        return cls(
            principal=snapshot.principal,
            loading=snapshot.loading,
            error=snapshot.error,
            landing_path=landing_path(snapshot),
        )
