"""
Employee accounts data models.

Employee accounts are the shadow-eligible principals: staff without a
federated identity who sign in with a username and password checked by
the database.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from modules.auth.models import SHADOW_ROLES, UserRole


class EmployeeAccount(BaseModel):
    """
    An ``employee_accounts`` row.

    ``password_hash`` is never selected nor exposed.
    """

    id: str = Field(..., description="Employee account ID")
    owner_id: str = Field(..., description="Owner that manages the account")
    username: str = Field(..., description="Globally unique login name")
    first_name: str
    last_name: str
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {"extra": "ignore"}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CreateEmployeeRequest(BaseModel):
    """Request to create an employee account."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    username: str = Field(..., description="Login name, stored lowercase")
    password: str = Field(..., description="Plaintext, hashed by the database trigger")
    role: UserRole = Field(default=UserRole.MANAGER)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, value: str) -> str:
        return value.strip()

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("role")
    @classmethod
    def check_employee_role(cls, value: UserRole) -> UserRole:
        if value not in SHADOW_ROLES:
            raise ValueError(f"Employees cannot hold the '{value.value}' role")
        return value


class EmployeeListResponse(BaseModel):
    """Employees managed by the current owner, newest first."""

    items: list[EmployeeAccount]
    total: int
