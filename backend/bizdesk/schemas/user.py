"""User, role and session shapes."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AppRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    ACCOUNTANT = "accountant"
    HR = "hr"
    SALES = "sales"
    VIEWER = "viewer"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(BaseModel):
    """A user as listed for administration and held in the session."""

    id: str
    name: str = ""
    email: str
    role: AppRole = AppRole.VIEWER
    status: UserStatus = UserStatus.ACTIVE
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    status: Optional[UserStatus] = None
    role: Optional[AppRole] = None


class Role(BaseModel):
    id: str
    name: str
    role_type: AppRole
    description: str = ""
    permissions: list[str] = Field(default_factory=list)

    def allows(self, permission: str) -> bool:
        return "*" in self.permissions or permission in self.permissions
