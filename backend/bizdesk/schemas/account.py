"""Account domain shape and draft."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AccountType(str, Enum):
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class Account(BaseModel):
    id: str
    code: str
    name: str
    type: AccountType
    parent_id: Optional[str] = None
    balance: float = 0.0
    description: Optional[str] = None
    status: AccountStatus
    created_at: datetime
    updated_at: datetime


class AccountDraft(BaseModel):
    """Partial account; on update only explicitly set fields are written."""

    code: Optional[str] = None
    name: Optional[str] = None
    type: Optional[AccountType] = None
    parent_id: Optional[str] = None
    balance: Optional[float] = None
    description: Optional[str] = None
    status: Optional[AccountStatus] = None
