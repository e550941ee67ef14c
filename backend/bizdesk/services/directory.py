"""
User and role directories consulted by the auth service.

The user directory is process-local (optionally seeded from a JSON file);
passwords are stored as passlib hashes only.
"""
from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from passlib.context import CryptContext

from bizdesk.core.errors import EmailAlreadyExists
from bizdesk.schemas.user import AppRole, Role, User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        # Unrecognised hash format
        return False


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


DEFAULT_ROLES: tuple[Role, ...] = (
    Role(id="role_admin", name="Administrator", role_type=AppRole.ADMIN,
         description="Full access", permissions=["*"]),
    Role(id="role_manager", name="Manager", role_type=AppRole.MANAGER,
         description="Operations and reporting",
         permissions=["accounts.read", "accounts.write", "vendors.read", "vendors.write",
                      "hr.read", "hr.write", "users.read"]),
    Role(id="role_accountant", name="Accountant", role_type=AppRole.ACCOUNTANT,
         description="Ledger and vendors",
         permissions=["accounts.read", "accounts.write", "vendors.read", "vendors.write"]),
    Role(id="role_hr", name="HR Manager", role_type=AppRole.HR,
         description="Employees and departments", permissions=["hr.read", "hr.write"]),
    Role(id="role_sales", name="Sales", role_type=AppRole.SALES,
         description="Sales and customers", permissions=["accounts.read", "vendors.read"]),
    Role(id="role_viewer", name="Viewer", role_type=AppRole.VIEWER,
         description="Read-only", permissions=["accounts.read", "vendors.read", "hr.read"]),
)


class RoleDirectory:
    """Fixed role catalog."""

    def __init__(self, roles: Iterable[Role] = DEFAULT_ROLES) -> None:
        self._roles = list(roles)

    def all(self) -> list[Role]:
        return list(self._roles)

    def find_by_id(self, role_id: str) -> Optional[Role]:
        return next((r for r in self._roles if r.id == role_id), None)

    def find_by_type(self, role_type: AppRole | str) -> Optional[Role]:
        return next((r for r in self._roles if r.role_type == role_type), None)


@dataclass
class DirectoryEntry:
    user: User
    password_hash: Optional[str] = None


class UserDirectory:
    def __init__(self, entries: Iterable[DirectoryEntry] = ()) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, DirectoryEntry] = {}
        for entry in entries:
            self._entries[normalize_email(entry.user.email)] = entry

    @classmethod
    def from_file(cls, path: str | Path) -> "UserDirectory":
        """
        Load a JSON list of user records. Each record may carry either a
        password_hash or a plain password (hashed on load).
        """
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, list):
            raise ValueError(f"User directory {path} must contain a JSON list")
        entries = []
        for record in data:
            if not isinstance(record, dict):
                continue
            record = dict(record)
            password_hash = record.pop("password_hash", None)
            password = record.pop("password", None)
            if password_hash is None and password:
                password_hash = hash_password(password)
            entries.append(DirectoryEntry(user=User.model_validate(record), password_hash=password_hash))
        logger.info("Loaded %d directory user(s) from %s", len(entries), path)
        return cls(entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def find_by_email(self, email: str) -> Optional[DirectoryEntry]:
        with self._lock:
            return self._entries.get(normalize_email(email))

    def add(self, user: User, password_hash: Optional[str]) -> DirectoryEntry:
        """Insert under the lock; an email already present raises EmailAlreadyExists."""
        key = normalize_email(user.email)
        with self._lock:
            if key in self._entries:
                raise EmailAlreadyExists()
            entry = DirectoryEntry(user=user, password_hash=password_hash)
            self._entries[key] = entry
            return entry

    def record_login(self, email: str, when: datetime) -> None:
        with self._lock:
            entry = self._entries.get(normalize_email(email))
            if entry is not None:
                entry.user = entry.user.model_copy(update={"last_login": when})
