"""
Login, signup, logout and password reset against the user directory.
Failures are returned as AuthResult values so forms can show them inline.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from bizdesk.core.errors import (
    AccountInactive,
    AppError,
    EmailAlreadyExists,
    InvalidCredentials,
    InvalidRole,
)
from bizdesk.schemas.user import User, UserStatus
from bizdesk.services.directory import (
    RoleDirectory,
    UserDirectory,
    hash_password,
    normalize_email,
    verify_password,
)
from bizdesk.services.session_store import SessionStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuthResult:
    error: Optional[AppError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


class AuthService:
    def __init__(self, users: UserDirectory, roles: RoleDirectory, session: SessionStore) -> None:
        self._users = users
        self._roles = roles
        self._session = session

    @property
    def session(self) -> SessionStore:
        return self._session

    def for_session(self, session: SessionStore) -> "AuthService":
        """Same directory and roles, acting on another client's session."""
        return AuthService(self._users, self._roles, session)

    def login(self, email: str, password: str) -> AuthResult:
        entry = self._users.find_by_email(email)
        if entry is None or not verify_password(password, entry.password_hash):
            logger.info("Rejected login for %s", normalize_email(email))
            return AuthResult(InvalidCredentials())
        if entry.user.status == UserStatus.INACTIVE:
            logger.info("Rejected login for inactive account %s", entry.user.email)
            return AuthResult(AccountInactive())

        now = _utcnow()
        user = entry.user.model_copy(update={"last_login": now})
        self._users.record_login(user.email, now)
        self._session.start(user, self._roles.find_by_type(user.role))
        logger.info("User logged in", extra={"user": user.id})
        return AuthResult()

    def signup(self, email: str, password: str, name: str, role_id: str) -> AuthResult:
        if self._users.find_by_email(email) is not None:
            return AuthResult(EmailAlreadyExists())
        role = self._roles.find_by_id(role_id)
        if role is None:
            return AuthResult(InvalidRole())

        now = _utcnow()
        user = User(
            id=f"user_{uuid4().hex}",
            name=(name or "").strip(),
            email=(email or "").strip(),
            role=role.role_type,
            status=UserStatus.ACTIVE,
            created_at=now,
            last_login=now,
        )
        # Kept in the directory so the account can log in again after logout
        try:
            self._users.add(user, hash_password(password))
        except EmailAlreadyExists as exc:
            # Another signup for this email landed after the check above
            return AuthResult(exc)
        self._session.start(user, role)
        logger.info("User signed up", extra={"user": user.id})
        return AuthResult()

    def logout(self) -> None:
        user = self._session.user
        self._session.clear()
        if user is not None:
            logger.info("User logged out", extra={"user": user.id})

    def reset_password(self, email: str) -> AuthResult:
        """Always succeeds so callers cannot probe which emails exist."""
        entry = self._users.find_by_email(email)
        if entry is not None:
            logger.info("Password reset requested", extra={"user": entry.user.id})
        return AuthResult()
