"""
Per-client sessions for the HTTP API.

Each browser gets an opaque token (a cookie). The token names its own
SessionStore, persisted under `<token>/auth_user` in the shared client
storage, so a restart keeps clients logged in and no client sees another's
session.
"""
from __future__ import annotations

import logging
import secrets
import threading
from typing import Optional

from bizdesk.core.storage import ClientStorage, ScopedStorage
from bizdesk.services.directory import RoleDirectory
from bizdesk.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self, storage: ClientStorage, roles: RoleDirectory) -> None:
        self._storage = storage
        self._roles = roles
        self._lock = threading.Lock()
        self._sessions: dict[str, SessionStore] = {}

    def _store(self, token: str) -> SessionStore:
        return SessionStore(ScopedStorage(self._storage, token), self._roles)

    def open(self) -> tuple[str, SessionStore]:
        """A fresh, unauthenticated session under a new token."""
        token = secrets.token_urlsafe(32)
        session = self._store(token)
        session.is_loading = False
        with self._lock:
            self._sessions[token] = session
        return token, session

    def get(self, token: Optional[str]) -> Optional[SessionStore]:
        """The authenticated session for token, rehydrating it after a restart."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
        if session is None:
            session = self._store(token)
            if session.rehydrate() is None:
                return None
            with self._lock:
                session = self._sessions.setdefault(token, session)
        return session if session.is_authenticated else None

    def discard(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None and session.is_authenticated:
            session.clear()
        else:
            self._store(token).clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
