"""Shared fixtures: in-memory SQLite with the real models, services, auth."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

import bizdesk.models  # noqa: F401  (registers tables)
from bizdesk.core.config import Settings
from bizdesk.core.notifications import Notifier
from bizdesk.core.query_cache import QueryCache
from bizdesk.core.storage import MemoryStorage
from bizdesk.db.session import Base, make_session_factory, session_scope
from bizdesk.models import Profile, UserRole
from bizdesk.schemas.user import AppRole, User, UserStatus
from bizdesk.services import (
    AccountService,
    AuthService,
    DepartmentService,
    EmployeeService,
    RoleDirectory,
    SessionStore,
    UserDirectory,
    UserService,
    VendorService,
)
from bizdesk.services.directory import DirectoryEntry, hash_password

PASSWORD = "correct horse battery"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def cache():
    return QueryCache()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def accounts(session_factory, cache, notifier):
    return AccountService(session_factory, cache, notifier)


@pytest.fixture
def vendors(session_factory, cache, notifier):
    return VendorService(session_factory, cache, notifier)


@pytest.fixture
def users(session_factory, cache, notifier):
    return UserService(session_factory, cache, notifier, list_limit=500, default_role="viewer")


@pytest.fixture
def departments(session_factory, cache, notifier):
    return DepartmentService(session_factory, cache, notifier)


@pytest.fixture
def employees(session_factory, cache, notifier):
    return EmployeeService(session_factory, cache, notifier)


@pytest.fixture
def add_profile(session_factory):
    """Insert a profile (and optional role row) straight into the tables."""

    def _add(email: str, name: str = "", role: str | None = None, status: str = "active") -> str:
        with session_scope(session_factory) as db:
            profile = Profile(email=email, name=name, status=status)
            db.add(profile)
            db.flush()
            if role is not None:
                db.add(UserRole(user_id=profile.id, role=role))
            return profile.id

    return _add


def _directory_user(user_id: str, email: str, role: AppRole, status: UserStatus) -> DirectoryEntry:
    user = User(
        id=user_id,
        name=email.split("@")[0].title(),
        email=email,
        role=role,
        status=status,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    return DirectoryEntry(user=user, password_hash=PASSWORD_HASH)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def roles():
    return RoleDirectory()


@pytest.fixture
def directory():
    return UserDirectory(
        [
            _directory_user("user_admin", "admin@example.com", AppRole.ADMIN, UserStatus.ACTIVE),
            _directory_user("user_clerk", "clerk@example.com", AppRole.ACCOUNTANT, UserStatus.ACTIVE),
            _directory_user("user_gone", "gone@example.com", AppRole.VIEWER, UserStatus.INACTIVE),
        ]
    )


@pytest.fixture
def session_store(storage, roles):
    store = SessionStore(storage, roles)
    store.rehydrate()
    return store


@pytest.fixture
def auth(directory, roles, session_store):
    return AuthService(directory, roles, session_store)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        client_storage_path=str(tmp_path / "client_storage.json"),
    )
