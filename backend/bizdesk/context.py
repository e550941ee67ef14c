"""
Explicit wiring of settings, database, cache, notifier, session and services.
One AppContext per process; routers receive it through a dependency.
`session` is this process's own session (CLI, scripts); HTTP clients each
get theirs from `sessions`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from bizdesk.core.config import Settings, get_settings
from bizdesk.core.notifications import Notifier
from bizdesk.core.query_cache import QueryCache
from bizdesk.core.storage import ClientStorage, FileStorage
from bizdesk.db.session import get_session_factory
from bizdesk.services import (
    AccountService,
    AuthService,
    DepartmentService,
    EmployeeService,
    RoleDirectory,
    SessionRegistry,
    SessionStore,
    UserDirectory,
    UserService,
    VendorService,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    cache: QueryCache
    notifier: Notifier
    roles: RoleDirectory
    session: SessionStore
    sessions: SessionRegistry
    auth: AuthService
    accounts: AccountService
    users: UserService
    vendors: VendorService
    departments: DepartmentService
    employees: EmployeeService


def build_context(
    settings: Optional[Settings] = None,
    *,
    session_factory: Optional[sessionmaker] = None,
    storage: Optional[ClientStorage] = None,
    directory: Optional[UserDirectory] = None,
    roles: Optional[RoleDirectory] = None,
) -> AppContext:
    """Build and rehydrate; anything not passed in comes from settings."""
    settings = settings or get_settings()
    session_factory = session_factory or get_session_factory()
    storage = storage or FileStorage(settings.client_storage_path)
    roles = roles or RoleDirectory()
    if directory is None:
        if settings.user_directory_path:
            directory = UserDirectory.from_file(settings.user_directory_path)
        else:
            directory = UserDirectory()

    cache = QueryCache()
    notifier = Notifier()
    session = SessionStore(storage, roles)
    session.rehydrate()
    if session.user is not None:
        logger.info("Restored session", extra={"user": session.user.id})

    return AppContext(
        settings=settings,
        cache=cache,
        notifier=notifier,
        roles=roles,
        session=session,
        sessions=SessionRegistry(storage, roles),
        auth=AuthService(directory, roles, session),
        accounts=AccountService(session_factory, cache, notifier),
        users=UserService(
            session_factory,
            cache,
            notifier,
            list_limit=settings.user_list_limit,
            default_role=settings.default_user_role,
        ),
        vendors=VendorService(session_factory, cache, notifier),
        departments=DepartmentService(session_factory, cache, notifier),
        employees=EmployeeService(session_factory, cache, notifier),
    )
