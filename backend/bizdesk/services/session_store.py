"""Current identity + role, persisted under a single storage key."""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from bizdesk.core.storage import ClientStorage
from bizdesk.schemas.user import Role, User
from bizdesk.services.directory import RoleDirectory

logger = logging.getLogger(__name__)

AUTH_STORAGE_KEY = "auth_user"


class SessionStore:
    """
    Unauthenticated until start() or a successful rehydrate(); clear()
    returns to unauthenticated and removes the persisted record.
    Only the auth service calls start() and clear().
    """

    def __init__(self, storage: ClientStorage, roles: RoleDirectory) -> None:
        self._storage = storage
        self._roles = roles
        self.user: Optional[User] = None
        self.role: Optional[Role] = None
        self.is_loading = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def rehydrate(self) -> Optional[User]:
        raw = self._storage.get_item(AUTH_STORAGE_KEY)
        self.user, self.role = None, None
        if raw:
            try:
                user = User.model_validate_json(raw)
            except ValidationError:
                logger.warning("Discarding unreadable %s record", AUTH_STORAGE_KEY)
                self._storage.remove_item(AUTH_STORAGE_KEY)
            else:
                self.user = user
                self.role = self._roles.find_by_type(user.role)
        self.is_loading = False
        return self.user

    def start(self, user: User, role: Optional[Role]) -> None:
        self.user = user
        self.role = role
        self._storage.set_item(AUTH_STORAGE_KEY, user.model_dump_json())

    def clear(self) -> None:
        self.user = None
        self.role = None
        self._storage.remove_item(AUTH_STORAGE_KEY)

    def has_permission(self, permission: str) -> bool:
        return self.role is not None and self.role.allows(permission)
