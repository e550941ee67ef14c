"""User administration: role and status changes over profiles + user_roles."""
from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from bizdesk.core.notifications import Notifier
from bizdesk.core.query_cache import QueryCache
from bizdesk.repositories.user_repo import get_profile, list_users, update_profile, upsert_user_role
from bizdesk.schemas.user import AppRole, User, UserStatus, UserUpdate
from bizdesk.services.base import EntityService, MutationResult, coerce_choice


class UserService(EntityService):
    query_key = ("users",)
    label = "user"
    plural = "users"

    def __init__(
        self,
        session_factory: sessionmaker,
        cache: QueryCache,
        notifier: Notifier,
        *,
        list_limit: int = 500,
        default_role: AppRole | str = AppRole.VIEWER,
    ) -> None:
        super().__init__(session_factory, cache, notifier)
        self._list_limit = list_limit
        self._default_role = AppRole(default_role)

    def _fetch(self, db: Session) -> list[User]:
        return list_users(db, self._list_limit, self._default_role.value)

    def update_user_role(self, user_id: str, role: AppRole | str) -> MutationResult[str]:
        def work(db: Session) -> str:
            upsert_user_role(db, user_id, coerce_choice(AppRole, role, "role"))
            return user_id

        return self._mutate(
            work,
            success="User role updated successfully",
            failure="Failed to update user role",
        )

    def update_user_status(self, user_id: str, status: UserStatus | str) -> MutationResult[str]:
        def work(db: Session) -> str:
            update_profile(db, user_id, {"status": coerce_choice(UserStatus, status, "status")})
            return user_id

        return self._mutate(
            work,
            success="User status updated successfully",
            failure="Failed to update user status",
        )

    def update_user(self, user_id: str, data: UserUpdate) -> MutationResult[str]:
        """Profile fields that were set, then the role when one is given."""

        def work(db: Session) -> str:
            values = data.model_dump(exclude_unset=True, exclude={"role"})
            if values:
                update_profile(db, user_id, values)
            else:
                get_profile(db, user_id)
            if data.role:
                upsert_user_role(db, user_id, data.role)
            return user_id

        return self._mutate(
            work,
            success="User updated successfully",
            failure="Failed to update user",
        )
