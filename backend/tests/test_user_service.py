from __future__ import annotations

from sqlalchemy import func, select

from bizdesk.core.notifications import NotificationVariant
from bizdesk.db.session import session_scope
from bizdesk.models import UserRole
from bizdesk.schemas.user import AppRole, UserStatus, UserUpdate
from bizdesk.services import UserService


def _role_rows(session_factory, user_id):
    with session_scope(session_factory) as db:
        return db.execute(
            select(func.count()).select_from(UserRole).where(UserRole.user_id == user_id)
        ).scalar()


def test_list_joins_roles_and_defaults_to_viewer(users, add_profile):
    boss = add_profile("boss@example.com", "Boss", role="admin")
    plain = add_profile("plain@example.com")

    listed = {u.id: u for u in users.list()}

    assert listed[boss].role is AppRole.ADMIN
    assert listed[boss].name == "Boss"
    assert listed[plain].role is AppRole.VIEWER
    assert listed[plain].name == ""
    assert listed[plain].status is UserStatus.ACTIVE


def test_list_respects_row_cap(session_factory, cache, notifier, add_profile):
    for i in range(4):
        add_profile(f"u{i}@example.com")
    capped = UserService(session_factory, cache, notifier, list_limit=3)

    assert len(capped.list()) == 3


def test_update_role_inserts_then_updates_single_row(users, add_profile, session_factory, notifier):
    user_id = add_profile("new@example.com")

    first = users.update_user_role(user_id, AppRole.ACCOUNTANT)
    second = users.update_user_role(user_id, AppRole.MANAGER)

    assert first.ok and second.ok
    assert _role_rows(session_factory, user_id) == 1
    assert users.list()[0].role is AppRole.MANAGER
    assert notifier.last.title == "User role updated successfully"


def test_update_role_for_unknown_user_fails(users, notifier):
    result = users.update_user_role("nobody", AppRole.ADMIN)

    assert not result.ok
    assert notifier.last.variant is NotificationVariant.ERROR
    assert notifier.last.title == "Failed to update user role"


def test_update_status_invalidates_cache(users, add_profile, cache):
    user_id = add_profile("worker@example.com")
    assert users.list()[0].status is UserStatus.ACTIVE

    result = users.update_user_status(user_id, UserStatus.INACTIVE)

    assert result.ok
    assert not cache.contains(("users",))
    assert users.list()[0].status is UserStatus.INACTIVE


def test_update_user_changes_profile_and_role(users, add_profile, session_factory):
    user_id = add_profile("mix@example.com", "Old", role="viewer")

    result = users.update_user(user_id, UserUpdate(name="New", role=AppRole.HR))

    assert result.ok
    user = users.list()[0]
    assert user.name == "New"
    assert user.role is AppRole.HR
    assert user.status is UserStatus.ACTIVE
    assert _role_rows(session_factory, user_id) == 1


def test_update_user_unknown_keeps_cache(users, add_profile, cache):
    add_profile("someone@example.com")
    before = users.list()

    result = users.update_user("ghost", UserUpdate(name="Ghost"))

    assert not result.ok
    assert cache.get(("users",)) is before


def test_unknown_role_is_a_failed_mutation(users, add_profile, cache, notifier, session_factory):
    user_id = add_profile("role@example.com", role="viewer")
    before = users.list()

    result = users.update_user_role(user_id, "superuser")

    assert not result.ok
    assert "superuser" in result.error
    assert notifier.last.variant is NotificationVariant.ERROR
    assert notifier.last.title == "Failed to update user role"
    assert cache.get(("users",)) is before
    assert _role_rows(session_factory, user_id) == 1


def test_unknown_status_is_a_failed_mutation(users, add_profile, cache, notifier):
    add_profile("status@example.com")
    before = users.list()

    result = users.update_user_status(before[0].id, "archived")

    assert not result.ok
    assert notifier.last.title == "Failed to update user status"
    assert cache.get(("users",)) is before
    users.refetch()
    assert users.list()[0].status is UserStatus.ACTIVE


def test_role_given_as_plain_string(users, add_profile):
    user_id = add_profile("str@example.com")

    assert users.update_user_role(user_id, "accountant").ok
    assert users.list()[0].role is AppRole.ACCOUNTANT


def test_failed_status_update_keeps_cached_read(users, add_profile, cache):
    add_profile("kept@example.com")
    before = users.list()

    result = users.update_user_status("ghost", UserStatus.INACTIVE)

    assert not result.ok
    assert cache.get(("users",)) is before
