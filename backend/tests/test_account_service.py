from __future__ import annotations

import pytest

from bizdesk.core.errors import BackendFailure
from bizdesk.core.notifications import NotificationVariant
from bizdesk.db.session import Base
from bizdesk.schemas.account import AccountDraft, AccountStatus, AccountType


def _draft(code: str, name: str, **extra) -> AccountDraft:
    return AccountDraft(code=code, name=name, type=AccountType.ASSET, **extra)


def test_list_is_ordered_by_code_and_mapped(accounts):
    accounts.create(_draft("2000", "Payables"))
    accounts.create(_draft("1000", "Cash", balance=125.5))

    listed = accounts.list()

    assert [a.code for a in listed] == ["1000", "2000"]
    cash = listed[0]
    assert cash.type is AccountType.ASSET
    assert cash.status is AccountStatus.ACTIVE
    assert cash.balance == 125.5
    assert cash.created_at is not None


def test_create_invalidates_and_next_read_includes_record(accounts, cache, notifier):
    assert accounts.list() == []

    result = accounts.create(_draft("1100", "Bank"))

    assert result.ok
    assert result.data.code == "1100"
    assert not cache.contains(("accounts",))
    assert [a.code for a in accounts.list()] == ["1100"]
    assert cache.fetch_count(("accounts",)) == 2
    assert notifier.last.variant is NotificationVariant.SUCCESS
    assert notifier.last.title == "Account created successfully"


def test_delete_excludes_record_from_next_read(accounts):
    keep = accounts.create(_draft("1000", "Cash")).data
    gone = accounts.create(_draft("1001", "Petty cash")).data
    accounts.list()

    result = accounts.delete(gone.id)

    assert result.ok
    assert [a.id for a in accounts.list()] == [keep.id]


def test_failed_create_keeps_cached_read_and_reports_error(accounts, cache, notifier):
    accounts.create(_draft("1000", "Cash"))
    before = accounts.list()

    result = accounts.create(_draft("1000", "Duplicate"))

    assert not result.ok
    assert "UNIQUE" in result.error
    assert cache.get(("accounts",)) is before
    assert notifier.last.variant is NotificationVariant.ERROR
    assert notifier.last.title == "Failed to create account"
    assert notifier.last.description == result.error


def test_create_without_type_fails_on_not_null(accounts):
    result = accounts.create(AccountDraft(code="9000", name="No type"))

    assert not result.ok
    assert accounts.list() == []


def test_update_writes_only_provided_fields(accounts):
    created = accounts.create(_draft("1000", "Cash", description="Main till", balance=10)).data

    result = accounts.update(created.id, AccountDraft(name="Cash on hand"))

    assert result.ok
    updated = accounts.list()[0]
    assert updated.name == "Cash on hand"
    assert updated.description == "Main till"
    assert updated.balance == 10
    assert updated.code == "1000"


def test_update_unknown_account_is_reported(accounts, notifier):
    result = accounts.update("missing", AccountDraft(name="x"))

    assert not result.ok
    assert notifier.last.title == "Failed to update account"
    assert "not found" in notifier.last.description


def test_bulk_update_status_reports_count(accounts, notifier):
    ids = [accounts.create(_draft(f"10{i}", f"Acc {i}")).data.id for i in range(3)]

    result = accounts.bulk_update_status(ids, AccountStatus.INACTIVE)

    assert result.ok
    assert result.data == 3
    assert notifier.last.title == "3 account(s) updated successfully"
    assert {a.status for a in accounts.list()} == {AccountStatus.INACTIVE}


def test_bulk_update_status_rejects_unknown_status(accounts, cache, notifier):
    created = accounts.create(_draft("1000", "Cash")).data
    before = accounts.list()

    result = accounts.bulk_update_status([created.id], "bogus")

    assert not result.ok
    assert "bogus" in result.error
    assert notifier.last.title == "Failed to update accounts"
    assert cache.get(("accounts",)) is before
    accounts.refetch()
    assert [a.status for a in accounts.list()] == [AccountStatus.ACTIVE]


def test_bulk_update_status_accepts_plain_status_string(accounts):
    created = accounts.create(_draft("1000", "Cash")).data

    assert accounts.bulk_update_status([created.id], "inactive").ok
    assert accounts.list()[0].status is AccountStatus.INACTIVE


def test_bulk_delete_removes_all(accounts, notifier):
    ids = [accounts.create(_draft(f"20{i}", f"Acc {i}")).data.id for i in range(2)]

    result = accounts.bulk_delete(ids)

    assert result.ok
    assert notifier.last.title == "2 account(s) deleted successfully"
    assert accounts.list() == []


def test_unknown_parent_is_rejected(accounts, notifier):
    result = accounts.create(_draft("1000", "Orphan", parent_id="nope"))

    assert not result.ok
    assert result.error == "Parent account nope not found"
    assert accounts.list() == []


def test_parent_cycle_is_rejected(accounts):
    root = accounts.create(_draft("1000", "Assets")).data
    child = accounts.create(_draft("1100", "Current assets", parent_id=root.id)).data
    grandchild = accounts.create(_draft("1110", "Cash", parent_id=child.id)).data

    own = accounts.update(root.id, AccountDraft(parent_id=root.id))
    loop = accounts.update(root.id, AccountDraft(parent_id=grandchild.id))
    fine = accounts.update(grandchild.id, AccountDraft(parent_id=root.id))

    assert not own.ok
    assert not loop.ok
    assert "cycle" in loop.error
    assert fine.ok
    assert fine.data.parent_id == root.id


def test_clearing_parent_with_empty_string(accounts):
    root = accounts.create(_draft("1000", "Assets")).data
    child = accounts.create(_draft("1100", "Cash", parent_id=root.id)).data

    result = accounts.update(child.id, AccountDraft(parent_id=""))

    assert result.ok
    assert result.data.parent_id is None


def test_read_failure_surfaces_backend_error(accounts, engine):
    Base.metadata.drop_all(engine)

    with pytest.raises(BackendFailure):
        accounts.list()
