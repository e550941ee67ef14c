"""Chart of accounts."""
from __future__ import annotations

from sqlalchemy.orm import Session

from bizdesk.models import Account as AccountRow
from bizdesk.repositories.account_repo import (
    account_create_values,
    account_update_values,
    check_parent,
    list_accounts,
    to_account,
)
from bizdesk.schemas.account import Account, AccountDraft, AccountStatus
from bizdesk.services.base import CrudService


class AccountService(CrudService):
    query_key = ("accounts",)
    label = "account"
    plural = "accounts"
    model = AccountRow
    status_choices = AccountStatus

    to_domain = staticmethod(to_account)
    create_values = staticmethod(account_create_values)
    update_values = staticmethod(account_update_values)

    def _fetch(self, db: Session) -> list[Account]:
        return list_accounts(db)

    def _before_create(self, db: Session, draft: AccountDraft) -> None:
        check_parent(db, None, draft.parent_id)

    def _before_update(self, db: Session, row_id: str, draft: AccountDraft) -> None:
        if "parent_id" in draft.model_fields_set:
            check_parent(db, row_id, draft.parent_id)
