"""Account repository: ordered listing, row mapping and parent checks."""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.orm import Session

from bizdesk.core.errors import InvalidReferenceError
from bizdesk.models import Account as AccountRow
from bizdesk.repositories.crud import fetch_all
from bizdesk.schemas.account import Account, AccountDraft, AccountStatus


def to_account(row: AccountRow) -> Account:
    return Account(
        id=row.id,
        code=row.code,
        name=row.name,
        type=row.type,
        parent_id=row.parent_id,
        balance=float(row.balance or 0),
        description=row.description,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def list_accounts(db: Session) -> list[Account]:
    return [to_account(r) for r in fetch_all(db, AccountRow, AccountRow.code)]


def account_create_values(draft: AccountDraft) -> dict[str, Any]:
    return {
        "code": draft.code,
        "name": draft.name,
        "type": draft.type,
        "parent_id": draft.parent_id or None,
        "balance": draft.balance or 0,
        "description": draft.description,
        "status": draft.status or AccountStatus.ACTIVE,
    }


def account_update_values(draft: AccountDraft) -> dict[str, Any]:
    values = draft.model_dump(exclude_unset=True)
    if "parent_id" in values and not values["parent_id"]:
        values["parent_id"] = None
    return values


def check_parent(db: Session, account_id: Optional[str], parent_id: Optional[str]) -> None:
    """
    Parent must exist and must not have account_id among its ancestors.
    account_id is None on create (a new row cannot close a cycle).
    """
    if not parent_id:
        return
    if account_id is not None and parent_id == account_id:
        raise InvalidReferenceError("An account cannot be its own parent")
    seen: set[str] = set()
    current: Optional[str] = parent_id
    while current is not None:
        if current in seen:
            # Pre-existing loop above us; stop walking
            break
        seen.add(current)
        row = db.get(AccountRow, current)
        if row is None:
            if current == parent_id:
                raise InvalidReferenceError(f"Parent account {parent_id} not found")
            break
        if account_id is not None and row.parent_id == account_id:
            raise InvalidReferenceError("Parent account would create a cycle")
        current = row.parent_id
