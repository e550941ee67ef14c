"""Chart of accounts."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from bizdesk.context import AppContext
from bizdesk.routers.common import IdsBody, read_collection, require_session, run_mutation
from bizdesk.schemas.account import AccountDraft, AccountStatus

router = APIRouter(prefix="/accounts", tags=["accounts"])


class BulkStatusBody(IdsBody):
    status: AccountStatus


@router.get("")
def list_accounts(ctx: AppContext = Depends(require_session)):
    return read_collection(ctx.accounts)


@router.post("")
def create_account(body: AccountDraft, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.accounts.create, body)


@router.patch("/{account_id}")
def update_account(account_id: str, body: AccountDraft, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.accounts.update, account_id, body)


@router.delete("/{account_id}")
def delete_account(account_id: str, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.accounts.delete, account_id)


@router.post("/bulk-delete")
def bulk_delete_accounts(body: IdsBody, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.accounts.bulk_delete, body.ids)


@router.post("/bulk-status")
def bulk_update_status(body: BulkStatusBody, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.accounts.bulk_update_status, body.ids, body.status)
