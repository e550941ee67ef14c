"""Vendors."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from bizdesk.context import AppContext
from bizdesk.routers.common import IdsBody, read_collection, require_session, run_mutation
from bizdesk.schemas.vendor import VendorDraft

router = APIRouter(prefix="/vendors", tags=["vendors"])


@router.get("")
def list_vendors(ctx: AppContext = Depends(require_session)):
    return read_collection(ctx.vendors)


@router.post("")
def create_vendor(body: VendorDraft, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.vendors.create, body)


@router.patch("/{vendor_id}")
def update_vendor(vendor_id: str, body: VendorDraft, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.vendors.update, vendor_id, body)


@router.delete("/{vendor_id}")
def delete_vendor(vendor_id: str, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.vendors.delete, vendor_id)


@router.post("/bulk-delete")
def bulk_delete_vendors(body: IdsBody, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.vendors.bulk_delete, body.ids)
