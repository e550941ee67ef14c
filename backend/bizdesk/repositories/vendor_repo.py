"""Vendor repository."""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from bizdesk.models import Vendor as VendorRow
from bizdesk.repositories.crud import fetch_all
from bizdesk.schemas.vendor import Vendor, VendorDraft, VendorStatus

_OPTIONAL_FIELDS = ("email", "phone", "address", "city", "country", "tax_id", "payment_terms")


def to_vendor(row: VendorRow) -> Vendor:
    return Vendor(
        id=row.id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        address=row.address,
        city=row.city,
        country=row.country,
        tax_id=row.tax_id,
        payment_terms=row.payment_terms,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def list_vendors(db: Session) -> list[Vendor]:
    return [to_vendor(r) for r in fetch_all(db, VendorRow, VendorRow.name)]


def vendor_create_values(draft: VendorDraft) -> dict[str, Any]:
    values: dict[str, Any] = {"name": draft.name, "status": draft.status or VendorStatus.ACTIVE}
    for field in _OPTIONAL_FIELDS:
        # Empty strings are stored as NULL
        values[field] = getattr(draft, field) or None
    return values


def vendor_update_values(draft: VendorDraft) -> dict[str, Any]:
    values = draft.model_dump(exclude_unset=True)
    for field in _OPTIONAL_FIELDS:
        if field in values:
            values[field] = values[field] or None
    return values
