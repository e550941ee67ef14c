"""Vendors."""
from __future__ import annotations

from sqlalchemy.orm import Session

from bizdesk.models import Vendor as VendorRow
from bizdesk.repositories.vendor_repo import (
    list_vendors,
    to_vendor,
    vendor_create_values,
    vendor_update_values,
)
from bizdesk.schemas.vendor import Vendor, VendorStatus
from bizdesk.services.base import CrudService


class VendorService(CrudService):
    query_key = ("vendors",)
    label = "vendor"
    plural = "vendors"
    model = VendorRow
    status_choices = VendorStatus

    to_domain = staticmethod(to_vendor)
    create_values = staticmethod(vendor_create_values)
    update_values = staticmethod(vendor_update_values)

    def _fetch(self, db: Session) -> list[Vendor]:
        return list_vendors(db)
