"""Vendor dialog; blank optional fields become None."""
from __future__ import annotations

from bizdesk.forms.base import FormData, FormDialog
from bizdesk.schemas.vendor import Vendor, VendorDraft, VendorStatus


class VendorFormDialog(FormDialog[Vendor, VendorDraft]):
    entity_label = "vendor"
    required_fields = ("name",)

    def _build_draft(self, form: FormData) -> VendorDraft:
        return VendorDraft(
            name=self._text(form, "name"),
            email=self._text(form, "email"),
            phone=self._text(form, "phone"),
            address=self._text(form, "address"),
            city=self._text(form, "city"),
            country=self._text(form, "country"),
            tax_id=self._text(form, "tax_id"),
            payment_terms=self._text(form, "payment_terms"),
            status=self._choice(form, "status", VendorStatus, VendorStatus.ACTIVE),
        )
