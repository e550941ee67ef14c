"""Account dialog."""
from __future__ import annotations

from typing import Callable, Iterable, Optional

from bizdesk.core.notifications import Notifier
from bizdesk.forms.base import FormData, FormDialog
from bizdesk.schemas.account import Account, AccountDraft, AccountStatus, AccountType

NO_PARENT = "none"


class AccountFormDialog(FormDialog[Account, AccountDraft]):
    entity_label = "account"
    required_fields = ("code", "name", "type")

    def __init__(
        self,
        account: Optional[Account],
        accounts: Iterable[Account],
        on_save: Callable[[AccountDraft], None],
        notifier: Notifier,
    ) -> None:
        super().__init__(account, on_save, notifier)
        self.accounts = list(accounts)

    @property
    def parent_choices(self) -> list[Account]:
        """Every account except the one being edited."""
        own_id = self.entity.id if self.entity else None
        return [a for a in self.accounts if a.id != own_id]

    def _build_draft(self, form: FormData) -> Optional[AccountDraft]:
        parent_id = self._text(form, "parent_id")
        if parent_id == NO_PARENT:
            parent_id = None
        if parent_id is not None and not any(a.id == parent_id for a in self.parent_choices):
            self._notifier.error("Invalid parent account", parent_id)
            return None
        return AccountDraft(
            code=self._text(form, "code"),
            name=self._text(form, "name"),
            type=self._choice(form, "type", AccountType, AccountType.ASSET),
            parent_id=parent_id,
            balance=self._number(form, "balance"),
            description=self._text(form, "description"),
            status=self._choice(form, "status", AccountStatus, AccountStatus.ACTIVE),
        )
