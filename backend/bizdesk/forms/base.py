"""
Shared dialog behaviour: edit vs create mode, field lookup with defaults,
trimming, numeric coercion and enum defaulting.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from bizdesk.core.notifications import Notifier

E = TypeVar("E", bound=BaseModel)
D = TypeVar("D", bound=BaseModel)
X = TypeVar("X", bound=Enum)

FormData = Mapping[str, Any]


class FormDialog(Generic[E, D]):
    entity_label = "record"
    required_fields: tuple[str, ...] = ()
    field_defaults: dict[str, Any] = {}

    def __init__(self, entity: Optional[E], on_save: Callable[[D], None], notifier: Notifier) -> None:
        self.entity = entity
        self._on_save = on_save
        self._notifier = notifier
        self.is_open = True

    @property
    def is_edit(self) -> bool:
        return self.entity is not None

    @property
    def title(self) -> str:
        label = self.entity_label.title()
        return f"Edit {label}" if self.is_edit else f"Add New {label}"

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    # -- field shaping -------------------------------------------------------

    def _raw(self, form: FormData, name: str) -> Any:
        """Submitted value, else the edited entity's value, else the field default."""
        if name in form:
            return form[name]
        if self.entity is not None and hasattr(self.entity, name):
            return getattr(self.entity, name)
        return self.field_defaults.get(name)

    def _text(self, form: FormData, name: str) -> Optional[str]:
        value = self._raw(form, name)
        if value is None:
            return None
        if isinstance(value, Enum):
            value = value.value
        text = str(value).strip()
        return text or None

    def _number(self, form: FormData, name: str, default: float = 0.0) -> float:
        text = self._text(form, name)
        if text is None:
            return default
        try:
            return float(text)
        except ValueError:
            return default

    def _choice(self, form: FormData, name: str, enum_cls: type[X], default: X) -> X:
        text = self._text(form, name)
        try:
            return enum_cls(text) if text is not None else default
        except ValueError:
            return default

    # -- submit --------------------------------------------------------------

    def _build_draft(self, form: FormData) -> D:
        raise NotImplementedError

    def submit(self, form: FormData) -> Optional[D]:
        """Shape the form into a draft, hand it to on_save and close. None when rejected."""
        missing = [name for name in self.required_fields if self._text(form, name) is None]
        if missing:
            self._notifier.error("Please fill in all required fields", ", ".join(missing))
            return None
        try:
            draft = self._build_draft(form)
        except ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
            self._notifier.error(f"Invalid {self.entity_label} details", fields or None)
            return None
        if draft is None:
            return None
        self._on_save(draft)
        self.close()
        return draft
