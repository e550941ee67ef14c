"""Employee dialog with inline department creation."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from bizdesk.core.notifications import Notifier
from bizdesk.forms.base import FormData, FormDialog
from bizdesk.schemas.hr import (
    Currency,
    Department,
    DepartmentDraft,
    Employee,
    EmployeeDraft,
    EmploymentStatus,
    EmploymentType,
    Gender,
    PaymentFrequency,
)
from bizdesk.services.hr_service import DepartmentCreator

logger = logging.getLogger(__name__)

CREATE_NEW_DEPARTMENT = "__create_new__"


class EmployeeFormDialog(FormDialog[Employee, EmployeeDraft]):
    entity_label = "employee"
    required_fields = (
        "first_name",
        "last_name",
        "email",
        "phone",
        "date_of_birth",
        "address",
        "city",
        "state",
        "zip_code",
        "country",
        "position",
        "hire_date",
        "base_salary",
    )
    field_defaults = {
        "gender": Gender.PREFER_NOT_TO_SAY,
        "country": "Mauritania",
        "employment_type": EmploymentType.FULL_TIME,
        "employment_status": EmploymentStatus.ACTIVE,
        "currency": Currency.MRU,
        "payment_frequency": PaymentFrequency.MONTHLY,
    }

    def __init__(
        self,
        employee: Optional[Employee],
        departments: Iterable[Department],
        on_save: Callable[[EmployeeDraft], None],
        notifier: Notifier,
        on_create_department: Optional[DepartmentCreator] = None,
    ) -> None:
        super().__init__(employee, on_save, notifier)
        self.departments = list(departments)
        self._on_create_department = on_create_department
        self.selected_department_id = (employee.department_id if employee else None) or ""
        self.show_new_department = False
        self.new_department_name = ""
        self.new_department_code = ""

    @property
    def can_create_department(self) -> bool:
        return self._on_create_department is not None

    def select_department(self, value: str) -> None:
        if value == CREATE_NEW_DEPARTMENT:
            if self.can_create_department:
                self.show_new_department = True
            return
        if value and not any(d.id == value for d in self.departments):
            self._notifier.error("Unknown department", value)
            return
        self.selected_department_id = value

    def cancel_new_department(self) -> None:
        self.show_new_department = False
        self.new_department_name = ""
        self.new_department_code = ""

    async def create_department(self) -> Optional[Department]:
        name = self.new_department_name.strip()
        code = self.new_department_code.strip()
        if not name or not code:
            self._notifier.error("Department name and code are required")
            return None
        if self._on_create_department is None:
            return None

        department = await self._on_create_department(DepartmentDraft(name=name, code=code.upper()))
        if department is None:
            # Creator already reported the failure; keep the inputs for another try
            return None
        self.departments.append(department)
        self.selected_department_id = department.id
        self.cancel_new_department()
        logger.debug("Adopted new department %s", department.id)
        return department

    def _build_draft(self, form: FormData) -> EmployeeDraft:
        return EmployeeDraft(
            first_name=self._text(form, "first_name"),
            last_name=self._text(form, "last_name"),
            email=self._text(form, "email"),
            phone=self._text(form, "phone"),
            date_of_birth=self._text(form, "date_of_birth"),
            gender=self._choice(form, "gender", Gender, Gender.PREFER_NOT_TO_SAY),
            address=self._text(form, "address"),
            city=self._text(form, "city"),
            state=self._text(form, "state"),
            zip_code=self._text(form, "zip_code"),
            country=self._text(form, "country"),
            department_id=self.selected_department_id or None,
            position=self._text(form, "position"),
            employment_type=self._choice(form, "employment_type", EmploymentType, EmploymentType.FULL_TIME),
            employment_status=self._choice(
                form, "employment_status", EmploymentStatus, EmploymentStatus.ACTIVE
            ),
            hire_date=self._text(form, "hire_date"),
            base_salary=self._number(form, "base_salary"),
            currency=self._choice(form, "currency", Currency, Currency.MRU),
            payment_frequency=self._choice(
                form, "payment_frequency", PaymentFrequency, PaymentFrequency.MONTHLY
            ),
            notes=self._text(form, "notes"),
        )
