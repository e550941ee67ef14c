"""Departments and employees."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from sqlalchemy.orm import Session

from bizdesk.models import Department as DepartmentRow
from bizdesk.models import Employee as EmployeeRow
from bizdesk.repositories.hr_repo import (
    department_create_values,
    department_update_values,
    employee_create_values,
    employee_update_values,
    list_departments,
    list_employees,
    to_department,
    to_employee,
)
from bizdesk.schemas.hr import Department, DepartmentDraft, Employee, EmploymentStatus
from bizdesk.services.base import CrudService

DepartmentCreator = Callable[[DepartmentDraft], Awaitable[Optional[Department]]]


class DepartmentService(CrudService):
    query_key = ("departments",)
    label = "department"
    plural = "departments"
    model = DepartmentRow

    to_domain = staticmethod(to_department)
    create_values = staticmethod(department_create_values)
    update_values = staticmethod(department_update_values)

    def _fetch(self, db: Session) -> list[Department]:
        return list_departments(db)

    def as_async_creator(self) -> DepartmentCreator:
        """Adapter for the employee dialog; resolves to None when creation failed."""

        async def create(draft: DepartmentDraft) -> Optional[Department]:
            result = await asyncio.to_thread(self.create, draft)
            return result.data if result.ok else None

        return create


class EmployeeService(CrudService):
    query_key = ("employees",)
    label = "employee"
    plural = "employees"
    model = EmployeeRow
    status_column = "employment_status"
    status_choices = EmploymentStatus

    to_domain = staticmethod(to_employee)
    create_values = staticmethod(employee_create_values)
    update_values = staticmethod(employee_update_values)

    def _fetch(self, db: Session) -> list[Employee]:
        return list_employees(db)
