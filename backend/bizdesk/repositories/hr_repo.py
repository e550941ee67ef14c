"""Department and employee repositories."""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from bizdesk.models import Department as DepartmentRow
from bizdesk.models import Employee as EmployeeRow
from bizdesk.repositories.crud import fetch_all
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


def to_department(row: DepartmentRow) -> Department:
    return Department(id=row.id, name=row.name, code=row.code, description=row.description)


def list_departments(db: Session) -> list[Department]:
    return [to_department(r) for r in fetch_all(db, DepartmentRow, DepartmentRow.code)]


def department_create_values(draft: DepartmentDraft) -> dict[str, Any]:
    return {
        "name": (draft.name or "").strip() or None,
        "code": (draft.code or "").strip().upper() or None,
        "description": draft.description or None,
    }


def department_update_values(draft: DepartmentDraft) -> dict[str, Any]:
    values = draft.model_dump(exclude_unset=True)
    if values.get("code"):
        values["code"] = values["code"].strip().upper()
    return values


def to_employee(row: EmployeeRow) -> Employee:
    return Employee(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone=row.phone,
        date_of_birth=row.date_of_birth,
        gender=row.gender,
        address=row.address,
        city=row.city,
        state=row.state,
        zip_code=row.zip_code,
        country=row.country,
        department_id=row.department_id,
        position=row.position,
        employment_type=row.employment_type,
        employment_status=row.employment_status,
        hire_date=row.hire_date,
        base_salary=float(row.base_salary or 0),
        currency=row.currency,
        payment_frequency=row.payment_frequency,
        notes=row.notes,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def list_employees(db: Session) -> list[Employee]:
    rows = fetch_all(db, EmployeeRow, EmployeeRow.last_name, EmployeeRow.first_name)
    return [to_employee(r) for r in rows]


def employee_create_values(draft: EmployeeDraft) -> dict[str, Any]:
    values = draft.model_dump()
    values["department_id"] = values["department_id"] or None
    values["gender"] = draft.gender or Gender.PREFER_NOT_TO_SAY
    values["employment_type"] = draft.employment_type or EmploymentType.FULL_TIME
    values["employment_status"] = draft.employment_status or EmploymentStatus.ACTIVE
    values["currency"] = draft.currency or Currency.MRU
    values["payment_frequency"] = draft.payment_frequency or PaymentFrequency.MONTHLY
    values["base_salary"] = draft.base_salary or 0
    return values


def employee_update_values(draft: EmployeeDraft) -> dict[str, Any]:
    values = draft.model_dump(exclude_unset=True)
    if "department_id" in values:
        values["department_id"] = values["department_id"] or None
    return values
