"""Departments and employees."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from bizdesk.context import AppContext
from bizdesk.routers.common import IdsBody, read_collection, require_session, run_mutation
from bizdesk.schemas.hr import DepartmentDraft, EmployeeDraft, EmploymentStatus

router = APIRouter(tags=["hr"])


class EmployeeStatusBody(IdsBody):
    status: EmploymentStatus


@router.get("/departments")
def list_departments(ctx: AppContext = Depends(require_session)):
    return read_collection(ctx.departments)


@router.post("/departments")
def create_department(body: DepartmentDraft, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.departments.create, body)


@router.get("/employees")
def list_employees(ctx: AppContext = Depends(require_session)):
    return read_collection(ctx.employees)


@router.post("/employees")
def create_employee(body: EmployeeDraft, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.employees.create, body)


@router.patch("/employees/{employee_id}")
def update_employee(employee_id: str, body: EmployeeDraft, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.employees.update, employee_id, body)


@router.delete("/employees/{employee_id}")
def delete_employee(employee_id: str, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.employees.delete, employee_id)


@router.post("/employees/bulk-status")
def bulk_update_employee_status(body: EmployeeStatusBody, ctx: AppContext = Depends(require_session)):
    return run_mutation(ctx, ctx.employees.bulk_update_status, body.ids, body.status)
