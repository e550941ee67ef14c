from __future__ import annotations

import asyncio
from datetime import date

from bizdesk.schemas.hr import DepartmentDraft, EmployeeDraft, EmploymentStatus, PaymentFrequency
from bizdesk.schemas.vendor import VendorDraft, VendorStatus


def test_vendor_blank_optionals_stored_as_null(vendors, notifier):
    result = vendors.create(VendorDraft(name="Acme Supplies", email="", phone="555-1000"))

    assert result.ok
    vendor = vendors.list()[0]
    assert vendor.email is None
    assert vendor.phone == "555-1000"
    assert vendor.status is VendorStatus.ACTIVE
    assert notifier.last.title == "Vendor created successfully"


def test_vendors_ordered_by_name(vendors):
    for name in ("Zeta", "Alpha", "Mid"):
        vendors.create(VendorDraft(name=name))

    assert [v.name for v in vendors.list()] == ["Alpha", "Mid", "Zeta"]


def test_vendor_refetch_drops_cache(vendors, cache):
    vendors.list()
    vendors.refetch()

    assert not cache.contains(("vendors",))


def test_vendor_without_name_fails(vendors, notifier):
    result = vendors.create(VendorDraft(email="x@example.com"))

    assert not result.ok
    assert notifier.last.title == "Failed to create vendor"


def test_department_code_is_upper_cased(departments):
    result = departments.create(DepartmentDraft(name=" Finance ", code="fin"))

    assert result.ok
    assert result.data.code == "FIN"
    assert result.data.name == "Finance"


def test_department_async_creator_returns_none_on_failure(departments):
    creator = departments.as_async_creator()

    first = asyncio.run(creator(DepartmentDraft(name="Ops", code="OPS")))
    duplicate = asyncio.run(creator(DepartmentDraft(name="Ops again", code="ops")))

    assert first is not None and first.code == "OPS"
    assert duplicate is None
    assert [d.code for d in departments.list()] == ["OPS"]


def _employee(**extra) -> EmployeeDraft:
    values = dict(
        first_name="Aicha",
        last_name="Sow",
        email="aicha@example.com",
        hire_date=date(2024, 3, 1),
        base_salary=45000,
    )
    values.update(extra)
    return EmployeeDraft(**values)


def test_employee_create_applies_defaults(employees, departments):
    dept = departments.create(DepartmentDraft(name="HR", code="HR")).data

    result = employees.create(_employee(department_id=dept.id))

    assert result.ok
    emp = employees.list()[0]
    assert emp.department_id == dept.id
    assert emp.employment_status is EmploymentStatus.ACTIVE
    assert emp.payment_frequency is PaymentFrequency.MONTHLY
    assert emp.currency.value == "MRU"
    assert emp.hire_date == date(2024, 3, 1)
    assert emp.full_name == "Aicha Sow"


def test_employee_bulk_status_uses_employment_status(employees, notifier):
    ids = [
        employees.create(_employee(email=f"e{i}@example.com", last_name=f"L{i}")).data.id
        for i in range(2)
    ]

    result = employees.bulk_update_status(ids, EmploymentStatus.ON_LEAVE)

    assert result.ok
    assert notifier.last.title == "2 employee(s) updated successfully"
    assert {e.employment_status for e in employees.list()} == {EmploymentStatus.ON_LEAVE}


def test_employee_update_and_delete(employees):
    emp = employees.create(_employee()).data

    updated = employees.update(emp.id, EmployeeDraft(position="Analyst"))
    deleted = employees.delete(emp.id)

    assert updated.ok and updated.data.position == "Analyst"
    assert updated.data.first_name == "Aicha"
    assert deleted.ok
    assert employees.list() == []


def test_vendor_delete_excludes_record_from_next_read(vendors, cache):
    keep = vendors.create(VendorDraft(name="Keep")).data
    drop = vendors.create(VendorDraft(name="Drop")).data
    assert len(vendors.list()) == 2

    assert vendors.delete(drop.id).ok

    assert not cache.contains(("vendors",))
    assert [v.id for v in vendors.list()] == [keep.id]


def test_vendor_bulk_delete_excludes_records_from_next_read(vendors, notifier):
    ids = [vendors.create(VendorDraft(name=n)).data.id for n in ("A", "B", "C")]
    vendors.list()

    result = vendors.bulk_delete(ids[:2])

    assert result.ok
    assert notifier.last.title == "2 vendor(s) deleted successfully"
    assert [v.name for v in vendors.list()] == ["C"]


def test_failed_vendor_mutation_keeps_cached_read(vendors, cache, notifier):
    vendors.create(VendorDraft(name="Acme"))
    before = vendors.list()

    result = vendors.update("missing", VendorDraft(name="Ghost"))

    assert not result.ok
    assert notifier.last.title == "Failed to update vendor"
    assert cache.get(("vendors",)) is before


def test_vendor_bulk_status_rejects_unknown_status(vendors, cache):
    vendor = vendors.create(VendorDraft(name="Acme")).data
    before = vendors.list()

    result = vendors.bulk_update_status([vendor.id], "blacklisted")

    assert not result.ok
    assert cache.get(("vendors",)) is before


def test_department_create_invalidates_list(departments, cache):
    departments.create(DepartmentDraft(name="Finance", code="FIN"))
    assert [d.code for d in departments.list()] == ["FIN"]

    result = departments.create(DepartmentDraft(name="Sales", code="SAL"))

    assert result.ok
    assert not cache.contains(("departments",))
    assert sorted(d.code for d in departments.list()) == ["FIN", "SAL"]


def test_failed_department_create_keeps_cached_read(departments, cache, notifier):
    departments.create(DepartmentDraft(name="Finance", code="FIN"))
    before = departments.list()

    result = departments.create(DepartmentDraft(name="Finance 2", code="fin"))

    assert not result.ok
    assert notifier.last.title == "Failed to create department"
    assert cache.get(("departments",)) is before


def test_departments_have_no_bulk_status(departments, notifier):
    dept = departments.create(DepartmentDraft(name="Finance", code="FIN")).data

    result = departments.bulk_update_status([dept.id], "active")

    assert not result.ok
    assert notifier.last.title == "Failed to update departments"


def test_failed_employee_mutation_keeps_cached_read(employees, cache, notifier):
    employees.create(_employee())
    before = employees.list()

    result = employees.update("missing", EmployeeDraft(position="Ghost"))
    bad_status = employees.bulk_update_status([before[0].id], "retired")

    assert not result.ok
    assert not bad_status.ok
    assert notifier.last.title == "Failed to update employees"
    assert cache.get(("employees",)) is before
    employees.refetch()
    assert [e.employment_status for e in employees.list()] == [EmploymentStatus.ACTIVE]


def test_employee_create_then_list_includes_record(employees):
    assert employees.list() == []

    created = employees.create(_employee()).data

    assert [e.id for e in employees.list()] == [created.id]
