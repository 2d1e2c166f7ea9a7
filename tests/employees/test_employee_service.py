from __future__ import annotations

import pytest

from shift_attendance.core.enums import Role
from shift_attendance.core.exceptions import AuthenticationError, NotFoundError, UnauthorizedError, ValidationError
from shift_attendance.employees.service import next_employee_code


@pytest.mark.parametrize(
    "last, expected",
    [(None, "EMP01"), ("EMP01", "EMP02"), ("EMP09", "EMP10"), ("EMP99", "EMP100"), ("XYZ", "EMP01")],
)
def test_next_employee_code(last, expected):
    assert next_employee_code(last) == expected


def test_create_employee_seeds_balances_and_code(world):
    svc = world.container.employee_service

    emp = svc.create_employee(
        current_role=Role.ADMIN,
        full_name="Sara Khan",
        email="Sara@Company.com",
        password="secret123",
        department="Finance",
        salary="85000.50",
    )

    assert emp.employee_code == "EMP01"
    assert emp.email == "sara@company.com"
    assert (emp.annual_leaves, emp.casual_leaves) == (12, 12)
    assert str(emp.salary) == "85000.50"
    assert emp.password_hash != "secret123"


def test_create_employee_validation(world):
    svc = world.container.employee_service

    with pytest.raises(ValidationError):
        svc.create_employee(current_role=Role.ADMIN, full_name="A", email="not-an-email", password="secret123")
    with pytest.raises(ValidationError):
        svc.create_employee(current_role=Role.ADMIN, full_name="A", email="a@company.com", password="123")
    with pytest.raises(ValidationError):
        svc.create_employee(current_role=Role.ADMIN, full_name="A", email="a@company.com", password="secret123", salary=-1)
    with pytest.raises(NotFoundError):
        svc.create_employee(current_role=Role.ADMIN, full_name="A", email="a@company.com", password="secret123", shift_id=42)


def test_duplicate_email_is_rejected(world):
    world.add_employee(email="dup@company.com")

    with pytest.raises(ValidationError):
        world.container.employee_service.create_employee(
            current_role=Role.ADMIN, full_name="B", email="dup@company.com", password="secret123"
        )


def test_signup_makes_admin_for_admin_address(world):
    svc = world.container.employee_service

    admin = svc.signup(full_name="Boss", email="admin@company.com", password="secret123")
    staff = svc.signup(full_name="Staff", email="staff@company.com", password="secret123")

    assert admin.role == Role.ADMIN
    assert (admin.annual_leaves, admin.casual_leaves) == (12, 12)
    assert staff.role == Role.EMPLOYEE
    assert staff.employee_code.startswith("EMP")


def test_list_employees_excludes_admins(world):
    world.add_employee("Admin", role=Role.ADMIN)
    staff = world.add_employee("Staff")

    listed = world.container.employee_service.list_employees(current_role=Role.ADMIN)

    assert [e.employee_id for e in listed] == [staff.employee_id]


def test_set_leave_balances(world):
    emp = world.add_employee()

    updated = world.container.employee_service.set_leave_balances(
        current_role=Role.ADMIN, employee_id=emp.employee_id, annual_leaves=20, casual_leaves="8"
    )

    assert (updated.annual_leaves, updated.casual_leaves) == (20, 8)
    with pytest.raises(ValidationError):
        world.container.employee_service.set_leave_balances(
            current_role=Role.ADMIN, employee_id=emp.employee_id, annual_leaves=-1, casual_leaves=0
        )


def test_assign_shift(world):
    emp = world.add_employee()
    shift = world.add_shift()
    svc = world.container.employee_service

    assert svc.assign_shift(current_role=Role.ADMIN, employee_id=emp.employee_id, shift_id=shift.shift_id).shift_id == shift.shift_id
    assert svc.assign_shift(current_role=Role.ADMIN, employee_id=emp.employee_id, shift_id=None).shift_id is None
    with pytest.raises(UnauthorizedError):
        svc.assign_shift(current_role=Role.EMPLOYEE, employee_id=emp.employee_id, shift_id=shift.shift_id)


def test_update_employee_profile(world):
    emp = world.add_employee()

    updated = world.container.employee_service.update_employee(
        current_role=Role.ADMIN, employee_id=emp.employee_id, changes={"position": " Lead ", "salary": 1000}
    )

    assert updated.position == "Lead"
    with pytest.raises(ValidationError):
        world.container.employee_service.update_employee(
            current_role=Role.ADMIN, employee_id=emp.employee_id, changes={"annual_leaves": 99}
        )


def test_admin_cannot_delete_self(world):
    admin = world.add_employee("Admin", role=Role.ADMIN)
    staff = world.add_employee()
    svc = world.container.employee_service

    with pytest.raises(ValidationError):
        svc.delete_employee(current_role=Role.ADMIN, acting_employee_id=admin.employee_id, employee_id=admin.employee_id)

    svc.delete_employee(current_role=Role.ADMIN, acting_employee_id=admin.employee_id, employee_id=staff.employee_id)
    assert world.employees.get_by_id(staff.employee_id) is None


def test_authenticate(world):
    shift = world.add_shift()
    emp = world.add_employee(email="ali@company.com", shift_id=shift.shift_id)
    auth = world.container.auth_service

    user = auth.authenticate("ALI@company.com", "secret123")

    assert user.employee_id == emp.employee_id
    assert user.shift_info == "Day Shift (09:00 - 18:00)"
    with pytest.raises(AuthenticationError):
        auth.authenticate("ali@company.com", "wrong")
    with pytest.raises(AuthenticationError):
        auth.authenticate("nobody@company.com", "secret123")
