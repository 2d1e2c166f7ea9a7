from __future__ import annotations

import re
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..auth.identity import require_admin
from ..common.validators import require_enum, require_min_length, require_non_empty, require_non_negative_int
from ..core import constants
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..shifts.repository import ShiftRepository
from .model import Employee
from .repository import EmployeeRepository

logger = get_logger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PROFILE_FIELDS = {"full_name", "position", "department", "phone", "salary", "role"}


def next_employee_code(last_code: Optional[str]) -> str:
    """EMP01, EMP02, ... following the highest code issued so far."""
    prefix = constants.EMPLOYEE_CODE_PREFIX
    last_number = 0
    if last_code and last_code.startswith(prefix):
        try:
            last_number = int(last_code[len(prefix):])
        except ValueError:
            last_number = 0
    return f"{prefix}{last_number + 1:02d}"


def _parse_salary(value: Any) -> Decimal:
    try:
        salary = Decimal(str(value if value not in (None, "") else 0))
    except InvalidOperation:
        raise ValidationError("Salary must be a number")
    if salary < 0:
        raise ValidationError("Salary must be >= 0")
    return salary


class EmployeeService:
    """Use case: manage the employee directory and leave balances (admin)."""

    def __init__(self, employees: EmployeeRepository, shifts: ShiftRepository):
        self._employees = employees
        self._shifts = shifts

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def list_employees(self, *, current_role: Role) -> Sequence[Employee]:
        require_admin(current_role)
        return [e for e in self._employees.list_all() if e.role == Role.EMPLOYEE]

    def create_employee(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: str,
        password: str,
        role: Any = Role.EMPLOYEE,
        shift_id: Optional[int] = None,
        position: str = "",
        department: str = "",
        phone: str = "",
        salary: Any = 0,
        annual_leaves: Any = None,
        casual_leaves: Any = None,
    ) -> Employee:
        require_admin(current_role)
        return self._create(
            full_name=full_name,
            email=email,
            password=password,
            role=require_enum(Role, role, "Role"),
            shift_id=shift_id,
            position=position,
            department=department,
            phone=phone,
            salary=salary,
            annual_leaves=annual_leaves,
            casual_leaves=casual_leaves,
        )

    def signup(self, *, full_name: str, email: str, password: str, **profile: Any) -> Employee:
        """Self-service registration; admin accounts are those on an admin@ address.

        Every signup starts with the standard leave balance, whatever the role.
        """
        role = Role.ADMIN if (email or "").strip().lower().startswith("admin@") else Role.EMPLOYEE
        profile.setdefault("annual_leaves", constants.DEFAULT_LEAVE_BALANCE)
        profile.setdefault("casual_leaves", constants.DEFAULT_LEAVE_BALANCE)
        return self._create(full_name=full_name, email=email, password=password, role=role, **profile)

    def _create(
        self,
        *,
        full_name: str,
        email: str,
        password: str,
        role: Role,
        shift_id: Optional[int] = None,
        position: str = "",
        department: str = "",
        phone: str = "",
        salary: Any = 0,
        annual_leaves: Any = None,
        casual_leaves: Any = None,
    ) -> Employee:
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        if not _EMAIL_RE.match(email):
            raise ValidationError("Email is not valid")
        require_min_length(password, "Password", 6)

        if self._employees.get_by_email(email):
            raise ValidationError("User already exists")
        if shift_id is not None:
            self._require_shift(shift_id)

        seed = constants.DEFAULT_LEAVE_BALANCE if role == Role.EMPLOYEE else 0
        draft = Employee(
            employee_id=0,
            employee_code=next_employee_code(self._employees.last_employee_code()) if role == Role.EMPLOYEE else "",
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            shift_id=int(shift_id) if shift_id is not None else None,
            position=(position or "").strip(),
            department=(department or "").strip(),
            phone=(phone or "").strip(),
            salary=_parse_salary(salary),
            annual_leaves=seed if annual_leaves is None else require_non_negative_int(annual_leaves, "Annual leaves"),
            casual_leaves=seed if casual_leaves is None else require_non_negative_int(casual_leaves, "Casual leaves"),
        )
        employee_id = self._employees.create(draft)
        logger.info("Employee created: %s (id=%s, role=%s)", email, employee_id, role.value)
        return replace(draft, employee_id=employee_id)

    def update_employee(self, *, current_role: Role, employee_id: int, changes: dict) -> Employee:
        require_admin(current_role)
        employee = self.get(employee_id)

        unknown = set(changes) - _PROFILE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown employee fields: {', '.join(sorted(unknown))}")

        fields: dict[str, Any] = {}
        if "full_name" in changes:
            fields["full_name"] = require_non_empty(changes["full_name"], "Full name")
        for key in ("position", "department", "phone"):
            if key in changes:
                fields[key] = (changes[key] or "").strip()
        if "salary" in changes:
            fields["salary"] = _parse_salary(changes["salary"])
        if "role" in changes:
            fields["role"] = require_enum(Role, changes["role"], "Role")

        updated = replace(employee, **fields)
        self._employees.save(updated)
        return updated

    def set_leave_balances(self, *, current_role: Role, employee_id: int, annual_leaves: Any, casual_leaves: Any) -> Employee:
        require_admin(current_role)
        employee = self.get(employee_id)
        updated = replace(
            employee,
            annual_leaves=require_non_negative_int(annual_leaves, "Annual leaves"),
            casual_leaves=require_non_negative_int(casual_leaves, "Casual leaves"),
        )
        self._employees.save(updated)
        logger.info(
            "Leave balances set for employee %s: annual=%s casual=%s",
            employee_id,
            updated.annual_leaves,
            updated.casual_leaves,
        )
        return updated

    def assign_shift(self, *, current_role: Role, employee_id: int, shift_id: Optional[int]) -> Employee:
        require_admin(current_role)
        employee = self.get(employee_id)
        if shift_id is not None:
            self._require_shift(shift_id)
        updated = replace(employee, shift_id=int(shift_id) if shift_id is not None else None)
        self._employees.save(updated)
        return updated

    def delete_employee(self, *, current_role: Role, acting_employee_id: int, employee_id: int) -> None:
        require_admin(current_role)
        if int(acting_employee_id) == int(employee_id):
            raise ValidationError("You cannot delete your own account")
        if not self._employees.delete_by_id(int(employee_id)):
            raise NotFoundError(f"Employee {employee_id} not found")
        logger.info("Employee deleted: id=%s", employee_id)

    def _require_shift(self, shift_id: Any) -> None:
        try:
            sid = int(shift_id)
        except (TypeError, ValueError):
            raise ValidationError("Shift id must be an integer")
        if not self._shifts.get_by_id(sid):
            raise NotFoundError(f"Shift policy {shift_id} not found")
