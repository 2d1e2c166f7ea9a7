from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    employee_id: int
    full_name: str
    role: Role
    shift_info: str


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository, shifts: ShiftRepository):
        self._employees = employees
        self._shifts = shifts

    def get_shift_info(self, shift_id: Optional[int]) -> str:
        shift = self._shifts.get_by_id(shift_id) if shift_id else None
        if not shift:
            return "No shift assigned"
        return f"{shift.name} ({shift.entry_time:%H:%M} - {shift.exit_time:%H:%M})"

    def authenticate(self, email: str, password: str) -> SessionUser:
        employee = self._employees.get_by_email((email or "").strip().lower())
        if not employee:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            role=employee.role,
            shift_info=self.get_shift_info(employee.shift_id),
        )
