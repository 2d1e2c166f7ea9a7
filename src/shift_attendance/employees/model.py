from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus, Role
from ..leaves.ledger import LeaveBalance


@dataclass(frozen=True)
class Employee:
    """Domain entity: a staff member (or admin) with leave balances.

    current_check_in/current_check_out/attendance_status mirror the latest
    attendance record and are only written alongside it.
    """

    employee_id: int
    employee_code: str
    full_name: str
    email: str
    password_hash: str
    role: Role
    shift_id: Optional[int] = None
    position: str = ""
    department: str = ""
    phone: str = ""
    salary: Decimal = Decimal("0")
    annual_leaves: int = 12
    casual_leaves: int = 12
    current_check_in: Optional[datetime] = None
    current_check_out: Optional[datetime] = None
    attendance_status: Optional[AttendanceStatus] = None

    @property
    def balance(self) -> LeaveBalance:
        return LeaveBalance(annual=self.annual_leaves, casual=self.casual_leaves)

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "employee_code": self.employee_code,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "shift_id": self.shift_id,
            "position": self.position,
            "department": self.department,
            "phone": self.phone,
            "salary": str(self.salary),
            "annual_leaves": self.annual_leaves,
            "casual_leaves": self.casual_leaves,
            "current_check_in": self.current_check_in.isoformat() if self.current_check_in else None,
            "current_check_out": self.current_check_out.isoformat() if self.current_check_out else None,
            "attendance_status": self.attendance_status.value if self.attendance_status else None,
        }
