from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, employee_code, full_name, email, password_hash, role, shift_id,
    position, department, phone, salary, annual_leaves, casual_leaves,
    current_check_in, current_check_out, attendance_status
"""


def _to_employee(row: dict) -> Employee:
    status = row.get("attendance_status")
    return Employee(
        employee_id=int(row["employee_id"]),
        employee_code=row.get("employee_code") or "",
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        shift_id=row.get("shift_id"),
        position=row.get("position") or "",
        department=row.get("department") or "",
        phone=row.get("phone") or "",
        salary=Decimal(str(row.get("salary") or 0)),
        annual_leaves=int(row.get("annual_leaves") or 0),
        casual_leaves=int(row.get("casual_leaves") or 0),
        current_check_in=row.get("current_check_in"),
        current_check_out=row.get("current_check_out"),
        attendance_status=AttendanceStatus(status) if status else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_for_update(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY full_name")
            return [_to_employee(r) for r in fetchall(cur)]

    def last_employee_code(self) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_code FROM employees
                WHERE employee_code REGEXP '^EMP[0-9]+$'
                ORDER BY CAST(SUBSTRING(employee_code, 4) AS UNSIGNED) DESC
                LIMIT 1
                """
            )
            row = fetchone(cur)
            return row["employee_code"] if row else None

    def create(self, employee: Employee) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(employee_code, full_name, email, password_hash, role, shift_id,
                                          position, department, phone, salary, annual_leaves, casual_leaves)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee.employee_code,
                        employee.full_name,
                        employee.email.lower(),
                        employee.password_hash,
                        employee.role.value,
                        employee.shift_id,
                        employee.position,
                        employee.department,
                        employee.phone,
                        employee.salary,
                        int(employee.annual_leaves),
                        int(employee.casual_leaves),
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ValidationError("User already exists") from e
            raise

    def save(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET employee_code=%s, full_name=%s, password_hash=%s, role=%s, shift_id=%s,
                    position=%s, department=%s, phone=%s, salary=%s,
                    annual_leaves=%s, casual_leaves=%s,
                    current_check_in=%s, current_check_out=%s, attendance_status=%s
                WHERE employee_id=%s
                """,
                (
                    employee.employee_code,
                    employee.full_name,
                    employee.password_hash,
                    employee.role.value,
                    employee.shift_id,
                    employee.position,
                    employee.department,
                    employee.phone,
                    employee.salary,
                    int(employee.annual_leaves),
                    int(employee.casual_leaves),
                    employee.current_check_in,
                    employee.current_check_out,
                    employee.attendance_status.value if employee.attendance_status else None,
                    int(employee.employee_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
