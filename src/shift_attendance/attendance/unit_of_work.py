from __future__ import annotations

from typing import Protocol

from ..employees.repository import EmployeeRepository
from .repository import AttendanceRepository


class UnitOfWork(Protocol):
    """One transaction spanning the attendance store and the employee rows.

    Used as a context manager: commits when the block exits normally and rolls
    back when it raises.
    """

    employees: EmployeeRepository
    attendance: AttendanceRepository

    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    def __exit__(self, exc_type, exc, tb) -> None:
        raise NotImplementedError
