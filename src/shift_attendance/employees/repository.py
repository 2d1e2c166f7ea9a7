from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_for_update(self, employee_id: int) -> Optional[Employee]:
        """Like get_by_id, but locks the row until the surrounding unit of work ends."""

        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def last_employee_code(self) -> Optional[str]:
        raise NotImplementedError

    def create(self, employee: Employee) -> int:
        """Insert and return the new id (employee_id on the argument is ignored)."""

        raise NotImplementedError

    def save(self, employee: Employee) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
