from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from ..database.connection import BoundConnection, DatabaseConnection
from ..employees.mysql_employee_repository import MySQLEmployeeRepository
from .mysql_attendance_repository import MySQLAttendanceRepository
from .unit_of_work import UnitOfWork


class MySQLUnitOfWork(UnitOfWork):
    """One connection, one transaction, for a single attendance write."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._conn = None
        self.employees: Optional[MySQLEmployeeRepository] = None
        self.attendance: Optional[MySQLAttendanceRepository] = None

    def __enter__(self) -> "MySQLUnitOfWork":
        self._conn = self._conn_factory.connect()
        try:
            self._conn.start_transaction()
        except mysql.connector.Error as e:
            self._conn.close()
            raise PersistenceError(str(e)) from e

        bound = BoundConnection(self._conn)
        self.employees = MySQLEmployeeRepository(bound)
        self.attendance = MySQLAttendanceRepository(bound)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        conn, self._conn = self._conn, None
        try:
            if exc_type is None:
                conn.commit()
            else:
                conn.rollback()
        except mysql.connector.Error as e:
            if exc_type is None:
                raise PersistenceError(f"Commit failed: {e}") from e
        finally:
            conn.close()
