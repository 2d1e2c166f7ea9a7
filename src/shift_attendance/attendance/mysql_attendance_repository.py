from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus, Dressing
from ..core.exceptions import DuplicateCheckInError
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, check_in_time, check_out_time, status, dressing, note"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        dressing=Dressing(r.get("dressing") or Dressing.NONE.value),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def count_with_status(self, employee_id: int, *, start: date, end: date, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM attendance_records
                WHERE employee_id=%s AND status=%s AND work_date BETWEEN %s AND %s
                """,
                (int(employee_id), status.value, start, end),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start is not None:
            clauses.append("work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("work_date <= %s")
            params.append(end)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY work_date DESC, employee_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(self, record: AttendanceRecord) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time, check_out_time,
                                                   status, dressing, note)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(record.employee_id),
                        record.work_date,
                        record.check_in_time,
                        record.check_out_time,
                        record.status.value,
                        record.dressing.value,
                        record.note,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_attendance_employee_day: the losing side of a concurrent check-in
            if is_duplicate_key(e):
                raise DuplicateCheckInError("Already checked in today") from e
            raise

    def close(self, attendance_id: int, *, check_out_time: datetime, note: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, note=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, note, int(attendance_id)),
            )
            return cur.rowcount > 0

    def save(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, dressing=%s, note=%s
                WHERE attendance_id=%s
                """,
                (record.status.value, record.dressing.value, record.note, int(record.attendance_id)),
            )
            return cur.rowcount > 0
