from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import ShiftStatus, WorkingDays
from ..core.exceptions import DuplicateShiftNameError
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time
from .model import ShiftPolicy
from .repository import ShiftRepository

_COLUMNS = "shift_id, name, entry_time, exit_time, break_start, break_end, break_duration, working_days, status"


def _to_policy(r: dict) -> ShiftPolicy:
    return ShiftPolicy(
        shift_id=int(r["shift_id"]),
        name=r["name"],
        entry_time=normalize_mysql_time(r["entry_time"]),
        exit_time=normalize_mysql_time(r["exit_time"]),
        break_start=normalize_mysql_time(r["break_start"]),
        break_end=normalize_mysql_time(r["break_end"]),
        break_duration=int(r.get("break_duration") or 0),
        working_days=WorkingDays(r["working_days"]),
        status=ShiftStatus(r["status"]),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_policies ORDER BY name")
            return [_to_policy(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[ShiftPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_policies WHERE status=%s ORDER BY name", (ShiftStatus.ACTIVE.value,))
            return [_to_policy(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[ShiftPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_policies WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_policy(r) if r else None

    def get_by_name(self, name: str) -> Optional[ShiftPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_policies WHERE LOWER(name)=LOWER(%s)", (name,))
            r = fetchone(cur)
            return _to_policy(r) if r else None

    def create(
        self,
        *,
        name: str,
        entry_time: time,
        exit_time: time,
        break_start: time,
        break_end: time,
        break_duration: int,
        working_days: WorkingDays,
        status: ShiftStatus,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO shift_policies(name, entry_time, exit_time, break_start, break_end,
                                               break_duration, working_days, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (name, entry_time, exit_time, break_start, break_end, int(break_duration), working_days.value, status.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateShiftNameError(f"Shift name already exists: {name}") from e
            raise

    def update(self, policy: ShiftPolicy) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE shift_policies
                    SET name=%s, entry_time=%s, exit_time=%s, break_start=%s, break_end=%s,
                        break_duration=%s, working_days=%s, status=%s
                    WHERE shift_id=%s
                    """,
                    (
                        policy.name,
                        policy.entry_time,
                        policy.exit_time,
                        policy.break_start,
                        policy.break_end,
                        int(policy.break_duration),
                        policy.working_days.value,
                        policy.status.value,
                        int(policy.shift_id),
                    ),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateShiftNameError(f"Shift name already exists: {policy.name}") from e
            raise

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_policies WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0
