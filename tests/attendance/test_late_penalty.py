from __future__ import annotations

import logging
from datetime import datetime

import pytest

from shift_attendance.core.enums import AttendanceStatus
from shift_attendance.core.exceptions import PersistenceError


def _late_on(svc, employee_id: int, day: int, month: int = 3):
    return svc.check_in(employee_id, instant=datetime(2025, month, day, 9, 20))


def test_third_late_in_month_costs_one_casual_leave(world):
    emp = world.add_employee(casual=12, annual=12)
    svc = world.container.attendance_service

    _late_on(svc, emp.employee_id, 3)
    _late_on(svc, emp.employee_id, 4)
    assert world.employees.get_by_id(emp.employee_id).casual_leaves == 12

    _late_on(svc, emp.employee_id, 5)

    after = world.employees.get_by_id(emp.employee_id)
    assert after.casual_leaves == 11
    assert after.annual_leaves == 12


def test_every_third_late_is_charged_again(world):
    emp = world.add_employee()
    svc = world.container.attendance_service

    for day in (3, 4, 5, 6, 7, 8):
        _late_on(svc, emp.employee_id, day)

    assert world.employees.get_by_id(emp.employee_id).casual_leaves == 10


def test_on_time_days_do_not_count_towards_penalty(world):
    emp = world.add_employee()
    svc = world.container.attendance_service

    _late_on(svc, emp.employee_id, 3)
    svc.check_in(emp.employee_id, instant=datetime(2025, 3, 4, 8, 50))
    _late_on(svc, emp.employee_id, 5)

    assert world.employees.get_by_id(emp.employee_id).casual_leaves == 12


def test_penalty_falls_back_to_annual_when_casual_is_exhausted(world):
    emp = world.add_employee(casual=0, annual=5)
    svc = world.container.attendance_service

    for day in (3, 4, 5):
        _late_on(svc, emp.employee_id, day)

    after = world.employees.get_by_id(emp.employee_id)
    assert after.casual_leaves == 0
    assert after.annual_leaves == 4


def test_penalty_may_drive_annual_negative_when_allowed(world):
    emp = world.add_employee(casual=0, annual=0)
    svc = world.container.attendance_service

    for day in (3, 4, 5):
        _late_on(svc, emp.employee_id, day)

    assert world.employees.get_by_id(emp.employee_id).annual_leaves == -1


def test_penalty_is_skipped_when_negative_balances_are_disabled(make_world, caplog):
    world = make_world(allow_negative_balance=False)
    emp = world.add_employee(casual=0, annual=0)
    svc = world.container.attendance_service

    with caplog.at_level(logging.WARNING, logger="shift_attendance"):
        for day in (3, 4, 5):
            _late_on(svc, emp.employee_id, day)

    after = world.employees.get_by_id(emp.employee_id)
    assert (after.casual_leaves, after.annual_leaves) == (0, 0)
    assert len(world.attendance.rows) == 3
    assert "Late penalty not charged" in caplog.text


def test_late_count_restarts_each_month(world):
    emp = world.add_employee()
    svc = world.container.attendance_service

    _late_on(svc, emp.employee_id, 26, month=2)
    _late_on(svc, emp.employee_id, 27, month=2)
    _late_on(svc, emp.employee_id, 3, month=3)
    _late_on(svc, emp.employee_id, 4, month=3)

    assert world.employees.get_by_id(emp.employee_id).casual_leaves == 12


def test_failed_record_write_rolls_back_leave_debit(world, monkeypatch):
    emp = world.add_employee()
    svc = world.container.attendance_service
    _late_on(svc, emp.employee_id, 3)
    _late_on(svc, emp.employee_id, 4)

    def broken_create(record):
        raise PersistenceError("Database error: connection lost")

    monkeypatch.setattr(world.attendance, "create", broken_create)

    with pytest.raises(PersistenceError):
        _late_on(svc, emp.employee_id, 5)

    after = world.employees.get_by_id(emp.employee_id)
    assert after.casual_leaves == 12
    assert after.attendance_status == AttendanceStatus.LATE
    assert after.current_check_in == datetime(2025, 3, 4, 9, 20)
    assert len(world.attendance.rows) == 2
