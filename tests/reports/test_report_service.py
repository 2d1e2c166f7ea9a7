from __future__ import annotations

from datetime import date, datetime, time

import pytest

from shift_attendance.core.enums import Role, WorkingDays
from shift_attendance.core.exceptions import UnauthorizedError, ValidationError


def test_today_board_statuses(world):
    evening = world.add_shift("Evening Shift", entry=time(14, 0), exit_=time(22, 0))
    world.add_employee("Admin", role=Role.ADMIN)
    late = world.add_employee("Late Comer")
    missing = world.add_employee("No Show")
    later = world.add_employee("Evening Person", shift_id=evening.shift_id)

    svc = world.container.attendance_service
    svc.check_in(late.employee_id, instant=datetime(2025, 3, 3, 9, 20), dressing="formal")
    world.set_time(10, 30)

    rows = {r.employee_id: r for r in world.container.report_service.today_board(current_role=Role.ADMIN)}

    assert set(rows) == {late.employee_id, missing.employee_id, later.employee_id}
    assert rows[late.employee_id].status == "late"
    assert rows[late.employee_id].is_late_today
    assert rows[late.employee_id].dressing == "formal"
    # Saturday the 1st was a working day with no record
    assert rows[late.employee_id].late_summary == "1 Late, 1 Absent"
    assert rows[missing.employee_id].status == "absent"
    assert rows[missing.employee_id].check_in is None
    assert rows[later.employee_id].status == "pending"


def test_today_board_requires_admin(world):
    with pytest.raises(UnauthorizedError):
        world.container.report_service.today_board(current_role=Role.EMPLOYEE)


def test_monthly_summary_counts_elapsed_working_days(world):
    emp = world.add_employee()
    svc = world.container.attendance_service
    svc.check_in(emp.employee_id, instant=datetime(2025, 3, 3, 8, 55))
    svc.check_in(emp.employee_id, instant=datetime(2025, 3, 4, 9, 30))

    [row] = world.container.report_service.monthly_summary(
        current_role=Role.ADMIN, year=2025, month=3, as_of=date(2025, 3, 5)
    )

    # Sat 1st, Mon 3rd and Tue 4th have elapsed; Wed 5th has no record yet.
    assert row.expected_days == 3
    assert (row.present, row.late, row.leave) == (1, 1, 0)
    assert row.absent == 1


def test_monthly_summary_counts_as_of_day_once_recorded(world):
    emp = world.add_employee()
    svc = world.container.attendance_service
    svc.check_in(emp.employee_id, instant=datetime(2025, 3, 5, 8, 55))
    svc.mark_leave(current_role=Role.ADMIN, employee_id=emp.employee_id, work_date=date(2025, 3, 4), bucket="annual")

    [row] = world.container.report_service.monthly_summary(
        current_role=Role.ADMIN, year=2025, month=3, as_of=date(2025, 3, 5)
    )

    assert row.expected_days == 4
    assert (row.present, row.leave) == (1, 1)
    assert row.absent == 2


def test_monthly_summary_respects_shift_working_days(world):
    shift = world.add_shift("Office", working_days=WorkingDays.MONDAY_FRIDAY)
    world.add_employee(shift_id=shift.shift_id)

    [row] = world.container.report_service.monthly_summary(
        current_role=Role.ADMIN, year=2025, month=3, as_of=date(2025, 3, 5)
    )

    assert row.expected_days == 2
    assert row.absent == 2


def test_monthly_summary_invalid_month(world):
    with pytest.raises(ValidationError):
        world.container.report_service.monthly_summary(current_role=Role.ADMIN, year=2025, month=13)


def test_monthly_csv_has_header_and_rows(world):
    world.add_employee("Ali Raza")

    body = world.container.report_service.monthly_csv(current_role=Role.ADMIN, year=2025, month=3, as_of=date(2025, 3, 5))
    lines = body.strip().splitlines()

    assert lines[0] == "employee_id,employee_code,full_name,expected_days,present,late,leave,absent"
    assert lines[1].startswith("1,EMP01,Ali Raza,3,")


def test_today_board_absent_count_matches_monthly_summary(world):
    emp = world.add_employee()
    world.container.attendance_service.check_in(emp.employee_id, instant=datetime(2025, 3, 3, 9, 20))
    world.set_time(16, 0, day=date(2025, 3, 6))
    reports = world.container.report_service

    [board] = reports.today_board(current_role=Role.ADMIN)
    [monthly] = reports.monthly_summary(current_role=Role.ADMIN, year=2025, month=3)

    assert monthly.absent == 3
    assert board.late_summary == "1 Late, 3 Absent"
    assert board.status == "absent"
