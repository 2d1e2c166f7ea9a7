from __future__ import annotations

from datetime import time

import pytest

from shift_attendance.core.enums import Role, ShiftStatus, WorkingDays
from shift_attendance.core.exceptions import DuplicateShiftNameError, NotFoundError, UnauthorizedError, ValidationError


def test_create_policy_with_defaults(world):
    svc = world.container.shift_service

    policy = svc.create_policy(current_role=Role.ADMIN, name="Day Shift")

    assert policy.shift_id > 0
    assert policy.entry_time == time(9, 0)
    assert policy.exit_time == time(18, 0)
    assert policy.working_days == WorkingDays.MONDAY_SATURDAY
    assert policy.is_active


def test_shift_names_are_unique_ignoring_case(world):
    svc = world.container.shift_service
    svc.create_policy(current_role=Role.ADMIN, name="Day Shift")

    with pytest.raises(DuplicateShiftNameError):
        svc.create_policy(current_role=Role.ADMIN, name="day shift")


def test_create_policy_validates_times(world):
    svc = world.container.shift_service

    with pytest.raises(ValidationError):
        svc.create_policy(current_role=Role.ADMIN, name="Broken", entry_time="25:00")
    with pytest.raises(ValidationError):
        svc.create_policy(current_role=Role.ADMIN, name="Broken", break_start="14:00", break_end="13:00")


def test_only_admin_manages_policies(world):
    with pytest.raises(UnauthorizedError):
        world.container.shift_service.create_policy(current_role=Role.EMPLOYEE, name="Night")


def test_update_policy_changes_fields(world):
    svc = world.container.shift_service
    policy = svc.create_policy(current_role=Role.ADMIN, name="Day Shift")

    updated = svc.update_policy(
        current_role=Role.ADMIN,
        shift_id=policy.shift_id,
        changes={"entry_time": "08:30", "working_days": "monday-friday", "status": "inactive"},
    )

    assert updated.entry_time == time(8, 30)
    assert updated.working_days == WorkingDays.MONDAY_FRIDAY
    assert updated.status == ShiftStatus.INACTIVE
    assert svc.list_active() == []


def test_update_policy_rename_collision(world):
    svc = world.container.shift_service
    svc.create_policy(current_role=Role.ADMIN, name="Day Shift")
    evening = svc.create_policy(current_role=Role.ADMIN, name="Evening Shift", entry_time="14:00", exit_time="22:00")

    with pytest.raises(DuplicateShiftNameError):
        svc.update_policy(current_role=Role.ADMIN, shift_id=evening.shift_id, changes={"name": "DAY SHIFT"})


def test_update_policy_rejects_unknown_fields(world):
    svc = world.container.shift_service
    policy = svc.create_policy(current_role=Role.ADMIN, name="Day Shift")

    with pytest.raises(ValidationError):
        svc.update_policy(current_role=Role.ADMIN, shift_id=policy.shift_id, changes={"color": "red"})


def test_delete_policy_leaves_employees_on_default_entry(world):
    svc = world.container.shift_service
    policy = svc.create_policy(current_role=Role.ADMIN, name="Early", entry_time="07:00")
    emp = world.add_employee(shift_id=policy.shift_id)

    svc.delete_policy(current_role=Role.ADMIN, shift_id=policy.shift_id)

    assert world.container.attendance_service.entry_time_for(emp) == time(9, 0)
    with pytest.raises(NotFoundError):
        svc.delete_policy(current_role=Role.ADMIN, shift_id=policy.shift_id)
