from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional, Sequence

from ..auth.identity import require_admin
from ..common.datetime_utils import minutes_since_midnight, parse_hhmm
from ..common.validators import require_enum, require_non_empty, require_non_negative_int
from ..core import constants
from ..core.enums import Role, ShiftStatus, WorkingDays
from ..core.exceptions import DuplicateShiftNameError, NotFoundError, ValidationError
from ..core.logging import get_logger
from .model import ShiftPolicy
from .repository import ShiftRepository

logger = get_logger(__name__)

_TIME_FIELDS = ("entry_time", "exit_time", "break_start", "break_end")
_EDITABLE = {"name", "break_duration", "working_days", "status", *_TIME_FIELDS}


class ShiftService:
    """Use case: manage shift policies (admin)."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def list_active(self) -> Sequence[ShiftPolicy]:
        return self._shifts.list_active()

    def list_all(self) -> Sequence[ShiftPolicy]:
        return self._shifts.list_all()

    def get(self, shift_id: int) -> ShiftPolicy:
        policy = self._shifts.get_by_id(int(shift_id))
        if not policy:
            raise NotFoundError(f"Shift policy {shift_id} not found")
        return policy

    def create_policy(
        self,
        *,
        current_role: Role,
        name: str,
        entry_time: str = constants.DEFAULT_ENTRY_TIME,
        exit_time: str = constants.DEFAULT_EXIT_TIME,
        break_start: str = constants.DEFAULT_BREAK_START,
        break_end: str = constants.DEFAULT_BREAK_END,
        break_duration: Any = constants.DEFAULT_BREAK_DURATION,
        working_days: Any = WorkingDays.MONDAY_SATURDAY,
        status: Any = ShiftStatus.ACTIVE,
    ) -> ShiftPolicy:
        require_admin(current_role)
        name = require_non_empty(name, "Shift name")

        # Fast path; the unique key on name backs this up under concurrency.
        if self._shifts.get_by_name(name):
            raise DuplicateShiftNameError(f"Shift name already exists: {name}")

        draft = self._validated(
            ShiftPolicy(
                shift_id=0,
                name=name,
                entry_time=parse_hhmm(entry_time),
                exit_time=parse_hhmm(exit_time),
                break_start=parse_hhmm(break_start),
                break_end=parse_hhmm(break_end),
                break_duration=require_non_negative_int(break_duration, "Break duration"),
                working_days=require_enum(WorkingDays, working_days, "Working days"),
                status=require_enum(ShiftStatus, status, "Status"),
            )
        )
        shift_id = self._shifts.create(
            name=draft.name,
            entry_time=draft.entry_time,
            exit_time=draft.exit_time,
            break_start=draft.break_start,
            break_end=draft.break_end,
            break_duration=draft.break_duration,
            working_days=draft.working_days,
            status=draft.status,
        )
        logger.info("Shift policy created: %s (id=%s)", draft.name, shift_id)
        return replace(draft, shift_id=shift_id)

    def update_policy(self, *, current_role: Role, shift_id: int, changes: dict) -> ShiftPolicy:
        require_admin(current_role)
        policy = self.get(shift_id)

        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValidationError(f"Unknown shift fields: {', '.join(sorted(unknown))}")

        fields: dict[str, Any] = {}
        if "name" in changes:
            name = require_non_empty(changes["name"], "Shift name")
            other = self._shifts.get_by_name(name)
            if other and other.shift_id != policy.shift_id:
                raise DuplicateShiftNameError(f"Shift name already exists: {name}")
            fields["name"] = name
        for key in _TIME_FIELDS:
            if key in changes:
                fields[key] = parse_hhmm(changes[key])
        if "break_duration" in changes:
            fields["break_duration"] = require_non_negative_int(changes["break_duration"], "Break duration")
        if "working_days" in changes:
            fields["working_days"] = require_enum(WorkingDays, changes["working_days"], "Working days")
        if "status" in changes:
            fields["status"] = require_enum(ShiftStatus, changes["status"], "Status")

        updated = self._validated(replace(policy, **fields))
        self._shifts.update(updated)
        return updated

    def delete_policy(self, *, current_role: Role, shift_id: int) -> None:
        require_admin(current_role)
        if not self._shifts.delete(int(shift_id)):
            raise NotFoundError(f"Shift policy {shift_id} not found")
        # Employees keep their shift_id; it resolves to "no policy" from now on.
        logger.info("Shift policy deleted: id=%s", shift_id)

    @staticmethod
    def _validated(policy: ShiftPolicy) -> ShiftPolicy:
        if minutes_since_midnight(policy.break_end) < minutes_since_midnight(policy.break_start):
            raise ValidationError("Break end must not be before break start")
        return policy
