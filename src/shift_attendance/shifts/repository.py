from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus, WorkingDays
from .model import ShiftPolicy


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[ShiftPolicy]:
        raise NotImplementedError

    def list_active(self) -> Sequence[ShiftPolicy]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[ShiftPolicy]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[ShiftPolicy]:
        """Case-insensitive lookup."""

        raise NotImplementedError

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
        """Raises DuplicateShiftNameError when the name is taken."""

        raise NotImplementedError

    def update(self, policy: ShiftPolicy) -> bool:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError
