from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role
from ..core.exceptions import UnauthorizedError


@dataclass(frozen=True)
class Identity:
    """Who is calling: resolved from the session by the web layer."""

    employee_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise UnauthorizedError("Admin role required")
