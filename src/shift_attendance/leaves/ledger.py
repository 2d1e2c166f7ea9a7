"""Leave ledger rules.

Balances are only ever changed through `LeaveBalance.debit` (late penalties,
leave days) or by an admin setting them outright.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import LeaveBucket
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveBalance:
    annual: int
    casual: int

    def get(self, bucket: LeaveBucket) -> int:
        return self.casual if bucket == LeaveBucket.CASUAL else self.annual

    def debit(self, bucket: LeaveBucket, units: int = 1) -> "LeaveBalance":
        if bucket == LeaveBucket.CASUAL:
            return LeaveBalance(annual=self.annual, casual=self.casual - units)
        return LeaveBalance(annual=self.annual - units, casual=self.casual)


@dataclass(frozen=True)
class LeaveDebit:
    bucket: LeaveBucket
    before: LeaveBalance
    after: LeaveBalance


@dataclass(frozen=True)
class LatePenaltyPolicy:
    """Every `every`-th late arrival in a calendar month costs one leave unit."""

    every: int = 3
    allow_negative_balance: bool = True

    def __post_init__(self):
        if int(self.every) < 1:
            raise ValidationError("Late penalty cadence must be >= 1")

    def is_due(self, prior_late_count: int) -> bool:
        return (int(prior_late_count) + 1) % int(self.every) == 0

    def choose_bucket(self, balance: LeaveBalance) -> Optional[LeaveBucket]:
        """Casual while it lasts, then annual. None means nothing may be charged."""
        if balance.casual > 0:
            return LeaveBucket.CASUAL
        if balance.annual > 0 or self.allow_negative_balance:
            return LeaveBucket.ANNUAL
        return None

    def charge(self, balance: LeaveBalance, bucket: LeaveBucket) -> LeaveDebit:
        """Debit one unit from an explicit bucket, honouring the negative-balance flag."""
        if not self.allow_negative_balance and balance.get(bucket) <= 0:
            raise ValidationError(f"Insufficient {bucket.value} leave balance")
        return LeaveDebit(bucket=bucket, before=balance, after=balance.debit(bucket))
