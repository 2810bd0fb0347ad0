from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckOutDecision, CheckOutStrategy

_ALREADY_DEDUCTED = frozenset({AttendanceStatus.HALF_DAY, AttendanceStatus.ABSENT})


class EarlyLeaveStrategy(CheckOutStrategy):
    """Early leave on checkout (not for days already downgraded at check-in)."""

    def decide_checkout(self, *, minutes: int, current: AttendanceStatus) -> CheckOutDecision:
        if current in _ALREADY_DEDUCTED:
            return CheckOutDecision(status=current, early_leave_marks=0)
        return CheckOutDecision(status=current, early_leave_marks=1)
