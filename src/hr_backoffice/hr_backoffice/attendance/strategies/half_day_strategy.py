from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInDecision, CheckInStrategy, CheckOutDecision, CheckOutStrategy


class HalfDayStrategy(CheckInStrategy, CheckOutStrategy):
    """Mid-morning check-in or leaving before the afternoon cut-off.

    Late and early-leave marks are dropped since the half-day deduction
    already covers them.
    """

    def decide_checkin(self, *, minutes: int) -> CheckInDecision:
        return CheckInDecision(status=AttendanceStatus.HALF_DAY, late_marks=0)

    def decide_checkout(self, *, minutes: int, current: AttendanceStatus) -> CheckOutDecision:
        return CheckOutDecision(status=AttendanceStatus.HALF_DAY, early_leave_marks=0)
