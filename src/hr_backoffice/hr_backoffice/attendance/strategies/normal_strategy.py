from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInDecision, CheckInStrategy, CheckOutDecision, CheckOutStrategy


class NormalStrategy(CheckInStrategy, CheckOutStrategy):
    """On-time check-in, full-day check-out."""

    def decide_checkin(self, *, minutes: int) -> CheckInDecision:
        return CheckInDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, minutes: int, current: AttendanceStatus) -> CheckOutDecision:
        return CheckOutDecision(status=current, early_leave_marks=0)
