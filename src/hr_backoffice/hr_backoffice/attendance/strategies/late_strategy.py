from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInDecision, CheckInStrategy


class LateStrategy(CheckInStrategy):
    """Check-in after the grace period: one late mark."""

    def decide_checkin(self, *, minutes: int) -> CheckInDecision:
        return CheckInDecision(status=AttendanceStatus.LATE, late_marks=1)
