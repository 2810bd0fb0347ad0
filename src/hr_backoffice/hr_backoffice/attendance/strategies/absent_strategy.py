from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInDecision, CheckInStrategy


class AbsentStrategy(CheckInStrategy):
    """Check-in in the afternoon counts as a full-day absence."""

    def decide_checkin(self, *, minutes: int) -> CheckInDecision:
        return CheckInDecision(status=AttendanceStatus.ABSENT, late_marks=0)
