"""Attendance policy engine.

Pure functions of a wall-clock time string (and, for check-out, the status
set at check-in). No clock access happens here.
"""
from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import minutes_since_midnight
from ..core.constants import OFFICE_END_MINUTES
from ..core.enums import AttendanceStatus
from .factory import AttendanceStrategyFactory
from .strategies.base import CheckInDecision, CheckOutDecision

_default_factory = AttendanceStrategyFactory()


def overtime_minutes(minutes: int, *, office_end: int = OFFICE_END_MINUTES) -> int:
    return max(0, minutes - office_end)


def classify_check_in(time_of_day: str, *, factory: Optional[AttendanceStrategyFactory] = None) -> CheckInDecision:
    minutes = minutes_since_midnight(time_of_day)
    strategy = (factory or _default_factory).for_checkin(minutes=minutes)
    return strategy.decide_checkin(minutes=minutes)


def classify_check_out(
    time_of_day: str,
    prior_status: AttendanceStatus,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> CheckOutDecision:
    minutes = minutes_since_midnight(time_of_day)
    strategy = (factory or _default_factory).for_checkout(minutes=minutes)
    decision = strategy.decide_checkout(minutes=minutes, current=AttendanceStatus(prior_status))
    # Overtime is independent of the status branch.
    return CheckOutDecision(
        status=decision.status,
        early_leave_marks=decision.early_leave_marks,
        overtime_minutes=overtime_minutes(minutes),
    )
