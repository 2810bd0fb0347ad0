from __future__ import annotations

from dataclasses import dataclass

from ..core import constants
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Boundaries are inclusive on the lower classification: 09:10 is still
    Present, 09:30 is still Late and 13:00 is still Half-Day.
    """

    present_until: int = constants.PRESENT_UNTIL_MINUTES
    late_until: int = constants.LATE_UNTIL_MINUTES
    half_day_until: int = constants.HALF_DAY_UNTIL_MINUTES
    half_day_checkout_before: int = constants.HALF_DAY_CHECKOUT_BEFORE_MINUTES
    early_leave_before: int = constants.EARLY_LEAVE_BEFORE_MINUTES

    def for_checkin(self, *, minutes: int) -> CheckInStrategy:
        if minutes <= self.present_until:
            return NormalStrategy()
        if minutes <= self.late_until:
            return LateStrategy()
        if minutes <= self.half_day_until:
            return HalfDayStrategy()
        return AbsentStrategy()

    def for_checkout(self, *, minutes: int) -> CheckOutStrategy:
        if minutes < self.half_day_checkout_before:
            return HalfDayStrategy()
        if minutes < self.early_leave_before:
            return EarlyLeaveStrategy()
        return NormalStrategy()
