from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class CheckInDecision:
    status: AttendanceStatus
    late_marks: int = 0

    @property
    def is_half_day(self) -> bool:
        return self.status.is_half_day


@dataclass(frozen=True)
class CheckOutDecision:
    status: AttendanceStatus
    early_leave_marks: int = 0
    overtime_minutes: int = 0

    @property
    def is_half_day(self) -> bool:
        return self.status.is_half_day


class CheckInStrategy(ABC):
    """Strategy Pattern: decide the day's status from the check-in minute."""

    @abstractmethod
    def decide_checkin(self, *, minutes: int) -> CheckInDecision:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Strategy Pattern: revise the day's status from the check-out minute."""

    @abstractmethod
    def decide_checkout(self, *, minutes: int, current: AttendanceStatus) -> CheckOutDecision:
        raise NotImplementedError
