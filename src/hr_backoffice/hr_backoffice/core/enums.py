from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Day classification stored on an attendance record."""

    PRESENT = "Present"
    LATE = "Late"
    HALF_DAY = "Half-Day"
    ABSENT = "Absent"
    OFF = "Off"

    @property
    def is_half_day(self) -> bool:
        return self is AttendanceStatus.HALF_DAY


class AttendanceAction(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class AbsenceLevel(str, Enum):
    WARNING = "Warning"
    DISCIPLINARY = "Disciplinary"


class EmploymentStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "OnLeave"
    TERMINATED = "Terminated"
    RESIGNED = "Resigned"


class SalaryStatus(str, Enum):
    """Salary record lifecycle: UNPAID -> PAID (terminal)."""

    UNPAID = "Unpaid"
    PAID = "Paid"

    @classmethod
    def parse(cls, value: str) -> "SalaryStatus":
        # Older records were written as "Pending".
        if value == "Pending":
            return cls.UNPAID
        return cls(value)
