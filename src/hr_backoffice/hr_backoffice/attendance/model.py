from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_time
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee's attendance for one civil date.

    ``is_half_day`` is kept as a column for queries; it is always written
    as ``status.is_half_day`` by the store. Older rows may still carry the
    flag without the matching status.
    """

    attendance_id: int
    employee_id: int
    work_date: date
    check_in_time: Optional[time]
    check_out_time: Optional[time]
    status: AttendanceStatus
    is_half_day: bool = False
    late_marks: int = 0
    early_leave_marks: int = 0
    overtime_minutes: int = 0

    @property
    def counts_as_half_day(self) -> bool:
        return self.status.is_half_day or self.is_half_day

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employeeId": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "checkIn": format_time(self.check_in_time),
            "checkOut": format_time(self.check_out_time),
            "status": self.status.value,
            "isHalfDay": self.counts_as_half_day,
            "lateMarks": self.late_marks,
            "earlyLeaveMarks": self.early_leave_marks,
            "overtimeMinutes": self.overtime_minutes,
        }
