from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.clock import Clock, ClockReading
from ..common.datetime_utils import month_bounds, normalize_month, parse_time_of_day
from ..common.validators import require_positive_int, require_year
from ..core.constants import DEFAULT_ABSENCE_WINDOW, DEFAULT_HISTORY_LIMIT
from ..core.enums import AbsenceLevel, AttendanceAction, AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    EmployeeNotFound,
    InvalidAction,
    MustCheckInFirst,
    RecordNotFound,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from . import aggregator
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .policy import classify_check_in, classify_check_out
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkResult:
    action: AttendanceAction
    date: str
    time: str
    status: AttendanceStatus
    is_half_day: bool
    late_marks: int = 0
    early_leave_marks: int = 0
    overtime_minutes: int = 0

    @property
    def message(self) -> str:
        if self.action == AttendanceAction.CHECK_IN:
            return f"Checked in successfully as {self.status.value} at {self.time}"
        return (
            f"Checked out successfully at {self.time}. "
            f"Status: {self.status.value}, Early marks: {self.early_leave_marks}"
        )

    def to_dict(self) -> dict:
        data = {
            "action": self.action.value,
            "date": self.date,
            "time": self.time,
            "status": self.status.value,
            "isHalfDay": self.is_half_day,
            "message": self.message,
        }
        if self.action == AttendanceAction.CHECK_IN:
            data["lateMarks"] = self.late_marks
        else:
            data["earlyLeaveMarks"] = self.early_leave_marks
            data["overtimeMinutes"] = self.overtime_minutes
        return data


@dataclass(frozen=True)
class AbsenceWarning:
    employee: Employee
    consecutive_absents: int
    level: AbsenceLevel

    def to_dict(self) -> dict:
        return {
            "employee": {"employeeId": self.employee.employee_id, "name": self.employee.full_name, "erpId": self.employee.erp_id},
            "consecutiveAbsents": self.consecutive_absents,
            "type": self.level.value,
        }


@dataclass(frozen=True)
class MonthlySummary:
    employee: Employee
    month: str
    year: int
    records: Sequence[AttendanceRecord]
    totals: aggregator.MonthlyTotals


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        clock: Clock,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        absence_window: int = DEFAULT_ABSENCE_WINDOW,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._history_limit = int(history_limit)
        self._absence_window = int(absence_window)

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFound("Employee not found")
        return employee

    @staticmethod
    def _parse_action(action: str) -> AttendanceAction:
        try:
            return AttendanceAction((action or "").strip())
        except ValueError:
            raise InvalidAction("Invalid action")

    def mark(self, employee_id: int, action: str, *, reading: ClockReading | None = None) -> MarkResult:
        """Check in or check out at the civil time in ``reading`` (default: now)."""
        parsed = self._parse_action(action)
        employee_id = require_positive_int(employee_id, "employeeId")
        if parsed == AttendanceAction.CHECK_IN:
            return self.check_in(employee_id, reading=reading)
        return self.check_out(employee_id, reading=reading)

    def check_in(self, employee_id: int, *, reading: ClockReading | None = None) -> MarkResult:
        reading = reading or self._clock.now()
        today = reading.calendar_date
        check_in_time = parse_time_of_day(reading.time)

        self._require_employee(employee_id)
        decision = classify_check_in(reading.time, factory=self._factory)

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing and existing.check_in_time is not None:
            raise AlreadyCheckedIn("Already checked in today")

        if existing:
            ok = self._attendance.update_checkin(
                attendance_id=existing.attendance_id,
                check_in_time=check_in_time,
                decision=decision,
            )
            if not ok:
                raise AlreadyCheckedIn("Already checked in today")
        else:
            self._attendance.create_checkin(
                employee_id=employee_id,
                work_date=today,
                check_in_time=check_in_time,
                decision=decision,
            )

        logger.info("Employee %s checked in on %s at %s as %s", employee_id, reading.date, reading.time, decision.status.value)
        return MarkResult(
            action=AttendanceAction.CHECK_IN,
            date=reading.date,
            time=reading.time,
            status=decision.status,
            is_half_day=decision.is_half_day,
            late_marks=decision.late_marks,
        )

    def check_out(self, employee_id: int, *, reading: ClockReading | None = None) -> MarkResult:
        reading = reading or self._clock.now()
        today = reading.calendar_date
        check_out_time = parse_time_of_day(reading.time)

        self._require_employee(employee_id)
        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record or record.check_in_time is None:
            raise MustCheckInFirst("Must check in first")
        if record.check_out_time is not None:
            raise AlreadyCheckedOut("Already checked out today")

        decision = classify_check_out(reading.time, record.status, factory=self._factory)
        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=check_out_time,
            decision=decision,
        )
        if not ok:
            raise AlreadyCheckedOut("Already checked out today")

        logger.info(
            "Employee %s checked out on %s at %s (status=%s, early=%s, overtime=%s)",
            employee_id,
            reading.date,
            reading.time,
            decision.status.value,
            decision.early_leave_marks,
            decision.overtime_minutes,
        )
        return MarkResult(
            action=AttendanceAction.CHECK_OUT,
            date=reading.date,
            time=reading.time,
            status=decision.status,
            is_half_day=decision.is_half_day,
            early_leave_marks=decision.early_leave_marks,
            overtime_minutes=decision.overtime_minutes,
        )

    def override_status(self, attendance_id: int, status: str) -> AttendanceRecord:
        """Payroll review correction of a day's status."""
        try:
            new_status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid status {status!r}")

        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise RecordNotFound("Attendance record not found")

        if not self._attendance.update_status(attendance_id=record.attendance_id, status=new_status):
            raise RecordNotFound("Attendance record not found")

        logger.info("Attendance %s status changed %s -> %s", record.attendance_id, record.status.value, new_status.value)
        return self._attendance.get_by_id(record.attendance_id)

    def get_history(self, employee_id: int) -> list[AttendanceRecord]:
        employee = self._require_employee(employee_id)
        rows = self._attendance.list_for_employee(employee.employee_id)
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

    def get_today(self, *, reading: ClockReading | None = None) -> list[dict]:
        reading = reading or self._clock.now()
        rows = self._attendance.list_for_date(reading.calendar_date)
        out: list[dict] = []
        for r in rows:
            employee = self._employees.get_by_id(r.employee_id)
            item = r.to_dict()
            item["employee"] = employee.to_dict() if employee else None
            out.append(item)
        return out

    def employee_stats(self, employee_id: int) -> dict:
        employee = self._require_employee(employee_id)
        history = self._attendance.get_recent_for_employee(employee.employee_id, self._history_limit)
        stats = aggregator.summarize(self._attendance.list_for_employee(employee.employee_id))
        return {"employee": employee, "history": list(history), "stats": stats}

    def lifetime_stats(self) -> list[dict]:
        out: list[dict] = []
        for employee in self._employees.list_all():
            stats = aggregator.summarize(self._attendance.list_for_employee(employee.employee_id))
            out.append({"employeeId": employee.employee_id, **stats.to_dict()})
        return out

    def absence_streak(self, employee_id: int, *, window: Optional[int] = None) -> aggregator.AbsenceStreak:
        recent = self._attendance.get_recent_for_employee(int(employee_id), int(window or self._absence_window))
        return aggregator.absence_streak(recent)

    def absence_warnings(self, *, window: Optional[int] = None) -> list[AbsenceWarning]:
        warnings: list[AbsenceWarning] = []
        for employee in self._employees.list_active():
            streak = self.absence_streak(employee.employee_id, window=window)
            if streak.level is not None:
                warnings.append(
                    AbsenceWarning(employee=employee, consecutive_absents=streak.consecutive_absents, level=streak.level)
                )
        return warnings

    def monthly_summary(self, employee_id: int, *, month: str, year: int) -> MonthlySummary:
        employee = self._require_employee(employee_id)
        month = normalize_month(month)
        year = require_year(year)
        start, end = month_bounds(month, year)
        records = self._attendance.list_for_employee(employee.employee_id, start_date=start, end_date=end)
        return MonthlySummary(
            employee=employee,
            month=month,
            year=year,
            records=list(records),
            totals=aggregator.monthly_totals(records),
        )
