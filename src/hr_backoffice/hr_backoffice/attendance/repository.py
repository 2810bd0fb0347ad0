from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .strategies.base import CheckInDecision, CheckOutDecision


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        """Most recent records first (work_date DESC)."""

        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records in date order (work_date ASC), bounds inclusive."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: time,
        decision: CheckInDecision,
    ) -> int:
        """Insert the day's record.

        Raises AlreadyCheckedIn when a record for (employee, date) exists,
        including when a concurrent insert won the unique key.
        """

        raise NotImplementedError

    def update_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: time,
        decision: CheckInDecision,
    ) -> bool:
        """Fill check-in fields on a record created without one (e.g. an Off day).

        Returns False when the record already has a check-in.
        """

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: time,
        decision: CheckOutDecision,
    ) -> bool:
        """Set check-out fields only if not checked out yet.

        Returns False when another request already checked out.
        """

        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        """Payroll-review override; keeps is_half_day consistent with status."""

        raise NotImplementedError

    def delete_before(self, *, cutoff: date, limit: int) -> int:
        """Delete up to ``limit`` records dated strictly before ``cutoff``."""

        raise NotImplementedError
