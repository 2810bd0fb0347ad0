from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional

import pytest

from src.hr_backoffice.hr_backoffice.attendance.model import AttendanceRecord
from src.hr_backoffice.hr_backoffice.attendance.strategies.base import CheckInDecision, CheckOutDecision
from src.hr_backoffice.hr_backoffice.common.clock import Clock, ClockReading
from src.hr_backoffice.hr_backoffice.common.datetime_utils import month_index
from src.hr_backoffice.hr_backoffice.container import assemble
from src.hr_backoffice.hr_backoffice.core.enums import AttendanceStatus, EmploymentStatus, SalaryStatus
from src.hr_backoffice.hr_backoffice.core.exceptions import AlreadyCheckedIn, DuplicateSalaryRecord
from src.hr_backoffice.hr_backoffice.employees.model import Employee
from src.hr_backoffice.hr_backoffice.payroll.model import SalaryRecord


class FakeEmployees:
    def __init__(self, employees: list[Employee]):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def list_active(self):
        return [e for e in self._by_id.values() if e.is_active]

    def list_all(self):
        return list(self._by_id.values())


class FakeAttendance:
    """Mirrors the unique (employee, date) key and the guarded updates."""

    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.attendance_id in self._by_id:
            raise AssertionError("duplicate id in fixture")
        self._by_id[record.attendance_id] = record
        self._next_id = max(self._next_id, record.attendance_id + 1)
        return record

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_id.values())

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(int(attendance_id))

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self._by_id.values():
            if r.employee_id == int(employee_id) and r.work_date == work_date:
                return r
        return None

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self._by_id.values() if r.employee_id == int(employee_id)]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_for_employee(self, employee_id: int, *, start_date=None, end_date=None):
        items = [
            r
            for r in self._by_id.values()
            if r.employee_id == int(employee_id)
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        return sorted(items, key=lambda r: r.work_date)

    def list_for_date(self, work_date: date):
        return [r for r in self._by_id.values() if r.work_date == work_date]

    def create_checkin(self, *, employee_id: int, work_date: date, check_in_time: time, decision: CheckInDecision) -> int:
        if self.get_for_employee_and_date(employee_id, work_date):
            raise AlreadyCheckedIn("Already checked in today")
        rid = self._next_id
        self._next_id += 1
        self._by_id[rid] = AttendanceRecord(
            attendance_id=rid,
            employee_id=int(employee_id),
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=decision.status,
            is_half_day=decision.is_half_day,
            late_marks=decision.late_marks,
        )
        return rid

    def update_checkin(self, *, attendance_id: int, check_in_time: time, decision: CheckInDecision) -> bool:
        r = self._by_id.get(int(attendance_id))
        if not r or r.check_in_time is not None:
            return False
        self._by_id[r.attendance_id] = replace(
            r,
            check_in_time=check_in_time,
            status=decision.status,
            is_half_day=decision.is_half_day,
            late_marks=decision.late_marks,
        )
        return True

    def update_checkout(self, *, attendance_id: int, check_out_time: time, decision: CheckOutDecision) -> bool:
        r = self._by_id.get(int(attendance_id))
        if not r or r.check_out_time is not None:
            return False
        self._by_id[r.attendance_id] = replace(
            r,
            check_out_time=check_out_time,
            status=decision.status,
            is_half_day=decision.is_half_day,
            early_leave_marks=decision.early_leave_marks,
            overtime_minutes=decision.overtime_minutes,
        )
        return True

    def update_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        r = self._by_id.get(int(attendance_id))
        if not r:
            return False
        self._by_id[r.attendance_id] = replace(r, status=status, is_half_day=status.is_half_day)
        return True

    def delete_before(self, *, cutoff: date, limit: int) -> int:
        old = sorted((r for r in self._by_id.values() if r.work_date < cutoff), key=lambda r: r.work_date)[:limit]
        for r in old:
            del self._by_id[r.attendance_id]
        return len(old)


class FakeSalaries:
    """Mirrors the unique (employee, month, year) key and the Paid guards."""

    def __init__(self):
        self._by_id: dict[int, SalaryRecord] = {}
        self._next_id = 1
        self.fail_for: set[int] = set()

    def all(self) -> list[SalaryRecord]:
        return list(self._by_id.values())

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        return self._by_id.get(int(salary_id))

    def get_for_period(self, employee_id: int, month: str, year: int) -> Optional[SalaryRecord]:
        for r in self._by_id.values():
            if (r.employee_id, r.month, r.year) == (int(employee_id), month, int(year)):
                return r
        return None

    def list_filtered(self, *, month=None, year=None, status=None, employee_id=None):
        items = [
            r
            for r in self._by_id.values()
            if (month is None or r.month == month)
            and (year is None or r.year == int(year))
            and (status is None or r.is_paid == (status == SalaryStatus.PAID))
            and (employee_id is None or r.employee_id == int(employee_id))
        ]
        items.sort(key=lambda r: (r.year, month_index(r.month), r.salary_id), reverse=True)
        return items

    def create(
        self,
        *,
        employee_id,
        month,
        year,
        basic_salary,
        allowances,
        deductions,
        net_salary,
        late_days=0,
        late_deduction=Decimal("0"),
        notes=None,
    ) -> int:
        if int(employee_id) in self.fail_for:
            raise RuntimeError("simulated store failure")
        if self.get_for_period(employee_id, month, year):
            raise DuplicateSalaryRecord(f"Salary record already exists for {month} {year}")
        rid = self._next_id
        self._next_id += 1
        self._by_id[rid] = SalaryRecord(
            salary_id=rid,
            employee_id=int(employee_id),
            month=month,
            year=int(year),
            basic_salary=basic_salary,
            allowances=allowances,
            deductions=deductions,
            net_salary=net_salary,
            late_days=late_days,
            late_deduction=late_deduction,
            notes=notes,
        )
        return rid

    def update_unpaid(self, *, salary_id, basic_salary, allowances, deductions, net_salary, late_days, late_deduction, notes) -> bool:
        r = self._by_id.get(int(salary_id))
        if not r or r.is_paid:
            return False
        self._by_id[r.salary_id] = replace(
            r,
            basic_salary=basic_salary,
            allowances=allowances,
            deductions=deductions,
            net_salary=net_salary,
            late_days=late_days,
            late_deduction=late_deduction,
            notes=notes,
        )
        return True

    def mark_paid(self, *, salary_id, payment_account, transaction_id, paid_by, paid_date) -> bool:
        r = self._by_id.get(int(salary_id))
        if not r or r.is_paid:
            return False
        self._by_id[r.salary_id] = replace(
            r,
            status=SalaryStatus.PAID,
            payment_account=payment_account,
            transaction_id=transaction_id,
            paid_by=paid_by,
            paid_date=paid_date,
        )
        return True

    def delete_unpaid(self, salary_id: int) -> bool:
        r = self._by_id.get(int(salary_id))
        if not r or r.is_paid:
            return False
        del self._by_id[r.salary_id]
        return True


def make_record(attendance_id: int, employee_id: int, work_date: date, status: AttendanceStatus, **kwargs) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        employee_id=employee_id,
        work_date=work_date,
        check_in_time=kwargs.pop("check_in_time", time(9, 0)),
        check_out_time=kwargs.pop("check_out_time", None),
        status=status,
        is_half_day=kwargs.pop("is_half_day", status.is_half_day),
        **kwargs,
    )


def reading(day: str, at: str) -> ClockReading:
    return ClockReading(date=day, time=at)


@pytest.fixture
def employees():
    return FakeEmployees(
        [
            Employee(employee_id=1, full_name="Ayesha Khan", base_salary=Decimal("30000"), status=EmploymentStatus.ACTIVE, erp_id="HP-0001"),
            Employee(employee_id=2, full_name="Bilal Ahmed", base_salary=Decimal("45000"), status=EmploymentStatus.ACTIVE, erp_id="HP-0002"),
            Employee(employee_id=3, full_name="Sana Malik", base_salary=Decimal("36000"), status=EmploymentStatus.ON_LEAVE, erp_id="HP-0003"),
        ]
    )


@pytest.fixture
def attendance_repo():
    return FakeAttendance()


@pytest.fixture
def salaries_repo():
    return FakeSalaries()


@pytest.fixture
def clock():
    # 04:00 UTC is 09:00 in Karachi (UTC+5, no DST).
    return Clock("Asia/Karachi", utcnow=lambda: datetime(2025, 3, 10, 4, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def container(employees, attendance_repo, salaries_repo, clock):
    return assemble(
        employees_repo=employees,
        attendance_repo=attendance_repo,
        salaries_repo=salaries_repo,
        clock=clock,
        batch_size=2,
    )
