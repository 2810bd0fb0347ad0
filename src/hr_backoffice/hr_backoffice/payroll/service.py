from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..attendance import aggregator
from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock
from ..common.datetime_utils import month_bounds, normalize_month
from ..common.money import as_number, to_money
from ..common.validators import (
    require_amount,
    require_non_empty,
    require_non_negative_int,
    require_positive_int,
    require_year,
)
from ..core.enums import SalaryStatus
from ..core.exceptions import (
    AlreadyPaid,
    CannotDeletePaidRecord,
    CannotModifyPaidRecord,
    DuplicateSalaryRecord,
    EmployeeNotFound,
    RecordNotFound,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from .calculator.base import DeductionCalculator
from .calculator.standard_calculator import LateMarkDeductionCalculator
from .model import SalaryCalculation, SalaryRecord, compute_net
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"basic_salary", "allowances", "deductions", "late_days", "late_deduction", "notes"})


@dataclass(frozen=True)
class SalaryListing:
    records: Sequence[SalaryRecord]
    total_paid: Decimal
    total_pending: Decimal

    def to_dict(self) -> dict:
        return {
            "count": len(self.records),
            "totalPaid": as_number(self.total_paid),
            "totalPending": as_number(self.total_pending),
            "data": [r.to_dict() for r in self.records],
        }


def _totals(records: Sequence[SalaryRecord]) -> tuple[Decimal, Decimal]:
    paid = sum((r.net_salary for r in records if r.is_paid), Decimal("0"))
    pending = sum((r.net_salary for r in records if not r.is_paid), Decimal("0"))
    return paid, pending


def normalize_period(month: Any, year: Any) -> tuple[str, int]:
    return normalize_month(month), require_year(year)


class SalaryService:
    """Salary calculation and the UNPAID -> PAID record lifecycle."""

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeDirectory,
        attendance: AttendanceRepository,
        clock: Clock,
        *,
        calculator: Optional[DeductionCalculator] = None,
    ):
        self._salaries = salaries
        self._employees = employees
        self._attendance = attendance
        self._clock = clock
        self._calculator = calculator or LateMarkDeductionCalculator()

    def _require_employee(self, employee_id: Any) -> Employee:
        employee = self._employees.get_by_id(require_positive_int(employee_id, "employeeId"))
        if not employee:
            raise EmployeeNotFound("Employee not found")
        return employee

    def _require_record(self, salary_id: Any) -> SalaryRecord:
        record = self._salaries.get_by_id(require_positive_int(salary_id, "salaryId"))
        if not record:
            raise RecordNotFound("Salary record not found")
        return record

    def calculate(self, employee_id: Any, month: Any, year: Any) -> SalaryCalculation:
        """Late-day deduction for one employee and month."""
        employee = self._require_employee(employee_id)
        month, year = normalize_period(month, year)
        start, end = month_bounds(month, year)

        records = self._attendance.list_for_employee(employee.employee_id, start_date=start, end_date=end)
        late_days = aggregator.count_late_days(records)
        result = self._calculator.calculate(employee.base_salary, late_days)

        return SalaryCalculation(
            employee_id=employee.employee_id,
            month=month,
            year=year,
            late_days=late_days,
            deductible_days=result.deductible_days,
            deduction_amount=result.deduction_amount,
            basic_salary=to_money(employee.base_salary),
            daily_rate=result.daily_rate,
        )

    def get(self, salary_id: Any) -> SalaryRecord:
        return self._require_record(salary_id)

    def create(
        self,
        *,
        employee_id: Any,
        month: Any,
        year: Any,
        basic_salary: Any = None,
        allowances: Any = 0,
        deductions: Any = 0,
        late_days: Any = 0,
        late_deduction: Any = 0,
        notes: Optional[str] = None,
    ) -> SalaryRecord:
        employee = self._require_employee(employee_id)
        month, year = normalize_period(month, year)

        basic = to_money(employee.base_salary if basic_salary is None else require_amount(basic_salary, "basicSalary"))
        allow = to_money(require_amount(allowances or 0, "allowances"))
        deduct = to_money(require_amount(deductions or 0, "deductions"))

        if self._salaries.get_for_period(employee.employee_id, month, year):
            raise DuplicateSalaryRecord(f"Salary record already exists for {month} {year}")

        salary_id = self._salaries.create(
            employee_id=employee.employee_id,
            month=month,
            year=year,
            basic_salary=basic,
            allowances=allow,
            deductions=deduct,
            net_salary=compute_net(basic, allow, deduct),
            late_days=require_non_negative_int(late_days or 0, "lateDays"),
            late_deduction=to_money(require_amount(late_deduction or 0, "lateDeduction")),
            notes=(notes or "").strip() or None,
        )
        logger.info("Created salary record %s for employee %s (%s %s)", salary_id, employee.employee_id, month, year)
        return self._require_record(salary_id)

    def update(self, salary_id: Any, **changes: Any) -> SalaryRecord:
        """Change amounts/notes of an UNPAID record; net salary is recomputed."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        record = self._require_record(salary_id)
        if record.is_paid:
            raise CannotModifyPaidRecord("Cannot update paid salary")

        basic = record.basic_salary
        allow = record.allowances
        deduct = record.deductions
        late_deduction = record.late_deduction
        if changes.get("basic_salary") is not None:
            basic = to_money(require_amount(changes["basic_salary"], "basicSalary"))
        if changes.get("allowances") is not None:
            allow = to_money(require_amount(changes["allowances"], "allowances"))
        if changes.get("deductions") is not None:
            deduct = to_money(require_amount(changes["deductions"], "deductions"))
        if changes.get("late_deduction") is not None:
            late_deduction = to_money(require_amount(changes["late_deduction"], "lateDeduction"))
        late_days = record.late_days
        if changes.get("late_days") is not None:
            late_days = require_non_negative_int(changes["late_days"], "lateDays")
        notes = changes["notes"] if "notes" in changes else record.notes

        ok = self._salaries.update_unpaid(
            salary_id=record.salary_id,
            basic_salary=basic,
            allowances=allow,
            deductions=deduct,
            net_salary=compute_net(basic, allow, deduct),
            late_days=late_days,
            late_deduction=late_deduction,
            notes=notes,
        )
        if not ok:
            # Paid or deleted between the read and the write.
            self._require_record(record.salary_id)
            raise CannotModifyPaidRecord("Cannot update paid salary")

        return self._require_record(record.salary_id)

    def pay(
        self,
        salary_id: Any,
        *,
        payment_account: str,
        transaction_id: Optional[str] = None,
        paid_by: Optional[str] = None,
    ) -> SalaryRecord:
        account = require_non_empty(payment_account, "paymentAccount")

        record = self._require_record(salary_id)
        if record.is_paid:
            raise AlreadyPaid("Salary already paid")

        ok = self._salaries.mark_paid(
            salary_id=record.salary_id,
            payment_account=account,
            transaction_id=(transaction_id or "").strip() or None,
            paid_by=(paid_by or "").strip() or "Manager",
            paid_date=self._clock.now().local_datetime,
        )
        if not ok:
            self._require_record(record.salary_id)
            raise AlreadyPaid("Salary already paid")

        logger.info(
            "Salary %s paid: %s %s net=%s via %s",
            record.salary_id,
            record.month,
            record.year,
            record.net_salary,
            account,
        )
        return self._require_record(record.salary_id)

    def delete(self, salary_id: Any) -> None:
        record = self._require_record(salary_id)
        if record.is_paid:
            raise CannotDeletePaidRecord("Cannot delete paid salary")

        if not self._salaries.delete_unpaid(record.salary_id):
            self._require_record(record.salary_id)
            raise CannotDeletePaidRecord("Cannot delete paid salary")
        logger.info("Deleted salary record %s", record.salary_id)

    def list(
        self,
        *,
        month: Any = None,
        year: Any = None,
        status: Optional[str] = None,
        employee_id: Any = None,
    ) -> SalaryListing:
        month_filter = normalize_month(month) if month else None
        year_filter = require_year(year) if year else None
        status_filter = None
        if status:
            try:
                status_filter = SalaryStatus.parse(status)
            except ValueError:
                raise ValidationError(f"Invalid status {status!r}")
        employee_filter = require_positive_int(employee_id, "employeeId") if employee_id else None

        records = self._salaries.list_filtered(
            month=month_filter,
            year=year_filter,
            status=status_filter,
            employee_id=employee_filter,
        )
        paid, pending = _totals(records)
        return SalaryListing(records=list(records), total_paid=paid, total_pending=pending)

    def employee_overall(self, employee_id: Any) -> dict:
        employee = self._require_employee(employee_id)
        records = self._salaries.list_filtered(employee_id=employee.employee_id)
        paid, pending = _totals(records)
        return {
            "data": [r.to_dict() for r in records],
            "stats": {"totalPaid": as_number(paid), "totalPending": as_number(pending), "recordCount": len(records)},
        }

    def overall_stats(self) -> list[dict]:
        out: list[dict] = []
        for employee in self._employees.list_active():
            records = self._salaries.list_filtered(employee_id=employee.employee_id)
            paid, pending = _totals(records)
            out.append(
                {
                    "employeeId": employee.employee_id,
                    "employeeName": employee.full_name,
                    "erpId": employee.erp_id,
                    "basicSalary": as_number(to_money(employee.base_salary)),
                    "totalPaid": as_number(paid),
                    "totalPending": as_number(pending),
                    "recordCount": len(records),
                }
            )
        return out
