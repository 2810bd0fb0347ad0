from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.money import as_number, to_money
from ..core.enums import SalaryStatus


def compute_net(basic_salary: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
    return to_money(Decimal(basic_salary) + Decimal(allowances) - Decimal(deductions))


@dataclass(frozen=True)
class SalaryRecord:
    """Monthly salary record; immutable once PAID."""

    salary_id: int
    employee_id: int
    month: str
    year: int
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: SalaryStatus = SalaryStatus.UNPAID
    late_days: int = 0
    late_deduction: Decimal = Decimal("0")
    payment_account: Optional[str] = None
    transaction_id: Optional[str] = None
    paid_by: Optional[str] = None
    paid_date: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.status == SalaryStatus.PAID

    def to_dict(self) -> dict:
        return {
            "id": self.salary_id,
            "employeeId": self.employee_id,
            "month": self.month,
            "year": self.year,
            "basicSalary": as_number(self.basic_salary),
            "allowances": as_number(self.allowances),
            "deductions": as_number(self.deductions),
            "lateDays": self.late_days,
            "lateDeduction": as_number(self.late_deduction),
            "netSalary": as_number(self.net_salary),
            "status": self.status.value,
            "paymentAccount": self.payment_account,
            "transactionId": self.transaction_id,
            "paidBy": self.paid_by,
            "paidDate": self.paid_date.isoformat() if self.paid_date else None,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SalaryCalculation:
    employee_id: int
    month: str
    year: int
    late_days: int
    deductible_days: int
    deduction_amount: Decimal
    basic_salary: Decimal
    daily_rate: Decimal

    def to_dict(self) -> dict:
        return {
            "lateDays": self.late_days,
            "deductibleDays": self.deductible_days,
            "deductionAmount": as_number(self.deduction_amount),
            "basicSalary": as_number(self.basic_salary),
            "dailyRate": as_number(self.daily_rate),
        }
