from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryStatus
from .model import SalaryRecord


class SalaryRepository(Protocol):
    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def get_for_period(self, employee_id: int, month: str, year: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        month: Optional[str] = None,
        year: Optional[int] = None,
        status: Optional[SalaryStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        """Newest period first."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        month: str,
        year: int,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
        late_days: int = 0,
        late_deduction: Decimal = Decimal("0"),
        notes: Optional[str] = None,
    ) -> int:
        """Insert an UNPAID record.

        Raises DuplicateSalaryRecord when (employee, month, year) exists.
        """

        raise NotImplementedError

    def update_unpaid(
        self,
        *,
        salary_id: int,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
        late_days: int,
        late_deduction: Decimal,
        notes: Optional[str],
    ) -> bool:
        """Returns False if the record is gone or no longer UNPAID."""

        raise NotImplementedError

    def mark_paid(
        self,
        *,
        salary_id: int,
        payment_account: str,
        transaction_id: Optional[str],
        paid_by: str,
        paid_date: datetime,
    ) -> bool:
        """UNPAID -> PAID; returns False if the record was not UNPAID."""

        raise NotImplementedError

    def delete_unpaid(self, salary_id: int) -> bool:
        raise NotImplementedError
