from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..common.clock import Clock
from ..common.money import to_money
from ..core.constants import DEFAULT_BATCH_SIZE
from ..core.exceptions import DuplicateSalaryRecord
from ..employees.repository import EmployeeDirectory
from .model import compute_net
from .repository import SalaryRepository
from .service import normalize_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollBatchResult:
    month: str
    year: int
    created_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "createdCount": self.created_count,
            "skippedCount": self.skipped_count,
            "failedCount": self.failed_count,
        }


class MonthlyPayrollJob:
    """Seeds one UNPAID salary record per active employee for a month.

    Idempotent: employees that already have a record are skipped, so a
    crashed run is recovered by running it again.
    """

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeDirectory,
        clock: Clock,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if int(batch_size) <= 0:
            raise ValueError("batch_size must be positive")
        self._salaries = salaries
        self._employees = employees
        self._clock = clock
        self._batch_size = int(batch_size)

    def run(self, *, month: Any = None, year: Any = None) -> PayrollBatchResult:
        if month is None or year is None:
            now = self._clock.now()
            month = month or now.month
            year = year or now.year
        month, year = normalize_period(month, year)

        employees = list(self._employees.list_active())
        created = skipped = failed = 0

        for start in range(0, len(employees), self._batch_size):
            chunk = employees[start : start + self._batch_size]
            for emp in chunk:
                if self._salaries.get_for_period(emp.employee_id, month, year):
                    skipped += 1
                    continue

                basic = to_money(emp.base_salary)
                try:
                    self._salaries.create(
                        employee_id=emp.employee_id,
                        month=month,
                        year=year,
                        basic_salary=basic,
                        allowances=to_money(0),
                        deductions=to_money(0),
                        net_salary=compute_net(basic, 0, 0),
                    )
                    created += 1
                except DuplicateSalaryRecord:
                    # A concurrent run created it first.
                    skipped += 1
                except Exception:
                    logger.exception("Payroll batch failed for employee %s (%s %s)", emp.employee_id, month, year)
                    failed += 1
            logger.debug("Payroll batch processed %s/%s employees", min(start + self._batch_size, len(employees)), len(employees))

        logger.info(
            "Payroll batch %s %s: created=%s skipped=%s failed=%s",
            month,
            year,
            created,
            skipped,
            failed,
        )
        return PayrollBatchResult(month=month, year=year, created_count=created, skipped_count=skipped, failed_count=failed)
