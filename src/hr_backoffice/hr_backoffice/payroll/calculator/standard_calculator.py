from __future__ import annotations

from decimal import Decimal

from ...common.money import round_to_unit, to_money
from ...core.constants import LATES_PER_DEDUCTIBLE_DAY, SALARY_MONTH_DAYS
from ...core.exceptions import ValidationError
from .base import DeductionCalculator, DeductionResult


class LateMarkDeductionCalculator(DeductionCalculator):
    """Standard rule: every 3 late days cost one day at base / 30.

    Leftover late days (1 or 2) are not pro-rated.
    """

    def __init__(self, *, month_days: int = SALARY_MONTH_DAYS, lates_per_day: int = LATES_PER_DEDUCTIBLE_DAY):
        self._month_days = int(month_days)
        self._lates_per_day = int(lates_per_day)

    def calculate(self, base_salary: Decimal, late_count: int) -> DeductionResult:
        if late_count is None or int(late_count) < 0:
            raise ValidationError("late count must be a non-negative integer")
        base = Decimal(str(base_salary or 0))
        if base < 0:
            raise ValidationError("base salary must be non-negative")

        daily_rate = base / self._month_days
        deductible_days = int(late_count) // self._lates_per_day
        return DeductionResult(
            late_count=int(late_count),
            deductible_days=deductible_days,
            daily_rate=to_money(daily_rate),
            deduction_amount=round_to_unit(daily_rate * deductible_days),
        )


def calculate_deduction(base_salary: Decimal, late_count: int) -> DeductionResult:
    return LateMarkDeductionCalculator().calculate(base_salary, late_count)
