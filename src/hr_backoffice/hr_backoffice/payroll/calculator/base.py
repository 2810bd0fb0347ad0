from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class DeductionResult:
    late_count: int
    deductible_days: int
    daily_rate: Decimal
    deduction_amount: Decimal


class DeductionCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, base_salary: Decimal, late_count: int) -> DeductionResult:
        raise NotImplementedError
