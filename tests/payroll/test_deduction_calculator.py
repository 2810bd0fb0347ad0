from decimal import Decimal

import pytest

from src.hr_backoffice.hr_backoffice.core.exceptions import ValidationError
from src.hr_backoffice.hr_backoffice.payroll.calculator.standard_calculator import (
    LateMarkDeductionCalculator,
    calculate_deduction,
)


def test_seven_lates_on_30000_cost_two_days():
    result = calculate_deduction(Decimal("30000"), 7)

    assert result.daily_rate == Decimal("1000.00")
    assert result.deductible_days == 2
    assert result.deduction_amount == Decimal("2000")


@pytest.mark.parametrize("late, days", [(0, 0), (1, 0), (2, 0), (3, 1), (5, 1), (6, 2), (9, 3)])
def test_deductible_days_step_every_three_lates(late, days):
    assert calculate_deduction(Decimal("30000"), late).deductible_days == days


def test_deduction_rounds_half_up_to_whole_units():
    # 25000 / 30 = 833.333...; one day rounds to 833, two to 1667.
    assert calculate_deduction(Decimal("25000"), 3).deduction_amount == Decimal("833")
    assert calculate_deduction(Decimal("25000"), 6).deduction_amount == Decimal("1667")
    # 15 / 30 * 1 = 0.5 rounds up.
    assert calculate_deduction(Decimal("15"), 3).deduction_amount == Decimal("1")


def test_zero_salary_has_no_deduction():
    assert calculate_deduction(Decimal("0"), 9).deduction_amount == Decimal("0")


def test_negative_inputs_are_rejected():
    calc = LateMarkDeductionCalculator()
    with pytest.raises(ValidationError):
        calc.calculate(Decimal("30000"), -1)
    with pytest.raises(ValidationError):
        calc.calculate(Decimal("-1"), 3)


def test_custom_rule():
    calc = LateMarkDeductionCalculator(month_days=26, lates_per_day=2)
    result = calc.calculate(Decimal("26000"), 5)
    assert result.deductible_days == 2
    assert result.deduction_amount == Decimal("2000")
