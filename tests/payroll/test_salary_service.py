from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hr_backoffice.hr_backoffice.core.enums import AttendanceStatus, SalaryStatus
from src.hr_backoffice.hr_backoffice.core.exceptions import (
    AlreadyPaid,
    CannotDeletePaidRecord,
    CannotModifyPaidRecord,
    DuplicateSalaryRecord,
    EmployeeNotFound,
    RecordNotFound,
    ValidationError,
)
from src.hr_backoffice.hr_backoffice.payroll.service import SalaryService

from conftest import make_record


@pytest.fixture
def service(salaries_repo, employees, attendance_repo, clock):
    return SalaryService(salaries_repo, employees, attendance_repo, clock)


def test_calculate_counts_late_records_in_month(service, attendance_repo):
    for i, day in enumerate([3, 4, 5, 6, 7, 10, 11]):
        attendance_repo.add(make_record(i + 1, 1, date(2025, 3, day), AttendanceStatus.LATE))
    attendance_repo.add(make_record(20, 1, date(2025, 3, 12), AttendanceStatus.PRESENT))
    attendance_repo.add(make_record(21, 1, date(2025, 2, 28), AttendanceStatus.LATE))

    result = service.calculate(1, "March", 2025)

    assert result.to_dict() == {
        "lateDays": 7,
        "deductibleDays": 2,
        "deductionAmount": 2000,
        "basicSalary": 30000,
        "dailyRate": 1000,
    }


def test_calculate_unknown_employee(service):
    with pytest.raises(EmployeeNotFound):
        service.calculate(42, "March", 2025)


def test_create_uses_employee_base_salary_and_computes_net(service):
    record = service.create(employee_id=1, month="march", year=2025, allowances="1500", deductions=2000)

    assert record.status == SalaryStatus.UNPAID
    assert record.month == "March"
    assert record.basic_salary == Decimal("30000.00")
    assert record.net_salary == Decimal("29500.00")


def test_create_rejects_duplicate_period(service):
    service.create(employee_id=1, month="March", year=2025)
    with pytest.raises(DuplicateSalaryRecord):
        service.create(employee_id=1, month=3, year=2025)


def test_create_rejects_bad_input(service):
    with pytest.raises(ValidationError):
        service.create(employee_id=1, month="Smarch", year=2025)
    with pytest.raises(ValidationError):
        service.create(employee_id=1, month="March", year=2025, allowances=-5)
    with pytest.raises(ValidationError):
        service.create(employee_id=1, month="March", year=2025, late_days="x")
    with pytest.raises(ValidationError):
        service.create(employee_id=1, month="March", year=10000)


def test_update_recomputes_net(service):
    record = service.create(employee_id=2, month="April", year=2025)

    updated = service.update(record.salary_id, allowances=5000, deductions="1250.50", notes="bonus")

    assert updated.net_salary == updated.basic_salary + updated.allowances - updated.deductions
    assert updated.net_salary == Decimal("48749.50")
    assert updated.notes == "bonus"


def test_update_rejects_unknown_fields(service):
    record = service.create(employee_id=2, month="April", year=2025)
    with pytest.raises(ValidationError):
        service.update(record.salary_id, status="Paid")


def test_pay_stamps_payment_details(service, clock):
    record = service.create(employee_id=1, month="March", year=2025)

    paid = service.pay(record.salary_id, payment_account="BANK-01", transaction_id="TX-9")

    assert paid.status == SalaryStatus.PAID
    assert paid.payment_account == "BANK-01"
    assert paid.transaction_id == "TX-9"
    assert paid.paid_by == "Manager"
    assert paid.paid_date == datetime(2025, 3, 10, 9, 0, 0)


def test_pay_requires_account(service):
    record = service.create(employee_id=1, month="March", year=2025)
    with pytest.raises(ValidationError):
        service.pay(record.salary_id, payment_account="  ")


def test_paid_record_is_immutable(service, salaries_repo):
    record = service.create(employee_id=1, month="March", year=2025)
    service.pay(record.salary_id, payment_account="BANK-01")
    before = salaries_repo.get_by_id(record.salary_id)

    with pytest.raises(AlreadyPaid):
        service.pay(record.salary_id, payment_account="BANK-02")
    with pytest.raises(CannotModifyPaidRecord):
        service.update(record.salary_id, allowances=100)
    with pytest.raises(CannotDeletePaidRecord):
        service.delete(record.salary_id)

    assert salaries_repo.get_by_id(record.salary_id) == before


def test_delete_unpaid(service, salaries_repo):
    record = service.create(employee_id=1, month="March", year=2025)
    service.delete(record.salary_id)

    assert salaries_repo.get_by_id(record.salary_id) is None
    with pytest.raises(RecordNotFound):
        service.delete(record.salary_id)


def test_list_totals_and_filters(service):
    a = service.create(employee_id=1, month="March", year=2025)
    service.create(employee_id=2, month="March", year=2025)
    service.create(employee_id=1, month="February", year=2025)
    service.pay(a.salary_id, payment_account="BANK-01")

    listing = service.list(month="March", year=2025)
    assert len(listing.records) == 2
    assert listing.total_paid == Decimal("30000.00")
    assert listing.total_pending == Decimal("45000.00")

    unpaid = service.list(status="Unpaid", employee_id=1)
    assert [r.month for r in unpaid.records] == ["February"]

    # Legacy spelling of the unpaid state.
    assert len(service.list(status="Pending").records) == 2

    with pytest.raises(ValidationError):
        service.list(status="Cancelled")


def test_employee_overall_and_stats(service):
    a = service.create(employee_id=1, month="January", year=2025)
    service.create(employee_id=1, month="February", year=2025)
    service.pay(a.salary_id, payment_account="BANK-01")

    overall = service.employee_overall(1)
    assert overall["stats"] == {"totalPaid": 30000, "totalPending": 30000, "recordCount": 2}
    assert [r["month"] for r in overall["data"]] == ["February", "January"]

    stats = {row["employeeId"]: row for row in service.overall_stats()}
    assert set(stats) == {1, 2}
    assert stats[2]["recordCount"] == 0


def test_update_rejects_non_numeric_late_days(service, salaries_repo):
    record = service.create(employee_id=1, month="March", year=2025, late_days=2)

    with pytest.raises(ValidationError):
        service.update(record.salary_id, late_days="abc")
    with pytest.raises(ValidationError):
        service.update(record.salary_id, late_days=-3)

    assert salaries_repo.get_by_id(record.salary_id).late_days == 2
    assert service.update(record.salary_id, late_days="5").late_days == 5


def test_calculate_rejects_out_of_range_year(service):
    with pytest.raises(ValidationError):
        service.calculate(1, "March", 10000)
