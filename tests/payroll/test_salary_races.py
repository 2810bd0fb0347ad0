from dataclasses import replace

import pytest

from src.hr_backoffice.hr_backoffice.core.enums import SalaryStatus
from src.hr_backoffice.hr_backoffice.core.exceptions import (
    AlreadyPaid,
    CannotDeletePaidRecord,
    CannotModifyPaidRecord,
    DuplicateSalaryRecord,
    RecordNotFound,
)
from src.hr_backoffice.hr_backoffice.payroll.batch import MonthlyPayrollJob
from src.hr_backoffice.hr_backoffice.payroll.service import SalaryService

from conftest import FakeSalaries


class PaidMeanwhileSalaries(FakeSalaries):
    """Another manager pays the record right before each guarded write."""

    def _pay_first(self, salary_id):
        r = self._by_id.get(int(salary_id))
        if r and not r.is_paid:
            self._by_id[r.salary_id] = replace(r, status=SalaryStatus.PAID, payment_account="OTHER")

    def mark_paid(self, **kwargs):
        self._pay_first(kwargs["salary_id"])
        return super().mark_paid(**kwargs)

    def update_unpaid(self, **kwargs):
        self._pay_first(kwargs["salary_id"])
        return super().update_unpaid(**kwargs)

    def delete_unpaid(self, salary_id):
        self._pay_first(salary_id)
        return super().delete_unpaid(salary_id)


class DeletedMeanwhileSalaries(FakeSalaries):
    def update_unpaid(self, **kwargs):
        self._by_id.pop(int(kwargs["salary_id"]), None)
        return super().update_unpaid(**kwargs)


class StalePeriodLookupSalaries(FakeSalaries):
    """Period lookups never see rows written by a concurrent run."""

    def get_for_period(self, employee_id, month, year):
        return None

    def create(self, **kwargs):
        if super().get_for_period(kwargs["employee_id"], kwargs["month"], kwargs["year"]):
            raise DuplicateSalaryRecord("Salary record already exists")
        return super().create(**kwargs)


@pytest.fixture
def racing_salaries():
    return PaidMeanwhileSalaries()


def _service(salaries, employees, attendance_repo, clock):
    return SalaryService(salaries, employees, attendance_repo, clock)


def test_pay_losing_race_is_already_paid(racing_salaries, employees, attendance_repo, clock):
    service = _service(racing_salaries, employees, attendance_repo, clock)
    record = service.create(employee_id=1, month="March", year=2025)

    with pytest.raises(AlreadyPaid):
        service.pay(record.salary_id, payment_account="BANK-01")

    assert racing_salaries.get_by_id(record.salary_id).payment_account == "OTHER"


def test_update_losing_race_is_cannot_modify(racing_salaries, employees, attendance_repo, clock):
    service = _service(racing_salaries, employees, attendance_repo, clock)
    record = service.create(employee_id=1, month="March", year=2025)

    with pytest.raises(CannotModifyPaidRecord):
        service.update(record.salary_id, allowances=100)

    assert racing_salaries.get_by_id(record.salary_id).allowances == record.allowances


def test_delete_losing_race_is_cannot_delete(racing_salaries, employees, attendance_repo, clock):
    service = _service(racing_salaries, employees, attendance_repo, clock)
    record = service.create(employee_id=1, month="March", year=2025)

    with pytest.raises(CannotDeletePaidRecord):
        service.delete(record.salary_id)

    assert racing_salaries.get_by_id(record.salary_id) is not None


def test_update_of_concurrently_deleted_record_is_not_found(employees, attendance_repo, clock):
    salaries = DeletedMeanwhileSalaries()
    service = _service(salaries, employees, attendance_repo, clock)
    record = service.create(employee_id=1, month="March", year=2025)

    with pytest.raises(RecordNotFound):
        service.update(record.salary_id, allowances=100)


def test_payroll_batch_counts_duplicate_insert_as_skipped(employees, clock):
    salaries = StalePeriodLookupSalaries()
    job = MonthlyPayrollJob(salaries, employees, clock)

    first = job.run(month="March", year=2025)
    second = job.run(month="March", year=2025)

    assert first.created_count == 2
    assert second.to_dict() == {"month": "March", "year": 2025, "createdCount": 0, "skippedCount": 2, "failedCount": 0}
    assert len(salaries.all()) == 2
