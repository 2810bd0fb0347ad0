from datetime import date, time
from decimal import Decimal

import pytest
from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from src.hr_backoffice.hr_backoffice.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.hr_backoffice.hr_backoffice.attendance.strategies.base import CheckInDecision
from src.hr_backoffice.hr_backoffice.core.enums import AttendanceStatus
from src.hr_backoffice.hr_backoffice.core.exceptions import AlreadyCheckedIn, DuplicateSalaryRecord, TransientStoreError
from src.hr_backoffice.hr_backoffice.database.mysql_base import is_duplicate_key
from src.hr_backoffice.hr_backoffice.payroll.mysql_salary_repository import MySQLSalaryRepository


def duplicate_entry():
    return mysql_errors.IntegrityError(msg="Duplicate entry for key 'uq_period'", errno=errorcode.ER_DUP_ENTRY)


def foreign_key_failure():
    return mysql_errors.IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)


class FailingCursor:
    def __init__(self, error):
        self._error = error
        self.closed = False

    def execute(self, sql, params=None):
        raise self._error

    def close(self):
        self.closed = True


class RecordingConnection:
    def __init__(self, error):
        self.cur = FailingCursor(error)
        self.committed = self.rolled_back = self.closed = False

    def cursor(self, dictionary=False):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class SingleConnectionFactory:
    def __init__(self, error):
        self.conn = RecordingConnection(error)

    def connect(self):
        return self.conn


def _check_in(repo):
    return repo.create_checkin(
        employee_id=1,
        work_date=date(2025, 3, 10),
        check_in_time=time(9, 0),
        decision=CheckInDecision(status=AttendanceStatus.PRESENT),
    )


def _create_salary(repo):
    return repo.create(
        employee_id=1,
        month="March",
        year=2025,
        basic_salary=Decimal("30000.00"),
        allowances=Decimal("0.00"),
        deductions=Decimal("0.00"),
        net_salary=Decimal("30000.00"),
    )


def test_is_duplicate_key_only_matches_dup_entry():
    assert is_duplicate_key(duplicate_entry()) is True
    assert is_duplicate_key(foreign_key_failure()) is False
    assert is_duplicate_key(mysql_errors.DatabaseError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)) is False
    assert is_duplicate_key(ValueError("Duplicate entry")) is False


def test_duplicate_check_in_row_is_already_checked_in():
    factory = SingleConnectionFactory(duplicate_entry())

    with pytest.raises(AlreadyCheckedIn):
        _check_in(MySQLAttendanceRepository(factory))

    conn = factory.conn
    assert (conn.committed, conn.rolled_back, conn.closed, conn.cur.closed) == (False, True, True, True)


def test_duplicate_salary_row_is_duplicate_salary_record():
    factory = SingleConnectionFactory(duplicate_entry())

    with pytest.raises(DuplicateSalaryRecord):
        _create_salary(MySQLSalaryRepository(factory))

    assert factory.conn.rolled_back is True


def test_other_integrity_errors_propagate_unchanged():
    error = foreign_key_failure()

    with pytest.raises(mysql_errors.IntegrityError) as attendance_exc:
        _check_in(MySQLAttendanceRepository(SingleConnectionFactory(error)))
    with pytest.raises(mysql_errors.IntegrityError) as salary_exc:
        _create_salary(MySQLSalaryRepository(SingleConnectionFactory(error)))

    assert attendance_exc.value is error
    assert salary_exc.value is error


def test_lost_connection_mid_statement_is_transient():
    factory = SingleConnectionFactory(mysql_errors.OperationalError(msg="Lost connection", errno=errorcode.CR_SERVER_LOST))

    with pytest.raises(TransientStoreError):
        _create_salary(MySQLSalaryRepository(factory))

    assert factory.conn.closed is True
