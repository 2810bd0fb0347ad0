from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..common.datetime_utils import MONTH_NAMES
from ..core.enums import SalaryStatus
from ..core.exceptions import DuplicateSalaryRecord
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import SalaryRecord
from .repository import SalaryRepository

_COLUMNS = """
    salary_id, employee_id, month, year, basic_salary, allowances, deductions,
    late_days, late_deduction, net_salary, status, payment_account, transaction_id,
    paid_by, paid_date, notes
"""

# Month is stored by name; order periods by calendar position.
_MONTH_ORDER = "FIELD(month, {})".format(", ".join(f"'{m}'" for m in MONTH_NAMES))


def _to_record(r: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        employee_id=int(r["employee_id"]),
        month=r["month"],
        year=int(r["year"]),
        basic_salary=Decimal(r.get("basic_salary") or 0),
        allowances=Decimal(r.get("allowances") or 0),
        deductions=Decimal(r.get("deductions") or 0),
        late_days=int(r.get("late_days") or 0),
        late_deduction=Decimal(r.get("late_deduction") or 0),
        net_salary=Decimal(r.get("net_salary") or 0),
        status=SalaryStatus.parse(r["status"]),
        payment_account=r.get("payment_account"),
        transaction_id=r.get("transaction_id"),
        paid_by=r.get("paid_by"),
        paid_date=r.get("paid_date"),
        notes=r.get("notes"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_records WHERE salary_id=%s", (int(salary_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_period(self, employee_id: int, month: str, year: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_records
                WHERE employee_id=%s AND month=%s AND year=%s
                """,
                (int(employee_id), month, int(year)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_filtered(
        self,
        *,
        month: Optional[str] = None,
        year: Optional[int] = None,
        status: Optional[SalaryStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if month is not None:
            clauses.append("month=%s")
            params.append(month)
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if status == SalaryStatus.PAID:
            clauses.append("status=%s")
            params.append(status.value)
        elif status is not None:
            clauses.append("status<>%s")
            params.append(SalaryStatus.PAID.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_records {where} ORDER BY year DESC, {_MONTH_ORDER} DESC, salary_id DESC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO salary_records(
                        employee_id, month, year, basic_salary, allowances, deductions,
                        late_days, late_deduction, net_salary, status, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        month,
                        int(year),
                        basic_salary,
                        allowances,
                        deductions,
                        int(late_days),
                        late_deduction,
                        net_salary,
                        SalaryStatus.UNPAID.value,
                        notes,
                    ),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateSalaryRecord(f"Salary record already exists for {month} {year}") from exc
            raise

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_records
                SET basic_salary=%s, allowances=%s, deductions=%s, net_salary=%s,
                    late_days=%s, late_deduction=%s, notes=%s
                WHERE salary_id=%s AND status<>%s
                """,
                (
                    basic_salary,
                    allowances,
                    deductions,
                    net_salary,
                    int(late_days),
                    late_deduction,
                    notes,
                    int(salary_id),
                    SalaryStatus.PAID.value,
                ),
            )
            return cur.rowcount > 0

    def mark_paid(
        self,
        *,
        salary_id: int,
        payment_account: str,
        transaction_id: Optional[str],
        paid_by: str,
        paid_date: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_records
                SET status=%s, payment_account=%s, transaction_id=%s, paid_by=%s, paid_date=%s
                WHERE salary_id=%s AND status<>%s
                """,
                (
                    SalaryStatus.PAID.value,
                    payment_account,
                    transaction_id,
                    paid_by,
                    paid_date,
                    int(salary_id),
                    SalaryStatus.PAID.value,
                ),
            )
            return cur.rowcount > 0

    def delete_unpaid(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM salary_records WHERE salary_id=%s AND status<>%s",
                (int(salary_id), SalaryStatus.PAID.value),
            )
            return cur.rowcount > 0
