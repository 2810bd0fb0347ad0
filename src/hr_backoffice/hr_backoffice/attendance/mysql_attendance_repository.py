from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .strategies.base import CheckInDecision, CheckOutDecision

_COLUMNS = """
    attendance_id, employee_id, work_date, check_in_time, check_out_time, status,
    is_half_day, late_marks, early_leave_marks, overtime_minutes
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=normalize_mysql_time(r.get("check_in_time")),
        check_out_time=normalize_mysql_time(r.get("check_out_time")),
        status=AttendanceStatus(r["status"]),
        is_half_day=bool(r.get("is_half_day")),
        late_marks=int(r.get("late_marks") or 0),
        early_leave_marks=int(r.get("early_leave_marks") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY work_date ASC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s
                ORDER BY check_in_time DESC
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: time,
        decision: CheckInDecision,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time, status, is_half_day, late_marks)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        work_date,
                        check_in_time,
                        decision.status.value,
                        int(decision.is_half_day),
                        int(decision.late_marks),
                    ),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise AlreadyCheckedIn("Already checked in today") from exc
            raise

    def update_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: time,
        decision: CheckInDecision,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, status=%s, is_half_day=%s, late_marks=%s
                WHERE attendance_id=%s AND check_in_time IS NULL
                """,
                (
                    check_in_time,
                    decision.status.value,
                    int(decision.is_half_day),
                    int(decision.late_marks),
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: time,
        decision: CheckOutDecision,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, status=%s, is_half_day=%s, early_leave_marks=%s, overtime_minutes=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (
                    check_out_time,
                    decision.status.value,
                    int(decision.is_half_day),
                    int(decision.early_leave_marks),
                    int(decision.overtime_minutes),
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def update_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, is_half_day=%s
                WHERE attendance_id=%s
                """,
                (status.value, int(status.is_half_day), int(attendance_id)),
            )
            return cur.rowcount > 0

    def delete_before(self, *, cutoff: date, limit: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE work_date < %s ORDER BY work_date ASC LIMIT %s",
                (cutoff, int(limit)),
            )
            return int(cur.rowcount)
