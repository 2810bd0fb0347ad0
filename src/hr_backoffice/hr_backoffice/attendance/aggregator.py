"""Attendance statistics over stored records.

All functions are pure; callers fetch the window from the repository.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.constants import ABSENCE_DISCIPLINARY_STREAK, ABSENCE_WARNING_STREAK
from ..core.enums import AbsenceLevel, AttendanceStatus
from .model import AttendanceRecord


@dataclass(frozen=True)
class AttendanceStats:
    present: int = 0
    late: int = 0
    half_day: int = 0
    absent: int = 0
    early_leave: int = 0
    overtime_minutes: int = 0

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "late": self.late,
            "halfDay": self.half_day,
            "absent": self.absent,
            "earlyLeave": self.early_leave,
            "overtimeMinutes": self.overtime_minutes,
        }


@dataclass(frozen=True)
class MonthlyTotals:
    """Totals printed on the monthly attendance report."""

    present_days: int = 0
    late_marks: int = 0
    early_leave_marks: int = 0
    absent_days: int = 0
    half_days: int = 0
    overtime_minutes: int = 0

    def to_dict(self) -> dict:
        return {
            "present": self.present_days,
            "lateMarks": self.late_marks,
            "earlyLeaveMarks": self.early_leave_marks,
            "absent": self.absent_days,
            "halfDay": self.half_days,
            "overtimeMinutes": self.overtime_minutes,
            "overtimeHours": round(self.overtime_minutes / 60, 1),
        }


@dataclass(frozen=True)
class AbsenceStreak:
    consecutive_absents: int
    level: Optional[AbsenceLevel]


def summarize(records: Iterable[AttendanceRecord]) -> AttendanceStats:
    present = late = half_day = absent = early_leave = overtime = 0
    for r in records:
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.LATE:
            late += 1
        elif r.status == AttendanceStatus.ABSENT:
            absent += 1
        # Older rows may only carry the flag.
        if r.counts_as_half_day:
            half_day += 1
        if (r.early_leave_marks or 0) > 0:
            early_leave += 1
        overtime += r.overtime_minutes or 0

    return AttendanceStats(
        present=present,
        late=late,
        half_day=half_day,
        absent=absent,
        early_leave=early_leave,
        overtime_minutes=overtime,
    )


def monthly_totals(records: Iterable[AttendanceRecord]) -> MonthlyTotals:
    rows = list(records)
    return MonthlyTotals(
        present_days=sum(1 for r in rows if r.status == AttendanceStatus.PRESENT),
        late_marks=sum(r.late_marks or 0 for r in rows),
        early_leave_marks=sum(r.early_leave_marks or 0 for r in rows),
        absent_days=sum(1 for r in rows if r.status == AttendanceStatus.ABSENT),
        half_days=sum(1 for r in rows if r.counts_as_half_day),
        overtime_minutes=sum(r.overtime_minutes or 0 for r in rows),
    )


def count_late_days(records: Iterable[AttendanceRecord]) -> int:
    return sum(1 for r in records if r.status == AttendanceStatus.LATE)


def classify_streak(length: int) -> Optional[AbsenceLevel]:
    if length >= ABSENCE_DISCIPLINARY_STREAK:
        return AbsenceLevel.DISCIPLINARY
    if length >= ABSENCE_WARNING_STREAK:
        return AbsenceLevel.WARNING
    return None


def absence_streak(records: Sequence[AttendanceRecord]) -> AbsenceStreak:
    """Consecutive absences counted back from the most recent record.

    Off days are skipped without breaking the streak; any other status ends
    the scan. Records are scanned newest first regardless of input order.
    Two records on the same date cannot exist, so their relative order is
    left to the sort.
    """
    streak = 0
    for r in sorted(records, key=lambda rec: rec.work_date, reverse=True):
        if r.status == AttendanceStatus.ABSENT:
            streak += 1
        elif r.status == AttendanceStatus.OFF:
            continue
        else:
            break
    return AbsenceStreak(consecutive_absents=streak, level=classify_streak(streak))
