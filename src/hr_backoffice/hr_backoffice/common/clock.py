"""Clock/time zone adapter.

The only place that reads the real clock. Everything downstream receives a
``ClockReading`` (calendar date + wall-clock time strings in the civil zone)
so attendance and payroll rules stay pure functions of their inputs.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from .datetime_utils import month_name, parse_iso_date, parse_time_of_day


@dataclass(frozen=True)
class ClockReading:
    date: str  # YYYY-MM-DD
    time: str  # HH:MM:SS

    @property
    def calendar_date(self) -> date:
        return parse_iso_date(self.date)

    @property
    def local_datetime(self) -> datetime:
        """Naive civil datetime, as stored in DATETIME columns."""
        return datetime.combine(self.calendar_date, parse_time_of_day(self.time))

    @property
    def month(self) -> str:
        return month_name(self.calendar_date.month)

    @property
    def year(self) -> int:
        return self.calendar_date.year


class Clock:
    def __init__(self, tz_name: str = DEFAULT_TIMEZONE, *, utcnow: Optional[Callable[[], datetime]] = None):
        self._tz = ZoneInfo(tz_name)
        self._utcnow = utcnow or (lambda: datetime.now(timezone.utc))

    @property
    def tz_name(self) -> str:
        return self._tz.key

    def resolve(self, instant: datetime) -> ClockReading:
        """Convert an aware instant to civil date/time strings."""
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        local = instant.astimezone(self._tz)
        return ClockReading(date=local.strftime("%Y-%m-%d"), time=local.strftime("%H:%M:%S"))

    def now(self) -> ClockReading:
        return self.resolve(self._utcnow())

    def today(self) -> date:
        return self.now().calendar_date
