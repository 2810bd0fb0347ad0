from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, time

from ..core.exceptions import InvalidTimeOfDay, ValidationError

MONTH_NAMES = tuple(calendar.month_name[1:])


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_time_of_day(value: str) -> time:
    """Parse a wall-clock ``HH:MM:SS`` (or ``HH:MM``) string."""
    v = (value or "").strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise InvalidTimeOfDay(f"Invalid time {value!r}, expected HH:MM:SS")


def minutes_since_midnight(value: str | time) -> int:
    """Whole minutes since midnight; seconds are ignored."""
    t = value if isinstance(value, time) else parse_time_of_day(value)
    return t.hour * 60 + t.minute


def format_time(value: time | None) -> str | None:
    return value.strftime("%H:%M:%S") if value is not None else None


def month_index(name: str) -> int:
    """1-based month number for an English month name ("January")."""
    v = (name or "").strip().capitalize()
    if v not in MONTH_NAMES:
        raise ValidationError(f"Invalid month {name!r}")
    return MONTH_NAMES.index(v) + 1


def month_name(index: int) -> str:
    return MONTH_NAMES[index - 1]


def month_bounds(month: str, year: int) -> tuple[date, date]:
    """First and last calendar day of a named month."""
    idx = month_index(month)
    if not MINYEAR <= int(year) <= MAXYEAR:
        raise ValidationError(f"Invalid year {year!r}")
    last_day = calendar.monthrange(int(year), idx)[1]
    return date(int(year), idx, 1), date(int(year), idx, last_day)


def subtract_months(value: date, months: int) -> date:
    """Same day ``months`` earlier, clamped to the end of shorter months."""
    total = value.year * 12 + (value.month - 1) - int(months)
    year, month0 = divmod(total, 12)
    day = min(value.day, calendar.monthrange(year, month0 + 1)[1])
    return date(year, month0 + 1, day)


def normalize_month(value: str | int) -> str:
    """Canonical month name; accepts "march", "March", 3 or "3"."""
    text = str(value if value is not None else "").strip()
    if text.isdigit():
        idx = int(text)
        if not 1 <= idx <= 12:
            raise ValidationError(f"Invalid month {value!r}")
        return month_name(idx)
    return month_name(month_index(text))
