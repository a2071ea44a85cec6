"""Calendar-day arithmetic.

Everything here is a pure function of its arguments. The only function that
reads the system clock is ``local_now()``, and it is meant for the CLI and
service edges; the review engine always receives ``now`` explicitly.

Day arithmetic is done on the wall clock: ``add_days`` adds whole calendar
days and keeps the time of day, so an aware datetime that crosses a DST
transition still lands on the same local hour.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta


def local_now() -> datetime:
    """Return the current local time as a naive datetime."""
    return datetime.now()


def to_day(value: date | datetime) -> date:
    """Normalize a date or datetime to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: datetime) -> datetime:
    """Midnight of the same calendar day, keeping tzinfo."""
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def end_of_day(value: datetime) -> datetime:
    """Last whole second of the same calendar day."""
    return start_of_day(value) + timedelta(days=1) - timedelta(seconds=1)


def add_days(value: date | datetime, days: int) -> date | datetime:
    return value + timedelta(days=days)


def yesterday(value: date) -> date:
    return value - timedelta(days=1)


def tomorrow(value: date) -> date:
    return value + timedelta(days=1)


def is_same_day(a: date | datetime, b: date | datetime) -> bool:
    return to_day(a) == to_day(b)


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (to_day(end) - to_day(start)).days


# Weeks start on Monday


def day_of_week_index(value: date) -> int:
    """Monday=0 .. Sunday=6."""
    return value.weekday()


def start_of_week(value: date) -> date:
    return value - timedelta(days=value.weekday())


def end_of_week(value: date) -> date:
    return start_of_week(value) + timedelta(days=6)


def week_days(value: date) -> list[date]:
    start = start_of_week(value)
    return [start + timedelta(days=offset) for offset in range(7)]


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def days_in_month(value: date) -> int:
    return calendar.monthrange(value.year, value.month)[1]


def end_of_month(value: date) -> date:
    return value.replace(day=days_in_month(value))
