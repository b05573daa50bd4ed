"""Calendar helpers shared by every day- and week-bucketing query."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum


class WeekNumbering(str, Enum):
    """Week-of-year conventions."""

    CALENDAR = "calendar"  # Sunday-first, week 1 contains January 1
    ISO = "iso"


def to_reference(value: datetime, tz: tzinfo) -> datetime:
    """Express an instant in the reference timezone.

    Naive datetimes are taken as wall-clock times in ``tz``; aware ones are
    converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def calendar_day(value: date | datetime, tz: tzinfo) -> date:
    """Truncate an instant to its calendar day in the reference timezone."""
    if isinstance(value, datetime):
        return to_reference(value, tz).date()
    return value


def month_bounds(month: date | datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """Get the first and last instant of the calendar month containing ``month``."""
    day = calendar_day(month, tz)
    last_day = calendar.monthrange(day.year, day.month)[1]
    start = datetime(day.year, day.month, 1, tzinfo=tz)
    end = datetime.combine(date(day.year, day.month, last_day), time.max, tzinfo=tz)
    return start, end


def month_days(month: date | datetime, tz: tzinfo) -> list[date]:
    """All calendar days of the month containing ``month``, in order."""
    day = calendar_day(month, tz)
    last_day = calendar.monthrange(day.year, day.month)[1]
    return [date(day.year, day.month, d) for d in range(1, last_day + 1)]


def _start_of_week(day: date) -> date:
    # date.weekday(): Monday == 0, Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _calendar_week(day: date) -> int:
    this_year = _start_of_week(date(day.year, 1, 1))
    next_year = _start_of_week(date(day.year + 1, 1, 1))

    if day >= next_year:
        first_week = next_year
    elif day >= this_year:
        first_week = this_year
    else:
        first_week = _start_of_week(date(day.year - 1, 1, 1))

    return (_start_of_week(day) - first_week).days // 7 + 1


def week_number(
    day: date, numbering: WeekNumbering = WeekNumbering.CALENDAR
) -> int:
    """Get the week-of-year number of a calendar day.

    Args:
        day: Calendar day (already truncated to the reference timezone)
        numbering: Week convention

    Returns:
        Week number. The last days of December can fall in week 1 and the
        first days of January in week 52/53, depending on the convention.
    """
    if WeekNumbering(numbering) is WeekNumbering.ISO:
        return day.isocalendar()[1]
    return _calendar_week(day)
