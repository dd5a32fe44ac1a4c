from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

from ..core.constants import SATURDAY, SERVICE_WEEKDAYS, STRICT_DATE_PATTERN, SUNDAY
from ..core.enums import WeekdayBucket
from ..core.exceptions import InvalidDateError

_DATE_TOKEN = re.compile(STRICT_DATE_PATTERN)


def is_date_token(value: object) -> bool:
    """True when value is a YYYY-MM-DD string (shape only, not calendar validity)."""
    return isinstance(value, str) and bool(_DATE_TOKEN.match(value.strip()))


def parse_strict_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD token into a date.

    Raises InvalidDateError for any other shape or for impossible dates
    such as 2026-02-30.
    """
    token = (value or "").strip()
    if not _DATE_TOKEN.match(token):
        raise InvalidDateError(f"Invalid date format ({value}), expected YYYY-MM-DD")
    try:
        return datetime.strptime(token, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(f"Invalid calendar date ({value})")


def day_of(value: date | datetime) -> date:
    """Reduce a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now()


def service_days(start: date, end: date) -> list[date]:
    """Every Saturday and Sunday in [start, end], ascending."""
    start, end = day_of(start), day_of(end)
    days: list[date] = []
    current = start
    while current <= end:
        if current.weekday() in SERVICE_WEEKDAYS:
            days.append(current)
        current += timedelta(days=1)
    return days


def weekday_bucket(value: date | datetime) -> WeekdayBucket:
    weekday = day_of(value).weekday()
    if weekday == SATURDAY:
        return WeekdayBucket.SATURDAY
    if weekday == SUNDAY:
        return WeekdayBucket.SUNDAY
    return WeekdayBucket.OTHER


def month_range(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise InvalidDateError(f"Invalid month ({month})")
    last = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last)


def week_range(value: date | datetime) -> tuple[date, date]:
    """Monday..Sunday week containing the given day."""
    day = day_of(value)
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)
