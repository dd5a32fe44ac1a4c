from datetime import date, datetime

import pytest

from src.choir_attendance.choir_attendance.common.datetime_utils import (
    day_of,
    is_date_token,
    month_range,
    parse_strict_date,
    service_days,
    week_range,
    weekday_bucket,
)
from src.choir_attendance.choir_attendance.core.enums import WeekdayBucket
from src.choir_attendance.choir_attendance.core.exceptions import InvalidDateError


def test_service_days_february_2026_has_four_saturdays_and_four_sundays():
    days = service_days(date(2026, 2, 1), date(2026, 2, 28))

    assert len(days) == 8
    assert days == sorted(set(days))
    assert all(d.weekday() in (5, 6) for d in days)
    assert days[0] == date(2026, 2, 1)
    assert days[-1] == date(2026, 2, 28)
    assert sum(1 for d in days if weekday_bucket(d) == WeekdayBucket.SATURDAY) == 4


def test_service_days_is_inclusive_and_empty_for_reversed_range():
    assert service_days(date(2026, 2, 7), date(2026, 2, 7)) == [date(2026, 2, 7)]
    assert service_days(date(2026, 2, 9), date(2026, 2, 13)) == []
    assert service_days(date(2026, 2, 28), date(2026, 2, 1)) == []


def test_weekday_bucket():
    assert weekday_bucket(date(2026, 2, 7)) == WeekdayBucket.SATURDAY
    assert weekday_bucket(datetime(2026, 2, 8, 23, 59)) == WeekdayBucket.SUNDAY
    assert weekday_bucket(date(2026, 2, 9)) == WeekdayBucket.OTHER


def test_parse_strict_date_accepts_only_yyyy_mm_dd():
    assert parse_strict_date(" 2026-02-01 ") == date(2026, 2, 1)

    for bad in ("2026/02/01", "2026-2-1", "01-02-2026", "", "2026-02-30"):
        with pytest.raises(InvalidDateError):
            parse_strict_date(bad)


def test_is_date_token_checks_shape_only():
    assert is_date_token("2026-02-30")
    assert not is_date_token("Name")
    assert not is_date_token(date(2026, 2, 1))


def test_ranges():
    assert week_range(date(2026, 2, 11)) == (date(2026, 2, 9), date(2026, 2, 15))
    assert week_range(date(2026, 2, 15)) == (date(2026, 2, 9), date(2026, 2, 15))
    assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(InvalidDateError):
        month_range(2026, 13)


def test_day_of_drops_time():
    assert day_of(datetime(2026, 2, 1, 23, 59, 59)) == date(2026, 2, 1)
    assert day_of(date(2026, 2, 1)) == date(2026, 2, 1)
