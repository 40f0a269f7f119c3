from datetime import date, datetime

import pytest

from salesboard.services.errors import ValidationError
from salesboard.services.periods import (
    DateRange,
    Period,
    days_in_month,
    days_passed_in_month,
    resolve,
)

MONDAY = datetime(2026, 10, 19, 15, 30)


def test_day_is_the_reference_date():
    assert resolve(Period.DAY, MONDAY) == DateRange(date(2026, 10, 19), date(2026, 10, 19))


def test_week_sunday_start_contains_reference():
    week = resolve(Period.WEEK, MONDAY, week_start="sunday")
    assert week == DateRange(date(2026, 10, 18), date(2026, 10, 24))
    assert week.days == 7
    assert MONDAY.date() in week


def test_week_monday_start():
    week = resolve(Period.WEEK, MONDAY, week_start="monday")
    assert week == DateRange(date(2026, 10, 19), date(2026, 10, 25))


@pytest.mark.parametrize("day", range(18, 25))
def test_every_day_of_a_week_resolves_to_the_same_week(day):
    week = resolve(Period.WEEK, date(2026, 10, day), week_start="sunday")
    assert week.start == date(2026, 10, 18)


def test_fortnight_is_trailing_fifteen_days():
    fortnight = resolve(Period.FORTNIGHT, MONDAY)
    assert fortnight == DateRange(date(2026, 10, 5), date(2026, 10, 19))
    assert fortnight.days == 15


def test_month_window_ends_at_reference():
    month = resolve(Period.MONTH, MONDAY)
    assert month == DateRange(date(2026, 10, 1), date(2026, 10, 19))


def test_days_passed_counts_first_of_month_as_one():
    assert days_passed_in_month(date(2026, 10, 1)) == 1
    assert days_passed_in_month(MONDAY) == 19
    assert days_passed_in_month(date(2026, 10, 31)) == 31


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2026, 2, 10), 28),
        (date(2028, 2, 10), 29),
        (date(2026, 4, 30), 30),
        (date(2026, 12, 1), 31),
    ],
)
def test_days_in_month(day, expected):
    assert days_in_month(day) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("day", Period.DAY),
        ("dia", Period.DAY),
        ("semana", Period.WEEK),
        ("Quinzena", Period.FORTNIGHT),
        ("mes", Period.MONTH),
        ("month", Period.MONTH),
        (None, None),
        ("", None),
    ],
)
def test_parse_period(raw, expected):
    assert Period.parse(raw) is expected


def test_parse_rejects_unknown_period():
    with pytest.raises(ValidationError):
        Period.parse("ano")
