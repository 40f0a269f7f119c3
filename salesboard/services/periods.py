"""Resolve named reporting periods into inclusive date ranges."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Union

from salesboard.core.config import settings
from salesboard.services.errors import ValidationError

FORTNIGHT_DAYS = 15

# Query-string spellings used by the dashboard client.
_ALIASES = {
    "dia": "day",
    "semana": "week",
    "quinzena": "fortnight",
    "mes": "month",
    "mês": "month",
}


class PeriodError(ValidationError):
    pass


class Period(str, Enum):
    DAY = "day"
    WEEK = "week"
    FORTNIGHT = "fortnight"
    MONTH = "month"

    @classmethod
    def parse(cls, value: Union[str, "Period", None]) -> Optional["Period"]:
        """Map a query value (English or Portuguese) to a Period; ``None`` passes through."""
        if value is None or isinstance(value, Period):
            return value
        key = value.strip().lower()
        if not key:
            return None
        try:
            return cls(_ALIASES.get(key, key))
        except ValueError:
            raise PeriodError(
                f"Unknown period '{value}'. Use one of: day, week, fortnight, month"
            ) from None


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def _as_date(reference: Union[date, datetime]) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def week_bounds(day: date, week_start: Optional[str] = None) -> DateRange:
    first_weekday = 6 if (week_start or settings.week_start) == "sunday" else 0
    offset = (day.weekday() - first_weekday) % 7
    start = day - timedelta(days=offset)
    return DateRange(start=start, end=start + timedelta(days=6))


def days_in_month(reference: Union[date, datetime]) -> int:
    day = _as_date(reference)
    return calendar.monthrange(day.year, day.month)[1]


def days_passed_in_month(reference: Union[date, datetime]) -> int:
    """Days elapsed in the month, counting the 1st as day 1."""
    day = _as_date(reference)
    return (day - day.replace(day=1)).days + 1


def resolve(
    period: Period,
    reference: Union[date, datetime],
    *,
    week_start: Optional[str] = None,
) -> DateRange:
    day = _as_date(reference)
    if period is Period.DAY:
        return DateRange(start=day, end=day)
    if period is Period.WEEK:
        return week_bounds(day, week_start)
    if period is Period.FORTNIGHT:
        return DateRange(start=day - timedelta(days=FORTNIGHT_DAYS - 1), end=day)
    if period is Period.MONTH:
        return DateRange(start=day.replace(day=1), end=day)
    raise PeriodError(f"Unsupported period {period!r}")
