"""Calendar-day normalization. Every other module works on plain `date` values."""

import calendar as _calendar
from datetime import date, datetime, timedelta, tzinfo

from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError

from glow.core.errors import ValidationError
from glow.core.models import Weekday

__all__ = [
    "add_days",
    "days_back",
    "days_in_month",
    "month_start",
    "month_title",
    "next_month",
    "to_day",
    "weekday_of",
]


def _default_zone() -> tzinfo:
    from glow.config import get_timezone

    return get_timezone()


def to_day(value: date | datetime | str, tz: tzinfo | None = None) -> date:
    """Normalize a timestamp to the calendar day it falls on in `tz`.

    Aware datetimes are converted into `tz` first; naive ones are already
    wall-clock time there. Strings may be ISO-8601 or anything dateutil reads.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("empty timestamp")
        try:
            value = dateutil_parser.isoparse(text)
        except ValueError:
            try:
                value = dateutil_parser.parse(text)
            except (ParserError, ValueError, OverflowError):
                raise ValidationError(f"unreadable timestamp '{text}'") from None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or _default_zone())
        return value.date()
    return value


def weekday_of(day: date) -> Weekday:
    # isoweekday: Mon=1..Sun=7 -> Sun=1..Sat=7
    return Weekday(day.isoweekday() % 7 + 1)


def add_days(day: date, n: int) -> date:
    return day + timedelta(days=n)


def days_back(today: date, n: int) -> list[date]:
    """The `n` days ending at `today`, oldest first."""
    return [today - timedelta(days=i) for i in range(n - 1, -1, -1)]


def month_start(day: date) -> date:
    return day.replace(day=1)


def days_in_month(day: date) -> int:
    return _calendar.monthrange(day.year, day.month)[1]


def next_month(day: date) -> date:
    start = month_start(day)
    return start + timedelta(days=days_in_month(start))


def month_title(day: date) -> str:
    return f"{_calendar.month_name[day.month]} {day.year}"
