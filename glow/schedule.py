import json
import logging
from collections.abc import Callable, Mapping
from datetime import date

from .core.models import Custom, Daily, Schedule, Weekday
from .lib.calendar import weekday_of as _weekday_of

__all__ = [
    "decode_schedule",
    "encode_schedule",
    "is_due",
    "schedule_label",
]

logger = logging.getLogger(__name__)


def is_due(
    schedule: Schedule, day: date, weekday_of: Callable[[date], Weekday] = _weekday_of
) -> bool:
    if isinstance(schedule, Daily):
        return True
    return weekday_of(day) in schedule.days


def schedule_label(schedule: Schedule) -> str:
    if isinstance(schedule, Daily):
        return "Every day"
    if not schedule.days:
        return "Custom"
    return ", ".join(d.short_label for d in sorted(schedule.days))


def encode_schedule(schedule: Schedule) -> dict[str, object]:
    if isinstance(schedule, Daily):
        return {"kind": "daily", "days": [int(d) for d in Weekday]}
    return {"kind": "custom", "days": sorted(int(d) for d in schedule.days)}


def _decode_days(raw: object) -> frozenset[Weekday]:
    if not isinstance(raw, list | tuple | set | frozenset):
        return frozenset()
    valid = {int(d) for d in Weekday}
    days = set()
    for item in raw:
        try:
            number = int(item)
        except (TypeError, ValueError):
            continue
        if number in valid:
            days.add(Weekday(number))
    return frozenset(days)


def decode_schedule(data: Mapping[str, object] | str | bytes | None) -> Schedule:
    """Decode a stored schedule. Unreadable records fall back to daily."""
    if isinstance(data, str | bytes):
        try:
            data = json.loads(data)
        except ValueError:
            logger.warning("unreadable schedule %r, treating as daily", data)
            return Daily()
    if data is None:
        return Daily()
    if not isinstance(data, Mapping):
        logger.warning("unreadable schedule %r, treating as daily", data)
        return Daily()

    kind = str(data.get("kind", "")).lower()
    if kind == "daily":
        return Daily()
    if kind == "custom":
        return Custom(_decode_days(data.get("days")))
    logger.warning("unknown schedule kind %r, treating as daily", kind)
    return Daily()
