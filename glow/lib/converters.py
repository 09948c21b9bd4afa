import dataclasses
import json
import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date, tzinfo
from pathlib import Path
from typing import cast

from glow.core.errors import ValidationError
from glow.core.models import CompletionLog, Habit, LogsOf, TimeOfDay
from glow.schedule import decode_schedule

from .calendar import to_day

__all__ = ["Snapshot", "load_snapshot", "logs_lookup", "row_to_habit", "row_to_log"]

logger = logging.getLogger(__name__)

Row = Mapping[str, object]


@dataclasses.dataclass(frozen=True)
class Snapshot:
    habits: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    logs: list[CompletionLog] = dataclasses.field(default_factory=list, hash=False)

    def logs_of(self) -> LogsOf:
        return logs_lookup(self.logs)


def _pick(row: Row, *keys: str, default: object = None) -> object:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default


def _parse_day(val: object, tz: tzinfo | None) -> date | None:
    if val is None or val == "":
        return None
    if isinstance(val, date | str):
        return to_day(val, tz)
    raise ValidationError(f"unreadable date {val!r}")


def _parse_reminder(row: Row) -> TimeOfDay | None:
    """Reminder only counts when enabled with both hour and minute set."""
    enabled = _pick(row, "reminderEnabled", "reminder_enabled")
    text = _pick(row, "reminder")
    if isinstance(text, str):
        return TimeOfDay.parse(text) if enabled is not False else None
    hour = _pick(row, "reminderHour", "reminder_hour")
    minute = _pick(row, "reminderMinute", "reminder_minute")
    if not enabled or hour is None or minute is None:
        return None
    try:
        return TimeOfDay(int(cast(int, hour)), int(cast(int, minute)))
    except (TypeError, ValueError):
        raise ValidationError(f"unreadable reminder {hour!r}:{minute!r}") from None


def row_to_habit(row: Row, tz: tzinfo | None = None) -> Habit:
    """
    Builds a Habit from an exported record.
    Accepts the app's camelCase field names and snake_case equivalents.
    """
    habit_id = _pick(row, "id")
    if not habit_id:
        raise ValidationError(f"habit record without id: {dict(row)!r}")
    try:
        sort_order = int(cast(int, _pick(row, "sortOrder", "sort_order", default=9_999)))
    except (TypeError, ValueError):
        raise ValidationError(f"habit {habit_id}: unreadable sortOrder") from None
    schedule = _pick(row, "schedule", "scheduleData", "schedule_data")
    return Habit(
        id=str(habit_id),
        title=str(_pick(row, "title", default="")),
        created_at=_parse_day(_pick(row, "createdAt", "created_at"), tz),
        archived=bool(_pick(row, "isArchived", "archived", default=False)),
        schedule=decode_schedule(cast(Mapping[str, object] | str | None, schedule)),
        reminder=_parse_reminder(row),
        sort_order=sort_order,
        icon=str(_pick(row, "iconName", "icon", default="checkmark.circle")),
    )


def row_to_log(row: Row, tz: tzinfo | None = None) -> CompletionLog:
    habit_id = _pick(row, "habitId", "habit_id")
    if not habit_id:
        raise ValidationError(f"log record without habitId: {dict(row)!r}")
    day = _parse_day(_pick(row, "date", "day"), tz)
    if day is None:
        raise ValidationError(f"log record without date: {dict(row)!r}")
    completed = _pick(row, "completed", default=False)
    if not isinstance(completed, bool):
        raise ValidationError(f"log for {habit_id}: completed must be true or false")
    return CompletionLog(habit_id=str(habit_id), day=day, completed=completed)


def logs_lookup(logs: Iterable[CompletionLog]) -> LogsOf:
    by_habit: dict[str, list[CompletionLog]] = defaultdict(list)
    for log in logs:
        by_habit[log.habit_id].append(log)

    def logs_of(habit: Habit) -> list[CompletionLog]:
        return by_habit.get(habit.id, [])

    return logs_of


def _records(data: Mapping[str, object], key: str) -> list[Row]:
    raw = data.get(key, [])
    if not isinstance(raw, list) or not all(isinstance(r, Mapping) for r in raw):
        raise ValidationError(f"snapshot '{key}' must be a list of objects")
    return cast(list[Row], raw)


def load_snapshot(path: Path, tz: tzinfo | None = None) -> Snapshot:
    """Read the JSON export written by the persistence layer."""
    if not path.exists():
        logger.debug("no snapshot at %s", path)
        return Snapshot()
    try:
        data = json.loads(path.read_text())
    except ValueError as e:
        raise ValidationError(f"unreadable snapshot {path}: {e}") from e
    if not isinstance(data, Mapping):
        raise ValidationError(f"snapshot {path} must be a JSON object")

    habit_rows = _records(data, "habits")
    habits = [row_to_habit(r, tz) for r in habit_rows]
    logs = [row_to_log(r, tz) for r in _records(data, "logs")]
    # logs may also be nested under their habit
    for habit, r in zip(habits, habit_rows, strict=True):
        if "logs" in r:
            logs += [row_to_log({"habitId": habit.id, **n}, tz) for n in _records(r, "logs")]

    logger.debug("loaded %d habits, %d logs from %s", len(habits), len(logs), path)
    return Snapshot(habits=habits, logs=logs)
