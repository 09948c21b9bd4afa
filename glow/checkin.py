from collections.abc import Sequence

from .core.models import Habit, TimeOfDay

__all__ = ["DEFAULT_CHECK_IN", "reminder_habits", "typical_check_in"]

DEFAULT_CHECK_IN = TimeOfDay(20, 0)


def typical_check_in(
    habits: Sequence[Habit], default: TimeOfDay = DEFAULT_CHECK_IN
) -> TimeOfDay:
    """Rough guess of when the user usually checks in.

    Plain mean of active reminder times in minutes since midnight, truncated.
    There is no wraparound across midnight, so 23:00 and 01:00 average to
    12:00; reminders are assumed to sit in waking hours.
    """
    minutes = [h.reminder.minutes for h in habits if not h.archived and h.reminder is not None]
    if not minutes:
        return default
    return TimeOfDay.from_minutes(sum(minutes) // len(minutes))


def reminder_habits(habits: Sequence[Habit]) -> list[Habit]:
    """Active habits with a reminder, earliest first."""
    with_reminder = [h for h in habits if not h.archived and h.reminder is not None]
    return sorted(with_reminder, key=lambda h: h.reminder.minutes if h.reminder else 0)
