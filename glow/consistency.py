from collections.abc import Sequence
from datetime import date

from .core.models import Consistency, Habit, LogsOf
from .lib.calendar import add_days
from .streaks import completed_days

__all__ = ["DEFAULT_WINDOW_DAYS", "NO_HABIT", "most_consistent"]

DEFAULT_WINDOW_DAYS = 14
NO_HABIT = "—"


def most_consistent(
    habits: Sequence[Habit],
    logs_of: LogsOf,
    today: date,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> Consistency:
    """Habit with the most distinct completed days in the trailing window.

    Ties go to whichever habit comes first in `habits`.
    """
    window_start = add_days(today, 1 - window_days)
    best_title = NO_HABIT
    best_hits = 0

    for habit in habits:
        hits = sum(1 for d in completed_days(logs_of(habit), until=today) if d >= window_start)
        if hits > best_hits:
            best_hits = hits
            best_title = habit.title

    return Consistency(title=best_title, hits=best_hits, window=window_days)
