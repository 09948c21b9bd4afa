from collections.abc import Iterable, Sequence
from collections.abc import Set as AbstractSet
from datetime import date, timedelta

from .core.models import CompletionLog, Habit, LogsOf, Streaks

__all__ = ["BEST_STREAK_HORIZON", "active_days", "completed_days", "compute_streaks"]

BEST_STREAK_HORIZON = 365


def completed_days(logs: Iterable[CompletionLog], until: date | None = None) -> frozenset[date]:
    """Distinct days with at least one completed log.

    Duplicate logs on one day collapse into a single entry; days after
    `until` are dropped when it is given.
    """
    return frozenset(
        log.day for log in logs if log.completed and (until is None or log.day <= until)
    )


def active_days(
    habits: Sequence[Habit], logs_of: LogsOf, until: date | None = None
) -> frozenset[date]:
    """Days on which any habit was completed."""
    days: set[date] = set()
    for habit in habits:
        days |= completed_days(logs_of(habit), until)
    return frozenset(days)


def compute_streaks(
    days: AbstractSet[date], today: date, horizon: int = BEST_STREAK_HORIZON
) -> Streaks:
    """Return (current, best) consecutive-day streaks ending at `today`.

    `best` only looks back `horizon` days, so runs older than that are not
    counted.
    """
    current = 0
    cursor = today
    while cursor in days:
        current += 1
        cursor -= timedelta(days=1)

    best = current
    rolling = 0
    cursor = today
    for _ in range(horizon):
        if cursor in days:
            rolling += 1
            best = max(best, rolling)
        else:
            rolling = 0
        cursor -= timedelta(days=1)

    return Streaks(current, best)
