import logging
from collections.abc import Sequence
from datetime import date

from .core.models import Completion, DaySummary, Habit, LogsOf
from .lib.calendar import add_days
from .schedule import is_due
from .streaks import BEST_STREAK_HORIZON, active_days, compute_streaks

__all__ = ["RECENT_WINDOW_DAYS", "classify_day", "today_completion"]

logger = logging.getLogger(__name__)

RECENT_WINDOW_DAYS = 7


def _completed_on(habit: Habit, logs_of: LogsOf, day: date) -> bool:
    return any(log.completed and log.day == day for log in logs_of(habit))


def today_completion(done: int, total: int, bonus: int) -> Completion:
    """Numbers for today's progress ring.

    With nothing scheduled, the percent is the raw bonus count rather than a
    fraction. With something scheduled, bonus completions add on top and can
    push the percent past 1.0.
    """
    if total == 0:
        percent = 0.0 if bonus == 0 else float(bonus)
    else:
        percent = (done + bonus) / total
    return Completion(done=done, total=total, percent=percent)


def classify_day(
    habits: Sequence[Habit],
    logs_of: LogsOf,
    today: date,
    horizon: int = BEST_STREAK_HORIZON,
) -> DaySummary:
    active = [h for h in habits if not h.archived]
    archived = [h for h in habits if h.archived]

    scheduled = sorted((h for h in active if is_due(h.schedule, today)), key=lambda h: h.sort_order)
    not_due = sorted(
        (h for h in active if not is_due(h.schedule, today)), key=lambda h: h.sort_order
    )

    completed = [h for h in scheduled if _completed_on(h, logs_of, today)]
    completed_ids = {h.id for h in completed}
    due_not_done = [h for h in scheduled if h.id not in completed_ids]
    bonus = [h for h in not_due if _completed_on(h, logs_of, today)]

    lifetime_days = active_days(habits, logs_of)
    lifetime_completions = sum(1 for h in habits for log in logs_of(h) if log.completed)

    window_start = add_days(today, 1 - RECENT_WINDOW_DAYS)
    recent = sum(1 for d in lifetime_days if window_start <= d <= today)

    logger.debug(
        "classified %d habits for %s: %d scheduled, %d done, %d bonus",
        len(habits),
        today,
        len(scheduled),
        len(completed),
        len(bonus),
    )

    return DaySummary(
        today=today,
        active=active,
        archived=archived,
        scheduled_today=scheduled,
        completed_today=completed,
        due_not_done=due_not_done,
        not_due_today=not_due,
        bonus_today=bonus,
        completion=today_completion(len(completed), len(scheduled), len(bonus)),
        global_streak=compute_streaks(lifetime_days, today, horizon),
        lifetime_active_days=len(lifetime_days),
        lifetime_completions=lifetime_completions,
        recent_active_days=recent,
    )
