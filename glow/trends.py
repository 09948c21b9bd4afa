from collections.abc import Iterable, Sequence
from datetime import date

from .core.models import CompletionLog, CompletionSummary, Habit, HabitPerformance, LogsOf
from .lib.calendar import days_back
from .month import round_percent
from .streaks import BEST_STREAK_HORIZON, active_days, completed_days, compute_streaks

__all__ = ["completion_summary", "habit_performance", "weekly_activity"]


def completion_summary(
    logs: Iterable[CompletionLog], today: date, window_days: int = 7
) -> CompletionSummary:
    """How many of the last `window_days` days had a completion."""
    if window_days <= 0:
        return CompletionSummary(0, 0, 0.0)
    done_days = completed_days(logs, until=today)
    done = sum(1 for d in days_back(today, window_days) if d in done_days)
    return CompletionSummary(done, window_days, done / window_days)


def habit_performance(
    habits: Sequence[Habit],
    logs_of: LogsOf,
    today: date,
    window_days: int = 7,
    horizon: int = BEST_STREAK_HORIZON,
) -> list[HabitPerformance]:
    """Active habits ranked by recent completion rate, then current streak."""
    stats = []
    for habit in habits:
        if habit.archived:
            continue
        logs = list(logs_of(habit))
        streaks = compute_streaks(completed_days(logs), today, horizon)
        summary = completion_summary(logs, today, window_days)
        stats.append(
            HabitPerformance(
                habit=habit,
                current_streak=streaks.current,
                best_streak=streaks.best,
                recent_percent=round_percent(summary.done, summary.total),
            )
        )
    return sorted(stats, key=lambda s: (-s.recent_percent, -s.current_streak))


def weekly_activity(
    habits: Sequence[Habit], logs_of: LogsOf, today: date
) -> list[tuple[date, bool]]:
    """Last seven days, oldest first, flagged when anything was completed."""
    days = active_days(habits, logs_of, until=today)
    return [(d, d in days) for d in days_back(today, 7)]
