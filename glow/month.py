import math
from collections.abc import Iterable
from datetime import date

from .core.models import CompletionLog, Habit, MonthGrid
from .lib.calendar import (
    add_days,
    days_in_month,
    month_start,
    month_title,
    next_month,
    weekday_of,
)
from .streaks import completed_days, compute_streaks

__all__ = ["GRID_MIN_ROWS", "build_month", "elapsed_denominator", "round_percent"]

GRID_MIN_ROWS = 6
WEEK = 7


def round_percent(hits: int, denominator: int) -> int:
    """Whole-number percentage, halves rounded up. Zero denominator gives 0."""
    if denominator <= 0:
        return 0
    return math.floor(hits / denominator * 100 + 0.5)


def elapsed_denominator(start: date, today: date) -> int:
    """Days of the month that have happened as of `today`."""
    length = days_in_month(start)
    if today < start:
        return 0
    if today >= next_month(start):
        return length
    return min(length, (today - start).days + 1)


def _grid(start: date, length: int) -> list[list[date | None]]:
    leading = weekday_of(start) - 1
    cells: list[date | None] = [None] * leading
    cells += [add_days(start, i) for i in range(length)]
    rows = max(GRID_MIN_ROWS, math.ceil(len(cells) / WEEK))
    cells += [None] * (rows * WEEK - len(cells))
    return [cells[i : i + WEEK] for i in range(0, len(cells), WEEK)]


def build_month(
    habit: Habit, month: date, logs: Iterable[CompletionLog], today: date
) -> MonthGrid:
    """Month-view data for one habit.

    Logs dated after `today` never count. The percent is measured against the
    days elapsed so far, so a fully kept current month reads 100 mid-month.
    The streak is the run ending at `today` inside this month only.
    """
    start = month_start(month)
    end = next_month(start)
    length = days_in_month(start)

    done = frozenset(d for d in completed_days(logs, until=today) if start <= d < end)

    return MonthGrid(
        habit_id=habit.id,
        month_start=start,
        title=month_title(start),
        days_in_month=length,
        weeks=_grid(start, length),
        completed_days=done,
        percent=round_percent(len(done), elapsed_denominator(start, today)),
        streak=compute_streaks(done, today).current,
    )
