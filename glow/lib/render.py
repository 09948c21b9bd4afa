from collections.abc import Sequence
from datetime import date

from glow.core.models import Habit, HabitPerformance, HomeSnapshot, MonthGrid, Weekday
from glow.schedule import schedule_label

from .ansi import bold, dim, gold, gray, green, muted, white

__all__ = [
    "render_month",
    "render_reminders",
    "render_today",
    "render_trends",
]


def _ring(percent: float) -> str:
    return f"{percent:.0%}"


def _habit_line(habit: Habit, mark: str) -> str:
    return f"  {mark} {habit.title.lower()}  {muted(f'[{habit.id[:8]}]')}"


def render_today(snapshot: HomeSnapshot) -> str:
    day = snapshot.day
    done, total, percent = day.completion
    lines = [
        bold(white(f"TODAY {day.today.isoformat()}  ({done}/{total})  {_ring(percent)}")),
    ]
    if day.is_today_complete:
        lines.append(green("  all done for today"))

    if day.scheduled_today:
        lines.append(f"\n{bold(white('DUE'))}")
        lines += [_habit_line(h, "□") for h in day.due_not_done]
        lines += [gray(_habit_line(h, "✓")) for h in day.completed_today]
    if day.bonus_today:
        lines.append(f"\n{bold(white('BONUS'))}")
        lines += [gold(_habit_line(h, "★")) for h in day.bonus_today]
    rest = [h for h in day.not_due_today if h not in day.bonus_today]
    if rest:
        lines.append(f"\n{bold(white('NOT TODAY'))}")
        lines += [dim(_habit_line(h, "·")) for h in rest]

    current, best = day.global_streak
    consistent = snapshot.most_consistent
    lines += [
        f"\n{bold(white('YOU'))}",
        f"  streak:      {current}d (best {best}d)",
        f"  this week:   {day.recent_active_days}/7 days",
        f"  lifetime:    {day.lifetime_active_days} days, {day.lifetime_completions} check-ins",
        f"  consistent:  {consistent.title} ({consistent.hits}/{consistent.window})",
        f"  check-in:    ~{snapshot.typical_check_in}",
    ]
    return "\n".join(lines)


def render_month(grid: MonthGrid, habit: Habit, today: date) -> str:
    header = " ".join(d.short_label[:2] for d in Weekday)
    lines = [
        bold(white(f"{habit.title.upper()}  {grid.title}")),
        f"  {header}",
    ]
    for week in grid.weeks:
        cells = []
        for cell in week:
            if cell is None:
                cells.append("  ")
            elif cell in grid.completed_days:
                cells.append(green(f"{cell.day:>2}"))
            elif cell > today:
                cells.append(muted(f"{cell.day:>2}"))
            else:
                cells.append(f"{cell.day:>2}")
        lines.append("  " + " ".join(cells))
    lines.append(f"\n  {grid.percent}% of days kept, {grid.streak}d streak this month")
    return "\n".join(lines)


def render_trends(
    performance: Sequence[HabitPerformance], weekly: Sequence[tuple[date, bool]]
) -> str:
    if not performance:
        return "No active habits."

    lines = [bold(white("TOP HABITS (last 7 days)"))]
    width = max(len(p.habit.title) for p in performance)
    for p in performance:
        lines.append(
            f"  {p.habit.title.lower():<{width}}  {p.recent_percent:>3}%"
            f"  {p.current_streak}d now, best {p.best_streak}d"
        )

    strip = " ".join(green("●") if did else muted("○") for _, did in weekly)
    labels = " ".join(d.strftime("%a")[0] for d, _ in weekly)
    lines += [f"\n{bold(white('THIS WEEK'))}", f"  {labels}", f"  {strip}"]
    return "\n".join(lines)


def render_reminders(habits: Sequence[Habit]) -> str:
    if not habits:
        return "No reminders set."
    lines = []
    for h in habits:
        lines.append(f"  {h.reminder}  {h.title.lower()}  {dim(schedule_label(h.schedule))}")
    return "\n".join(lines)
