import json as _json
from datetime import date
from pathlib import Path

from fncli import UsageError, cli

from .checkin import reminder_habits
from .config import get_snapshot_path, get_timezone, load_settings, set_timezone
from .core.errors import ValidationError
from .home import build_home_snapshot
from .lib import clock
from .lib.converters import Snapshot, load_snapshot
from .lib.fuzzy import resolve_habit
from .lib.render import render_month, render_reminders, render_today, render_trends
from .month import build_month
from .trends import habit_performance, weekly_activity


def _load(path: str | None) -> Snapshot:
    return load_snapshot(Path(path).expanduser() if path else get_snapshot_path(), get_timezone())


def _parse_month(month: str | None, today: date) -> date:
    if not month:
        return today.replace(day=1)
    try:
        return date.fromisoformat(f"{month}-01")
    except ValueError:
        raise ValidationError(f"Invalid month '{month}' - use YYYY-MM") from None


@cli("glow")
def today(path: str | None = None, json: bool = False) -> None:
    """Today's habits, progress and streaks"""
    snap = _load(path)
    home = build_home_snapshot(snap.habits, snap.logs_of(), clock.today(), load_settings())
    if json:
        day = home.day
        print(
            _json.dumps(
                {
                    "today": day.today.isoformat(),
                    "done": day.completion.done,
                    "total": day.completion.total,
                    "percent": day.completion.percent,
                    "complete": day.is_today_complete,
                    "due": [h.id for h in day.due_not_done],
                    "bonus": [h.id for h in day.bonus_today],
                    "streak": day.global_streak.current,
                    "best_streak": day.global_streak.best,
                    "typical_check_in": str(home.typical_check_in),
                }
            )
        )
        return
    print(render_today(home))


@cli("glow")
def month(habit: str, month: str | None = None, path: str | None = None) -> None:
    """Month grid for one habit (--month YYYY-MM)"""
    snap = _load(path)
    if not snap.habits:
        raise UsageError("no habits in snapshot")
    target = resolve_habit(habit, snap.habits)
    day = clock.today()
    grid = build_month(target, _parse_month(month, day), snap.logs_of()(target), day)
    print(render_month(grid, target, day))


@cli("glow")
def trends(path: str | None = None) -> None:
    """Per-habit performance over the last week"""
    snap = _load(path)
    day = clock.today()
    settings = load_settings()
    performance = habit_performance(
        snap.habits,
        snap.logs_of(),
        day,
        window_days=settings.recent_window,
        horizon=settings.streak_horizon,
    )
    print(render_trends(performance, weekly_activity(snap.habits, snap.logs_of(), day)))


@cli("glow")
def reminders(path: str | None = None) -> None:
    """Habits with reminders, earliest first"""
    snap = _load(path)
    print(render_reminders(reminder_habits(snap.habits)))


@cli("glow")
def tz(name: str) -> None:
    """Set the timezone day boundaries are computed in"""
    set_timezone(name)
    print(f"timezone: {name}")
