"""Everything the home, trends and you screens read, computed in one pass."""

import logging
from collections.abc import Sequence
from datetime import date

from .checkin import typical_check_in
from .config import EngineSettings, load_settings
from .consistency import most_consistent
from .core.models import Habit, HomeSnapshot, LogsOf
from .daily import classify_day
from .trends import habit_performance, weekly_activity

__all__ = ["build_home_snapshot"]

logger = logging.getLogger(__name__)


def build_home_snapshot(
    habits: Sequence[Habit],
    logs_of: LogsOf,
    today: date,
    settings: EngineSettings | None = None,
) -> HomeSnapshot:
    """Recompute derived state from one consistent habits+logs snapshot.

    Call after every habit or log mutation and at day rollover; keep the
    returned value and replace it on the next call.
    """
    settings = settings or load_settings()
    logger.debug("building home snapshot for %s with %s", today, settings)

    return HomeSnapshot(
        day=classify_day(habits, logs_of, today, horizon=settings.streak_horizon),
        most_consistent=most_consistent(
            habits, logs_of, today, window_days=settings.consistency_window
        ),
        typical_check_in=typical_check_in(habits, default=settings.check_in_default),
        performance=habit_performance(
            habits,
            logs_of,
            today,
            window_days=settings.recent_window,
            horizon=settings.streak_horizon,
        ),
        weekly_activity=weekly_activity(habits, logs_of, today),
    )
