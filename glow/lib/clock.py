from datetime import date, datetime

from glow.config import get_timezone

__all__ = ["now", "today"]


def now() -> datetime:
    return datetime.now(get_timezone())


def today() -> date:
    """Current calendar day in the configured timezone."""
    return now().date()
