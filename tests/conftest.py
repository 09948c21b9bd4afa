from collections.abc import Callable, Iterator
from datetime import date, timedelta
from pathlib import Path

import pytest

from glow import config
from glow.core.models import CompletionLog, Daily, Habit, LogsOf
from glow.lib import ansi
from glow.lib.converters import logs_lookup


@pytest.fixture(autouse=True)
def plain_ansi() -> Iterator[None]:
    ansi.use(ansi.PLAIN)
    yield
    ansi.use(ansi.DEFAULT)


@pytest.fixture
def tmp_glow_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    glow_dir = tmp_path / ".glow"
    glow_dir.mkdir()
    monkeypatch.setattr(config, "GLOW_DIR", glow_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", glow_dir / "config.yaml")
    monkeypatch.setattr(config, "SNAPSHOT_PATH", glow_dir / "snapshot.json")
    config.Config.reset()
    yield glow_dir
    config.Config.reset()


@pytest.fixture
def today() -> date:
    # a Thursday
    return date(2024, 3, 14)


@pytest.fixture
def make_habit() -> Callable[..., Habit]:
    counter = iter(range(1, 10_000))

    def _make(title: str, **kwargs) -> Habit:
        kwargs.setdefault("id", f"{title.lower()}-{next(counter):04d}")
        kwargs.setdefault("schedule", Daily())
        return Habit(title=title, **kwargs)

    return _make


@pytest.fixture
def done() -> Callable[..., list[CompletionLog]]:
    """Completed logs for a habit on each given day."""

    def _done(habit: Habit, *days: date) -> list[CompletionLog]:
        return [CompletionLog(habit_id=habit.id, day=d, completed=True) for d in days]

    return _done


@pytest.fixture
def ago(today: date) -> Callable[[int], date]:
    def _ago(n: int) -> date:
        return today - timedelta(days=n)

    return _ago


def lookup(*logs: list[CompletionLog]) -> LogsOf:
    return logs_lookup(log for group in logs for log in group)


@pytest.fixture
def logs_of() -> Callable[..., LogsOf]:
    return lookup
