import dataclasses
from collections.abc import Callable, Iterable
from datetime import date
from enum import IntEnum
from typing import NamedTuple

from .errors import ValidationError


class Weekday(IntEnum):
    """Calendar weekday, numbered Sunday=1 ... Saturday=7."""

    SUN = 1
    MON = 2
    TUE = 3
    WED = 4
    THU = 5
    FRI = 6
    SAT = 7

    @property
    def short_label(self) -> str:
        return ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")[self - 1]


@dataclasses.dataclass(frozen=True)
class Daily:
    pass


@dataclasses.dataclass(frozen=True)
class Custom:
    days: frozenset[Weekday] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", frozenset(Weekday(d) for d in self.days))


Schedule = Daily | Custom


@dataclasses.dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int
    minute: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.hour < 24) or not (0 <= self.minute < 60):
            raise ValidationError(f"invalid time of day {self.hour}:{self.minute}")

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        return cls(minutes // 60, minutes % 60)

    @classmethod
    def parse(cls, text: str) -> "TimeOfDay":
        """Parse 'HH:MM'."""
        hour, sep, minute = text.strip().partition(":")
        if not sep:
            raise ValidationError(f"invalid time '{text}' - use HH:MM")
        try:
            return cls(int(hour), int(minute))
        except ValueError:
            raise ValidationError(f"invalid time '{text}' - use HH:MM") from None

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclasses.dataclass(frozen=True)
class Habit:
    id: str
    title: str
    created_at: date | None = None
    archived: bool = False
    schedule: Schedule = dataclasses.field(default_factory=Daily)
    reminder: TimeOfDay | None = None
    sort_order: int = 9_999
    icon: str = "checkmark.circle"


@dataclasses.dataclass(frozen=True)
class CompletionLog:
    habit_id: str
    day: date
    completed: bool = False


LogsOf = Callable[[Habit], Iterable[CompletionLog]]


class Streaks(NamedTuple):
    current: int = 0
    best: int = 0


class Completion(NamedTuple):
    done: int = 0
    total: int = 0
    percent: float = 0.0


class Consistency(NamedTuple):
    title: str
    hits: int
    window: int


class CompletionSummary(NamedTuple):
    done: int = 0
    total: int = 0
    percent: float = 0.0


@dataclasses.dataclass(frozen=True)
class DaySummary:
    today: date
    active: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    archived: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    scheduled_today: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    completed_today: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    due_not_done: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    not_due_today: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    bonus_today: list[Habit] = dataclasses.field(default_factory=list, hash=False)
    completion: Completion = Completion()
    global_streak: Streaks = Streaks()
    lifetime_active_days: int = 0
    lifetime_completions: int = 0
    recent_active_days: int = 0

    @property
    def is_today_complete(self) -> bool:
        return self.completion.total > 0 and self.completion.done >= self.completion.total


@dataclasses.dataclass(frozen=True)
class MonthGrid:
    habit_id: str
    month_start: date
    title: str
    days_in_month: int
    weeks: list[list[date | None]] = dataclasses.field(default_factory=list, hash=False)
    completed_days: frozenset[date] = frozenset()
    percent: int = 0
    streak: int = 0

    @property
    def cells(self) -> list[date | None]:
        return [cell for week in self.weeks for cell in week]


@dataclasses.dataclass(frozen=True)
class HabitPerformance:
    habit: Habit
    current_streak: int
    best_streak: int
    recent_percent: int


@dataclasses.dataclass(frozen=True)
class HomeSnapshot:
    day: DaySummary
    most_consistent: Consistency
    typical_check_in: TimeOfDay
    performance: list[HabitPerformance] = dataclasses.field(default_factory=list, hash=False)
    weekly_activity: list[tuple[date, bool]] = dataclasses.field(
        default_factory=list, hash=False
    )
