from datetime import date, timedelta

import pytest

from glow.month import build_month, elapsed_denominator, round_percent


def _every_day(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def test_grid_layout(today, make_habit):
    grid = build_month(make_habit("Read"), today, [], today)

    assert grid.month_start == date(2024, 3, 1)
    assert grid.title == "March 2024"
    assert grid.days_in_month == 31
    assert len(grid.weeks) == 6
    assert all(len(week) == 7 for week in grid.weeks)
    # March 1st 2024 is a Friday: five leading blanks
    assert grid.weeks[0][:5] == [None] * 5
    assert grid.weeks[0][5] == date(2024, 3, 1)
    assert [c for c in grid.cells if c is not None] == _every_day(
        date(2024, 3, 1), date(2024, 3, 31)
    )


def test_grid_pads_short_month_to_six_rows(make_habit):
    # February 2015 starts on a Sunday and fits in four rows
    grid = build_month(make_habit("Read"), date(2015, 2, 10), [], date(2015, 2, 10))
    assert grid.weeks[0][0] == date(2015, 2, 1)
    assert len(grid.cells) == 42
    assert grid.weeks[4] == [None] * 7


def test_every_elapsed_day_done_is_100_percent(today, make_habit, done):
    habit = make_habit("Read")
    logs = done(habit, *_every_day(date(2024, 3, 1), today))
    grid = build_month(habit, today, logs, today)

    assert grid.percent == 100
    assert grid.streak == 14


def test_first_of_month_only_day_done(make_habit, done):
    habit = make_habit("Read")
    first = date(2024, 3, 1)
    assert build_month(habit, first, done(habit, first), first).percent == 100


def test_partial_current_month(today, make_habit, done):
    habit = make_habit("Read")
    logs = done(habit, date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 13))
    grid = build_month(habit, today, logs, today)

    # 3 of 14 elapsed days
    assert grid.percent == 21
    assert grid.streak == 0
    assert grid.completed_days == {date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 13)}


def test_future_logs_never_count(today, make_habit, done):
    habit = make_habit("Read")
    logs = done(habit, today, today + timedelta(days=1), date(2024, 3, 30))
    grid = build_month(habit, today, logs, today)

    assert grid.completed_days == {today}
    assert grid.percent == 7


def test_past_month_uses_whole_month(today, make_habit, done):
    habit = make_habit("Read")
    logs = done(habit, *_every_day(date(2024, 2, 1), date(2024, 2, 10)))
    grid = build_month(habit, date(2024, 2, 20), logs, today)

    # 10 of 29 days
    assert grid.percent == 34
    assert grid.streak == 0


def test_future_month_is_zero(today, make_habit, done):
    habit = make_habit("Read")
    grid = build_month(habit, date(2024, 4, 1), done(habit, date(2024, 4, 2)), today)
    assert grid.percent == 0
    assert grid.completed_days == frozenset()


def test_streak_does_not_carry_over_from_previous_month(make_habit, done):
    habit = make_habit("Read")
    third = date(2024, 3, 3)
    logs = done(habit, *_every_day(date(2024, 2, 20), third))
    grid = build_month(habit, third, logs, third)

    assert grid.streak == 3


def test_other_months_logs_ignored(today, make_habit, done):
    habit = make_habit("Read")
    logs = done(habit, date(2024, 2, 29), date(2024, 4, 1), today)
    assert build_month(habit, today, logs, today).completed_days == {today}


def test_duplicate_logs_count_once(today, make_habit, done):
    habit = make_habit("Read")
    grid = build_month(habit, today, done(habit, today, today), today)
    assert grid.completed_days == {today}
    assert grid.streak == 1


def test_elapsed_denominator(today):
    march = date(2024, 3, 1)
    assert elapsed_denominator(march, today) == 14
    assert elapsed_denominator(march, date(2024, 2, 29)) == 0
    assert elapsed_denominator(march, date(2024, 4, 1)) == 31
    assert elapsed_denominator(march, date(2024, 3, 31)) == 31


@pytest.mark.parametrize(
    ("hits", "denominator", "expected"),
    [(0, 0, 0), (1, 8, 13), (3, 8, 38), (1, 3, 33), (2, 3, 67), (5, 5, 100)],
)
def test_round_percent_halves_up(hits, denominator, expected):
    assert round_percent(hits, denominator) == expected
