from datetime import date

from glow.config import EngineSettings
from glow.core.models import Custom, TimeOfDay, Weekday
from glow.home import build_home_snapshot
from glow.lib.render import render_month, render_reminders, render_today, render_trends
from glow.month import build_month
from glow.trends import habit_performance, weekly_activity


def test_render_today_sections(today, ago, make_habit, done, logs_of):
    read = make_habit("Read", sort_order=1)
    run = make_habit("Run", sort_order=2)
    yoga = make_habit("Yoga", schedule=Custom({Weekday.SAT}))
    logs = logs_of(done(read, today, ago(1)), done(yoga, today))

    out = render_today(build_home_snapshot([read, run, yoga], logs, today, EngineSettings()))

    assert out.startswith("TODAY 2024-03-14  (1/2)  100%")
    assert "□ run" in out
    assert "✓ read" in out
    assert "★ yoga" in out
    assert "streak:      2d (best 2d)" in out
    assert "all done for today" not in out


def test_render_today_all_done(today, make_habit, done, logs_of):
    read = make_habit("Read")
    out = render_today(
        build_home_snapshot([read], logs_of(done(read, today)), today, EngineSettings())
    )
    assert "all done for today" in out


def test_render_month_layout(today, make_habit, done):
    read = make_habit("Read")
    grid = build_month(read, today, done(read, date(2024, 3, 1), today), today)

    lines = render_month(grid, read, today).splitlines()

    assert lines[0] == "READ  March 2024"
    assert lines[1] == "  Su Mo Tu We Th Fr Sa"
    # March 2024 opens on a Friday
    assert lines[2] == "  " + "   " * 5 + " 1  2"
    assert len([ln for ln in lines if ln.startswith("  ") and ln.strip()]) >= 7
    assert lines[-1] == "  14% of days kept, 1d streak this month"


def test_render_trends(today, ago, make_habit, done, logs_of):
    read = make_habit("Read")
    logs = logs_of(done(read, today, ago(1)))
    out = render_trends(
        habit_performance([read], logs, today), weekly_activity([read], logs, today)
    )
    assert "read   29%  2d now, best 2d" in out
    assert out.splitlines()[-1].count("●") == 2


def test_render_empty_states(today, logs_of):
    assert render_trends([], weekly_activity([], logs_of(), today)) == "No active habits."
    assert render_reminders([]) == "No reminders set."


def test_render_reminders(make_habit):
    walk = make_habit("Walk", reminder=TimeOfDay(7, 5), schedule=Custom({Weekday.MON}))
    assert render_reminders([walk]) == "  07:05  walk  Mon"
