from glow.consistency import NO_HABIT, most_consistent


def test_picks_habit_with_most_distinct_days(today, ago, make_habit, done, logs_of):
    a, b = make_habit("A"), make_habit("B")
    logs = logs_of(done(a, today, ago(1), ago(2)), done(b, today))

    assert most_consistent([a, b], logs, today) == ("A", 3, 14)


def test_same_day_logs_count_once(today, make_habit, done, logs_of):
    spammy = make_habit("Spammy")
    result = most_consistent([spammy], logs_of(done(spammy, today, today, today)), today)
    assert result.hits == 1


def test_window_excludes_older_days(today, ago, make_habit, done, logs_of):
    a, b = make_habit("A"), make_habit("B")
    logs = logs_of(done(a, ago(13), ago(14), ago(15), ago(16)), done(b, today, ago(1)))

    result = most_consistent([a, b], logs, today)
    assert result.title == "B"
    assert result.hits == 2


def test_future_days_not_counted(today, ago, make_habit, done, logs_of):
    a = make_habit("A")
    logs = logs_of(done(a, ago(-1), ago(-2), today))
    assert most_consistent([a], logs, today).hits == 1


def test_tie_goes_to_first_habit(today, make_habit, done, logs_of):
    a, b = make_habit("A"), make_habit("B")
    logs = logs_of(done(a, today), done(b, today))
    assert most_consistent([b, a], logs, today).title == "B"
    assert most_consistent([a, b], logs, today).title == "A"


def test_no_hits_returns_sentinel(today, make_habit, logs_of):
    result = most_consistent([make_habit("A")], logs_of(), today, window_days=7)
    assert result == (NO_HABIT, 0, 7)
    assert result.title == "—"


def test_empty_habits(today, logs_of):
    assert most_consistent([], logs_of(), today) == ("—", 0, 14)
