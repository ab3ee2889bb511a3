"""Tests for the pure streak calculation."""

from datetime import date, timedelta

from versekeep.services.streak import calculate_streak

TODAY = date(2026, 3, 15)


def _days(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=n) for n in offsets]


def test_no_activity():
    streak = calculate_streak([], TODAY)
    assert streak.current == 0
    assert streak.longest == 0
    assert streak.last_read_date is None


def test_no_activity_ignores_previous_longest():
    streak = calculate_streak([], TODAY, previous_longest=4)
    assert streak.longest == 0


def test_read_today_only():
    streak = calculate_streak(_days(0), TODAY)
    assert streak.current == 1
    assert streak.longest == 1
    assert streak.last_read_date == TODAY


def test_three_consecutive_days():
    streak = calculate_streak(_days(2, 1, 0), TODAY)
    assert streak.current == 3
    assert streak.longest >= 3


def test_streak_ending_yesterday_is_still_current():
    streak = calculate_streak(_days(3, 2, 1), TODAY)
    assert streak.current == 3
    assert streak.last_read_date == TODAY - timedelta(days=1)


def test_streak_broken_two_days_ago():
    streak = calculate_streak(_days(4, 3, 2), TODAY)
    assert streak.current == 0
    assert streak.last_read_date == TODAY - timedelta(days=2)


def test_broken_streak_still_reports_longest_run():
    streak = calculate_streak(_days(20, 12, 11, 10, 5), TODAY)
    assert streak.current == 0
    assert streak.longest == 3


def test_gap_then_today_keeps_historical_longest():
    streak = calculate_streak(_days(10, 9, 8, 7, 6, 0), TODAY)
    assert streak.current == 1
    assert streak.longest == 5


def test_current_is_not_raised_to_longest():
    streak = calculate_streak(_days(9, 8, 7, 1, 0), TODAY)
    assert streak.current == 2
    assert streak.longest == 3


def test_previous_longest_never_decreases():
    streak = calculate_streak(_days(0), TODAY, previous_longest=12)
    assert streak.current == 1
    assert streak.longest == 12


def test_longest_grows_with_current():
    streak = calculate_streak(_days(3, 2, 1, 0), TODAY, previous_longest=2)
    assert streak.current == 4
    assert streak.longest == 4


def test_duplicates_and_order_do_not_matter():
    dates = _days(0, 2, 1, 0, 1, 2)
    streak = calculate_streak(dates, TODAY)
    assert streak.current == 3
    assert streak.longest == 3


def test_streak_across_month_boundary():
    today = date(2026, 3, 1)
    dates = [date(2026, 2, 27), date(2026, 2, 28), date(2026, 3, 1)]
    assert calculate_streak(dates, today).current == 3
