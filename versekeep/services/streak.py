"""Consecutive-day reading streaks derived from the set of active dates."""

from datetime import date
from typing import Iterable

from versekeep.dates import days_between
from versekeep.schemas.progress import Streak


def _runs(dates_desc: list[date]) -> list[int]:
    """Lengths of consecutive-day runs, most recent run first."""
    runs = []
    length = 1
    for newer, older in zip(dates_desc, dates_desc[1:]):
        if days_between(older, newer) == 1:
            length += 1
        else:
            runs.append(length)
            length = 1
    runs.append(length)
    return runs


def calculate_streak(dates: Iterable[date], today: date, previous_longest: int = 0) -> Streak:
    """Compute the current and longest streak.

    ``current`` counts the run ending at the most recent active date, but only
    while that date is today or yesterday. ``longest`` is the longest run in
    the history and never drops below ``previous_longest``.
    """
    unique = sorted(set(dates), reverse=True)
    if not unique:
        return Streak(current=0, longest=0, last_read_date=None)

    last_read = unique[0]
    runs = _runs(unique)

    current = runs[0] if days_between(today, last_read) <= 1 else 0
    longest = max(max(runs), current, previous_longest)

    return Streak(current=current, longest=longest, last_read_date=last_read)
