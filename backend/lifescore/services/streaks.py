"""Consecutive-day streaks derived from check-in history."""

from datetime import date, timedelta
from typing import Iterable, Set, Tuple

from lifescore.schemas import DailyCheckInBase


def _logged_dates(history: Iterable[DailyCheckInBase], today: date) -> Set[date]:
    # Entries dated after today do not count yet
    return {c.date for c in history if c.date <= today}


def longest_run(dates: Set[date]) -> int:
    """Length of the longest run of consecutive dates."""
    best = 0
    for d in dates:
        # Only start counting at the first day of a run
        if d - timedelta(days=1) in dates:
            continue
        length = 1
        while d + timedelta(days=length) in dates:
            length += 1
        best = max(best, length)
    return best


def current_run(dates: Set[date], today: date) -> int:
    """
    Consecutive days ending today or yesterday.

    A missing check-in for today does not break the streak yet; a gap of
    two or more days does.
    """
    yesterday = today - timedelta(days=1)
    if today in dates:
        cursor = today
    elif yesterday in dates:
        cursor = yesterday
    else:
        return 0

    streak = 0
    while cursor in dates:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def update_streak(
    history: Iterable[DailyCheckInBase],
    today: date,
    longest_streak: int = 0,
) -> Tuple[int, int]:
    """
    Return (current_streak, longest_streak) for the history as of today.

    The longest streak never goes below the value passed in, so a reset of
    the current streak cannot shrink it. Recomputing from the same history
    always gives the same result.
    """
    dates = _logged_dates(history, today)
    current = current_run(dates, today)
    longest = max(longest_streak, longest_run(dates), current)
    return current, longest
