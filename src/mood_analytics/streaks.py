"""Consecutive tracking day (streak) calculation."""

from datetime import date, timedelta, tzinfo
from typing import Iterable

from .observations import UTC, MoodObservation

ONE_DAY = timedelta(days=1)


def tracked_days(observations: Iterable[MoodObservation], tz: tzinfo = UTC) -> set[date]:
    """Distinct calendar days holding at least one observation."""
    return {obs.local_date(tz) for obs in observations}


def compute_streak(
    observations: Iterable[MoodObservation],
    as_of: date,
    tz: tzinfo = UTC,
) -> int:
    """
    Count consecutive tracked days ending at ``as_of``.

    Walks backward one day at a time and stops at the first day without
    an observation. Returns 0 when ``as_of`` itself has no entry, even if
    yesterday does.
    """
    days = tracked_days(observations, tz)
    streak = 0
    current = as_of
    while current in days:
        streak += 1
        current -= ONE_DAY
    return streak


def longest_streak(observations: Iterable[MoodObservation], tz: tzinfo = UTC) -> int:
    """Longest run of consecutive tracked days anywhere in the input."""
    days = tracked_days(observations, tz)
    longest = 0
    for day in days:
        # Only start counting from the first day of a run
        if day - ONE_DAY in days:
            continue
        length = 1
        while day + ONE_DAY * length in days:
            length += 1
        longest = max(longest, length)
    return longest
