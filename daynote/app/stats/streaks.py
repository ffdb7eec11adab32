from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from itertools import pairwise

from ..schemas.entries import JournalEntry
from ..schemas.insights import StreakInfo
from .dates import format_date, parse_date


def calculate_streak(entries: Iterable[JournalEntry], today: date | None = None) -> StreakInfo:
    """Current and longest run of consecutive days with at least one entry.

    The current streak may start yesterday: a day without an entry yet does
    not break a streak until the following day.
    """

    entry_dates = {entry.date for entry in entries}
    if not entry_dates:
        return StreakInfo(current_streak=0, longest_streak=0)

    today = today or date.today()
    return StreakInfo(
        current_streak=_current_streak(entry_dates, today),
        longest_streak=_longest_streak(entry_dates),
    )


def _current_streak(entry_dates: set[str], today: date) -> int:
    yesterday = today - timedelta(days=1)
    if format_date(today) in entry_dates:
        cursor = today
    elif format_date(yesterday) in entry_dates:
        cursor = yesterday
    else:
        return 0

    streak = 0
    while format_date(cursor) in entry_dates:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def _longest_streak(entry_dates: set[str]) -> int:
    ordered = sorted(entry_dates, reverse=True)
    longest = 1
    run = 1
    for newer, older in pairwise(ordered):
        if _gap_days(newer, older) == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
    return longest


def _gap_days(newer: str, older: str) -> int | None:
    newer_day = parse_date(newer)
    older_day = parse_date(older)
    # malformed dates never join a run
    if newer_day is None or older_day is None:
        return None
    return (newer_day - older_day).days


__all__ = ["calculate_streak"]
