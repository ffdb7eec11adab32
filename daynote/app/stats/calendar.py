from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from ..schemas.entries import JournalEntry
from ..schemas.insights import CalendarDay, CalendarMonth
from .dates import days_in_month, first_weekday_of_month, format_date, weekday_labels
from .moods import average_mood


def calendar_month(
    entries: Iterable[JournalEntry],
    year: int,
    month: int,
    locale: str | None = None,
) -> CalendarMonth:
    """Month grid: Monday-first blank cells, then one record per day."""

    counts: defaultdict[str, int] = defaultdict(int)
    moods: defaultdict[str, list[int]] = defaultdict(list)
    for entry in entries:
        counts[entry.date] += 1
        if entry.mood is not None:
            moods[entry.date].append(entry.mood)

    days = []
    for number in range(1, days_in_month(year, month) + 1):
        key = format_date(date(year, month, number))
        days.append(
            CalendarDay(
                date=key,
                entry_count=counts.get(key, 0),
                mood=average_mood(moods.get(key, [])),
            )
        )

    return CalendarMonth(
        year=year,
        month=month,
        leading_blanks=first_weekday_of_month(year, month),
        weekdays=weekday_labels(locale),
        days=days,
    )


def search_entries(entries: Iterable[JournalEntry], query: str) -> list[JournalEntry]:
    """Entries whose text contains ``query``, case-insensitively.

    A blank query matches nothing.
    """

    needle = query.strip().casefold()
    if not needle:
        return []
    return [entry for entry in entries if needle in entry.text.casefold()]


__all__ = ["calendar_month", "search_entries"]
