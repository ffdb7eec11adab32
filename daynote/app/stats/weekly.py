from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from ..schemas.entries import JournalEntry
from .dates import format_date, week_range


def entries_for_week(entries: Iterable[JournalEntry], week_start: str | date) -> list[JournalEntry]:
    """Entries dated within the 7-day window starting at ``week_start``.

    ``YYYY-MM-DD`` strings sort chronologically, so bounds are compared as text.
    """

    bounds = week_range(week_start)
    start = format_date(bounds.start)
    end = format_date(bounds.end)
    return [entry for entry in entries if start <= entry.date <= end]


__all__ = ["entries_for_week"]
