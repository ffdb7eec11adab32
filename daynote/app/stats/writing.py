from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from ..schemas.entries import JournalEntry
from ..schemas.insights import WritingStats
from .dates import round_half_up, same_month


def calculate_writing_stats(
    entries: Sequence[JournalEntry],
    today: date | None = None,
) -> WritingStats:
    today = today or date.today()
    total_entries = len(entries)
    total_word_count = sum(entry.word_count for entry in entries)
    average = round_half_up(total_word_count / total_entries) if total_entries else 0

    month_entries = [entry for entry in entries if same_month(entry.date, today)]

    return WritingStats(
        total_entries=total_entries,
        total_word_count=total_word_count,
        average_words_per_entry=average,
        this_month_count=len(month_entries),
        this_month_word_count=sum(entry.word_count for entry in month_entries),
    )


__all__ = ["calculate_writing_stats"]
