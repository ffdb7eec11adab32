from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from ..schemas.entries import JournalEntry
from ..schemas.insights import MOOD_LEVELS, DailyMood, MonthlyMoodDistribution
from .dates import format_date, round_half_up, same_month, weekday_label

WINDOW_DAYS = 7


def average_mood(moods: Sequence[int]) -> int | None:
    """Rounded mean of the given mood values, ``None`` when nothing was rated."""

    if not moods:
        return None
    return round_half_up(sum(moods) / len(moods))


def last_7_days_mood(
    entries: Iterable[JournalEntry],
    today: date | None = None,
    locale: str | None = None,
) -> list[DailyMood]:
    """One record per day for ``[today - 6, today]``, oldest first."""

    today = today or date.today()
    moods_by_date: defaultdict[str, list[int]] = defaultdict(list)
    for entry in entries:
        if entry.mood is not None:
            moods_by_date[entry.date].append(entry.mood)

    result: list[DailyMood] = []
    for offset in range(WINDOW_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = format_date(day)
        result.append(
            DailyMood(
                date=key,
                day_label=weekday_label(day, locale),
                mood=average_mood(moods_by_date.get(key, [])),
            )
        )
    return result


def monthly_mood_distribution(
    entries: Iterable[JournalEntry],
    today: date | None = None,
) -> MonthlyMoodDistribution:
    today = today or date.today()
    counter = Counter(
        entry.mood
        for entry in entries
        if entry.mood is not None and same_month(entry.date, today)
    )
    return MonthlyMoodDistribution(
        counts={level: counter.get(level, 0) for level in MOOD_LEVELS}
    )


__all__ = ["WINDOW_DAYS", "average_mood", "last_7_days_mood", "monthly_mood_distribution"]
