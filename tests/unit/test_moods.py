from __future__ import annotations

from datetime import date

from daynote.app.stats import last_7_days_mood, monthly_mood_distribution
from daynote.app.stats.moods import average_mood

TODAY = date(2024, 3, 10)


def test_average_mood_rounds_half_up() -> None:
    assert average_mood([]) is None
    assert average_mood([4, 5]) == 5
    assert average_mood([3, 4]) == 4
    assert average_mood([2, 2, 3]) == 2


def test_last_seven_days_window(entry_factory) -> None:
    days = last_7_days_mood([], TODAY)
    assert len(days) == 7
    assert days[0].date == "2024-03-04"
    assert days[-1].date == "2024-03-10"
    assert [item.day_label for item in days] == ["Pzt", "Sal", "Çar", "Per", "Cum", "Cmt", "Paz"]
    assert all(item.mood is None for item in days)


def test_last_seven_days_averages_rated_entries(entry_factory) -> None:
    entries = [
        entry_factory("2024-03-10", mood=4),
        entry_factory("2024-03-10", mood=5),
        entry_factory("2024-03-10"),
        entry_factory("2024-03-08", mood=2),
        entry_factory("2024-03-03", mood=1),
    ]
    days = {item.date: item.mood for item in last_7_days_mood(entries, TODAY)}
    assert days["2024-03-10"] == 5
    assert days["2024-03-08"] == 2
    assert days["2024-03-09"] is None
    assert "2024-03-03" not in days


def test_last_seven_days_english_labels() -> None:
    days = last_7_days_mood([], date(2024, 3, 6), "en")
    assert days[0].day_label == "Thu"
    assert days[-1].day_label == "Wed"


def test_monthly_distribution_counts_rated_entries_of_month(entry_factory) -> None:
    entries = [
        entry_factory("2024-03-01", mood=5),
        entry_factory("2024-03-02", mood=5),
        entry_factory("2024-03-03", mood=1),
        entry_factory("2024-03-04"),
        entry_factory("2024-02-28", mood=3),
    ]
    distribution = monthly_mood_distribution(entries, TODAY)
    assert distribution.counts == {1: 1, 2: 0, 3: 0, 4: 0, 5: 2}
    assert distribution[5] == 2
    assert distribution.total == 3


def test_monthly_distribution_total_matches_rated_entries(entry_factory) -> None:
    entries = [entry_factory(f"2024-03-{day:02d}", mood=(day % 5) + 1) for day in range(1, 11)]
    distribution = monthly_mood_distribution(entries, TODAY)
    assert set(distribution.counts) == {1, 2, 3, 4, 5}
    assert distribution.total == len(entries)


def test_average_mood_rounding_examples() -> None:
    assert average_mood([3, 3]) == 3
    assert average_mood([2, 4]) == 3
    assert average_mood([1, 5, 5]) == 4
