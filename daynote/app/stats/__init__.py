"""Streak, writing, mood and calendar analytics over journal entry snapshots."""

from .calendar import calendar_month, search_entries
from .dates import (
    WeekRange,
    current_week_identifier,
    format_week_range,
    week_identifier,
    week_range,
)
from .moods import last_7_days_mood, monthly_mood_distribution
from .streaks import calculate_streak
from .weekly import entries_for_week
from .writing import calculate_writing_stats

__all__ = [
    "WeekRange",
    "calculate_streak",
    "calculate_writing_stats",
    "calendar_month",
    "current_week_identifier",
    "entries_for_week",
    "format_week_range",
    "last_7_days_mood",
    "monthly_mood_distribution",
    "search_entries",
    "week_identifier",
    "week_range",
]
