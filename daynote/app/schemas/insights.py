from __future__ import annotations

from datetime import UTC, date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

MOOD_LEVELS = (1, 2, 3, 4, 5)


class StreakInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_streak: int = Field(default=0, ge=0, alias="currentStreak")
    longest_streak: int = Field(default=0, ge=0, alias="longestStreak")


class WritingStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_entries: int = Field(default=0, alias="totalEntries")
    total_word_count: int = Field(default=0, alias="totalWordCount")
    average_words_per_entry: int = Field(default=0, alias="averageWordsPerEntry")
    this_month_count: int = Field(default=0, alias="thisMonthCount")
    this_month_word_count: int = Field(default=0, alias="thisMonthWordCount")


class DailyMood(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    day_label: str = Field(alias="dayLabel")
    mood: int | None = None


class MonthlyMoodDistribution(BaseModel):
    """Count of rated entries per mood level for one calendar month."""

    counts: dict[int, int] = Field(
        default_factory=lambda: {level: 0 for level in MOOD_LEVELS}
    )

    @computed_field(return_type=int)
    def total(self) -> int:
        return sum(self.counts.values())

    def __getitem__(self, level: int) -> int:
        return self.counts[level]


class WeeklySummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    week_start: str = Field(alias="weekStart")
    week_end: str = Field(alias="weekEnd")
    summary: str
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at", mode="after")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # naive timestamps would not sort against aware ones
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class CalendarDay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    entry_count: int = Field(default=0, ge=0, alias="entryCount")
    mood: int | None = None


class CalendarMonth(BaseModel):
    """One calendar page: blank cells before day 1, then every day of the month."""

    model_config = ConfigDict(populate_by_name=True)

    year: int
    month: int = Field(ge=1, le=12)
    leading_blanks: int = Field(ge=0, le=6, alias="leadingBlanks")
    weekdays: list[str]
    days: list[CalendarDay]


class InsightsOverview(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    streak: StreakInfo
    writing: WritingStats
    week_moods: list[DailyMood] = Field(alias="weekMoods")
    month_moods: MonthlyMoodDistribution = Field(alias="monthMoods")


class CurrentWeekResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    week_start: date = Field(alias="weekStart")
    week_end: date = Field(alias="weekEnd")
    label: str
    has_summary: bool = Field(alias="hasSummary")
    entries_count: int = Field(alias="entriesCount")


class SummaryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(..., min_length=1, max_length=8000)
    week_start: date | None = Field(default=None, alias="weekStart")


class SummaryListResponse(BaseModel):
    items: list[WeeklySummary]


class SummaryGenerateResponse(BaseModel):
    ok: bool
    summary: WeeklySummary | None = None
    provider: str | None = None
    error: str | None = None


__all__ = [
    "MOOD_LEVELS",
    "CalendarDay",
    "CalendarMonth",
    "CurrentWeekResponse",
    "DailyMood",
    "InsightsOverview",
    "MonthlyMoodDistribution",
    "StreakInfo",
    "SummaryCreate",
    "SummaryGenerateResponse",
    "SummaryListResponse",
    "WeeklySummary",
    "WritingStats",
]
