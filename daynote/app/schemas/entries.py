from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class JournalEntry(BaseModel):
    """A single journal record as persisted by the entry store.

    ``date`` is the local calendar day the entry counts toward and is taken
    as-is; it is never derived from ``created_at`` here.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    date: str
    created_at: str = Field(alias="createdAt")
    mood: int | None = None
    word_count: int = Field(default=0, alias="wordCount")
    text: str = ""
    ai_prompt: str | None = Field(default=None, alias="aiPrompt")
    ai_response: str | None = Field(default=None, alias="aiResponse")


class WeekEntriesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    week_start: str = Field(alias="weekStart")
    week_end: str = Field(alias="weekEnd")
    items: list[JournalEntry]


class EntriesSnapshot(BaseModel):
    items: list[JournalEntry]


__all__ = ["EntriesSnapshot", "JournalEntry", "WeekEntriesResponse"]
