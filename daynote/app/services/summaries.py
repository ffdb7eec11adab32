from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from ..ai.router import AIRouter
from ..metrics import STORAGE_FAILURES
from ..schemas.entries import JournalEntry
from ..schemas.insights import WeeklySummary
from ..stats.dates import current_week_identifier, format_date, week_range
from ..stats.weekly import entries_for_week
from .storage import StorageReadError, StorageService, StorageWriteError

logger = logging.getLogger(__name__)

_SUMMARIES = TypeAdapter(list[WeeklySummary])
_SUMMARY = TypeAdapter(WeeklySummary)


class NoEntriesForWeek(Exception):
    """A summary was requested for a week without entries."""


class WeeklySummaryStore:
    """Append-only collection of generated weekly summaries.

    Reads never fail: an unreadable document is logged and treated as empty,
    and records that fail validation are skipped one by one.
    Writes raise ``StorageWriteError``.
    """

    def __init__(self, storage: StorageService, *, key: str) -> None:
        self._storage = storage
        self._key = key

    async def list_summaries(self) -> list[WeeklySummary]:
        try:
            raw = await self._storage.get_blob(self._key)
            records = json.loads(raw) if raw else []
        except (StorageReadError, ValueError):
            STORAGE_FAILURES.labels(document="summaries", operation="read").inc()
            logger.warning(
                "failed to load weekly summaries",
                extra={"storage_key": self._key},
                exc_info=True,
            )
            return []
        if not isinstance(records, list):
            STORAGE_FAILURES.labels(document="summaries", operation="read").inc()
            logger.warning(
                "weekly summaries document is not a list",
                extra={"storage_key": self._key},
            )
            return []

        summaries = [item for item in map(self._parse_record, records) if item is not None]
        return sorted(summaries, key=lambda item: item.created_at, reverse=True)

    def _parse_record(self, record: object) -> WeeklySummary | None:
        # invalid records are dropped individually
        try:
            return _SUMMARY.validate_python(record)
        except ValidationError as exc:
            logger.warning(
                "skipping invalid weekly summary",
                extra={
                    "storage_key": self._key,
                    "extra_fields": {"errors": exc.error_count()},
                },
            )
            return None

    async def save_summary(self, summary: WeeklySummary) -> None:
        existing = await self.list_summaries()
        updated = [summary, *existing]
        payload = _SUMMARIES.dump_json(updated, by_alias=True)
        try:
            await self._storage.set_blob(self._key, payload.decode("utf-8"))
        except StorageWriteError:
            STORAGE_FAILURES.labels(document="summaries", operation="write").inc()
            logger.error(
                "failed to save weekly summary",
                extra={"storage_key": self._key},
                exc_info=True,
            )
            raise

    async def has_summary_for_week(self, week_start: str | date) -> bool:
        key = week_start.isoformat() if isinstance(week_start, date) else week_start
        summaries = await self.list_summaries()
        return any(item.week_start == key for item in summaries)

    @staticmethod
    def entries_for_week(
        entries: Sequence[JournalEntry],
        week_start: str | date,
    ) -> list[JournalEntry]:
        return entries_for_week(entries, week_start)


@dataclass
class SummaryGeneration:
    summary: WeeklySummary | None = None
    provider: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.summary is not None


class WeeklySummaryService:
    """Generate and persist the summary of the current week."""

    def __init__(
        self,
        store: WeeklySummaryStore,
        ai_router: AIRouter,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._ai_router = ai_router
        self._clock = clock or (lambda: datetime.now(UTC))

    async def generate_current_week(
        self,
        entries: Sequence[JournalEntry],
        *,
        today: date | None = None,
        locale: str | None = None,
    ) -> SummaryGeneration:
        week_start = current_week_identifier(today)
        bounds = week_range(week_start)
        week_entries = entries_for_week(entries, week_start)
        if not week_entries:
            raise NoEntriesForWeek(f"no entries between {bounds.start} and {bounds.end}")

        result = await self._ai_router.generate_weekly_summary(week_entries, locale)
        if not result.success or not result.text:
            return SummaryGeneration(error=result.error)

        summary = WeeklySummary(
            id=uuid4().hex,
            week_start=format_date(bounds.start),
            week_end=format_date(bounds.end),
            summary=result.text,
            created_at=self._clock(),
        )
        await self._store.save_summary(summary)
        logger.info(
            "weekly summary saved",
            extra={
                "extra_fields": {
                    "week_start": summary.week_start,
                    "entries": len(week_entries),
                    "provider": result.provider,
                }
            },
        )
        return SummaryGeneration(summary=summary, provider=result.provider)


__all__ = [
    "NoEntriesForWeek",
    "SummaryGeneration",
    "WeeklySummaryService",
    "WeeklySummaryStore",
]
