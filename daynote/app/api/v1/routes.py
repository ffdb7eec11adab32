from __future__ import annotations

import logging
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status

from ...ai.prompts import contextual_prompt
from ...ai.router import AIRouter
from ...metrics import USER_API_COUNTER
from ...schemas.ai import PromptResponse, ReflectionRequest, ReflectionResponse
from ...schemas.entries import EntriesSnapshot, JournalEntry, WeekEntriesResponse
from ...schemas.insights import (
    CalendarMonth,
    CurrentWeekResponse,
    DailyMood,
    InsightsOverview,
    MonthlyMoodDistribution,
    StreakInfo,
    SummaryCreate,
    SummaryGenerateResponse,
    SummaryListResponse,
    WeeklySummary,
    WritingStats,
)
from ...services.entries import EntriesNotFound, EntryStore
from ...services.storage import StorageReadError, StorageService, StorageWriteError
from ...services.summaries import NoEntriesForWeek, WeeklySummaryService, WeeklySummaryStore
from ...stats import (
    calculate_streak,
    calculate_writing_stats,
    calendar_month,
    current_week_identifier,
    entries_for_week,
    format_week_range,
    last_7_days_mood,
    monthly_mood_distribution,
    search_entries,
    week_range,
)
from ...stats.dates import format_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["insights"])


def get_entry_store(request: Request) -> EntryStore:
    return request.app.state.entry_store


def get_summary_store(request: Request) -> WeeklySummaryStore:
    return request.app.state.summary_store


def get_summary_service(request: Request) -> WeeklySummaryService:
    return request.app.state.summary_service


def get_ai_router(request: Request) -> AIRouter:
    return request.app.state.ai_router


def resolve_locale(request: Request, locale: str | None = Query(default=None)) -> str:
    return locale or request.app.state.settings.locale


async def load_snapshot(store: EntryStore = Depends(get_entry_store)) -> list[JournalEntry]:
    try:
        return await store.load_entries()
    except EntriesNotFound:
        return []
    except StorageReadError as exc:
        logger.error("failed to load journal entries", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="entries unavailable",
        ) from exc


@router.get("/insights", response_model=InsightsOverview)
async def read_insights(
    entries: list[JournalEntry] = Depends(load_snapshot),
    locale: str = Depends(resolve_locale),
) -> InsightsOverview:
    today = date.today()
    USER_API_COUNTER.labels(endpoint="insights").inc()
    return InsightsOverview(
        streak=calculate_streak(entries, today),
        writing=calculate_writing_stats(entries, today),
        week_moods=last_7_days_mood(entries, today, locale),
        month_moods=monthly_mood_distribution(entries, today),
    )


@router.get("/insights/streak", response_model=StreakInfo)
async def read_streak(entries: list[JournalEntry] = Depends(load_snapshot)) -> StreakInfo:
    USER_API_COUNTER.labels(endpoint="insights_streak").inc()
    return calculate_streak(entries)


@router.get("/insights/writing", response_model=WritingStats)
async def read_writing_stats(
    entries: list[JournalEntry] = Depends(load_snapshot),
) -> WritingStats:
    USER_API_COUNTER.labels(endpoint="insights_writing").inc()
    return calculate_writing_stats(entries)


@router.get("/insights/moods/week", response_model=list[DailyMood])
async def read_week_moods(
    entries: list[JournalEntry] = Depends(load_snapshot),
    locale: str = Depends(resolve_locale),
) -> list[DailyMood]:
    USER_API_COUNTER.labels(endpoint="insights_moods_week").inc()
    return last_7_days_mood(entries, locale=locale)


@router.get("/insights/moods/month", response_model=MonthlyMoodDistribution)
async def read_month_moods(
    entries: list[JournalEntry] = Depends(load_snapshot),
) -> MonthlyMoodDistribution:
    USER_API_COUNTER.labels(endpoint="insights_moods_month").inc()
    return monthly_mood_distribution(entries)


@router.get("/weeks/current", response_model=CurrentWeekResponse)
async def read_current_week(
    entries: list[JournalEntry] = Depends(load_snapshot),
    store: WeeklySummaryStore = Depends(get_summary_store),
    locale: str = Depends(resolve_locale),
) -> CurrentWeekResponse:
    bounds = week_range(current_week_identifier())
    USER_API_COUNTER.labels(endpoint="weeks_current").inc()
    return CurrentWeekResponse(
        week_start=bounds.start,
        week_end=bounds.end,
        label=format_week_range(bounds.start, bounds.end, locale),
        has_summary=await store.has_summary_for_week(bounds.start),
        entries_count=len(entries_for_week(entries, bounds.start)),
    )


@router.get("/weeks/{week_start}/entries", response_model=WeekEntriesResponse)
async def read_week_entries(
    week_start: date,
    entries: list[JournalEntry] = Depends(load_snapshot),
) -> WeekEntriesResponse:
    bounds = week_range(week_start)
    USER_API_COUNTER.labels(endpoint="weeks_entries").inc()
    return WeekEntriesResponse(
        week_start=format_date(bounds.start),
        week_end=format_date(bounds.end),
        items=entries_for_week(entries, week_start),
    )


@router.get("/summaries", response_model=SummaryListResponse)
async def list_summaries(
    store: WeeklySummaryStore = Depends(get_summary_store),
) -> SummaryListResponse:
    USER_API_COUNTER.labels(endpoint="summaries_get").inc()
    return SummaryListResponse(items=await store.list_summaries())


@router.post(
    "/summaries",
    response_model=WeeklySummary,
    status_code=status.HTTP_201_CREATED,
)
async def create_summary(
    payload: SummaryCreate,
    store: WeeklySummaryStore = Depends(get_summary_store),
) -> WeeklySummary:
    week_start = payload.week_start or current_week_identifier()
    summary = WeeklySummary(
        id=uuid4().hex,
        week_start=format_date(week_start),
        week_end=format_date(week_start + timedelta(days=6)),
        summary=payload.summary,
        created_at=datetime.now(UTC),
    )
    try:
        await store.save_summary(summary)
    except StorageWriteError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="summary could not be saved",
        ) from exc
    USER_API_COUNTER.labels(endpoint="summaries_post").inc()
    return summary


@router.post("/summaries/generate", response_model=SummaryGenerateResponse)
async def generate_summary(
    entries: list[JournalEntry] = Depends(load_snapshot),
    service: WeeklySummaryService = Depends(get_summary_service),
    locale: str = Depends(resolve_locale),
) -> SummaryGenerateResponse:
    try:
        outcome = await service.generate_current_week(entries, locale=locale)
    except NoEntriesForWeek as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageWriteError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="summary could not be saved",
        ) from exc
    USER_API_COUNTER.labels(endpoint="summaries_generate").inc()
    return SummaryGenerateResponse(
        ok=outcome.ok,
        summary=outcome.summary,
        provider=outcome.provider,
        error=outcome.error,
    )


@router.get("/prompts/daily", response_model=PromptResponse)
async def daily_prompt(
    ai_router: AIRouter = Depends(get_ai_router),
    locale: str = Depends(resolve_locale),
) -> PromptResponse:
    USER_API_COUNTER.labels(endpoint="prompts_daily").inc()
    if ai_router.available:
        result = await ai_router.generate_prompt(locale)
        if result.success and result.text:
            return PromptResponse(text=result.text, source="ai", provider=result.provider)
    return PromptResponse(text=contextual_prompt(datetime.now(), locale), source="local")


@router.post("/reflections", response_model=ReflectionResponse)
async def create_reflection(
    payload: ReflectionRequest,
    request: Request,
    ai_router: AIRouter = Depends(get_ai_router),
) -> ReflectionResponse:
    locale = payload.locale or request.app.state.settings.locale
    result = await ai_router.generate_reflection(payload.text, locale)
    USER_API_COUNTER.labels(endpoint="reflections").inc()
    return ReflectionResponse(
        ok=result.success,
        text=result.text,
        provider=result.provider,
        error=result.error,
    )


@router.get("/entries", response_model=EntriesSnapshot)
async def read_entries(
    entries: list[JournalEntry] = Depends(load_snapshot),
) -> EntriesSnapshot:
    USER_API_COUNTER.labels(endpoint="entries_get").inc()
    return EntriesSnapshot(items=entries)


@router.put("/entries", response_model=EntriesSnapshot)
async def replace_entries(
    payload: EntriesSnapshot,
    store: EntryStore = Depends(get_entry_store),
) -> EntriesSnapshot:
    try:
        await store.save_entries(payload.items)
    except StorageWriteError as exc:
        logger.error("failed to save journal entries", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="entries could not be saved",
        ) from exc
    USER_API_COUNTER.labels(endpoint="entries_put").inc()
    return payload


@router.delete("/data")
async def delete_all_data(request: Request) -> dict[str, int]:
    storage: StorageService = request.app.state.storage_service
    try:
        removed = await storage.delete_all()
    except StorageWriteError as exc:
        logger.error("failed to wipe stored documents", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="data could not be deleted",
        ) from exc
    logger.warning("all stored documents deleted", extra={"extra_fields": {"removed": removed}})
    USER_API_COUNTER.labels(endpoint="data_delete").inc()
    return {"removed": removed}


@router.get("/calendar/{year}/{month}", response_model=CalendarMonth)
async def read_calendar_month(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    entries: list[JournalEntry] = Depends(load_snapshot),
    locale: str = Depends(resolve_locale),
) -> CalendarMonth:
    USER_API_COUNTER.labels(endpoint="calendar_month").inc()
    return calendar_month(entries, year, month, locale)


@router.get("/entries/search", response_model=EntriesSnapshot)
async def search_entry_text(
    q: str = Query(default="", max_length=200),
    entries: list[JournalEntry] = Depends(load_snapshot),
) -> EntriesSnapshot:
    USER_API_COUNTER.labels(endpoint="entries_search").inc()
    return EntriesSnapshot(items=search_entries(entries, q))
