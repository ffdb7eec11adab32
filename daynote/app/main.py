from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from daynote.db import create_engine, create_session_factory, init_db

from .ai import AIRouter
from .api.v1.routes import router as v1_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .middleware import RequestLoggingMiddleware
from .services.entries import EntryStore
from .services.storage import StorageService
from .services.summaries import WeeklySummaryService, WeeklySummaryStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire storage, stores and AI providers for the lifetime of the app."""

    configure_logging()
    settings: Settings = get_settings()

    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    await init_db(engine, session_factory, settings.version)
    storage_service = StorageService(session_factory)

    entry_store = EntryStore(storage_service, key=settings.entries_storage_key)
    summary_store = WeeklySummaryStore(storage_service, key=settings.summaries_storage_key)
    ai_router = AIRouter.from_settings(settings)
    summary_service = WeeklySummaryService(summary_store, ai_router)

    app.state.settings = settings
    app.state.db_engine = engine
    app.state.db_session_factory = session_factory
    app.state.storage_service = storage_service
    app.state.entry_store = entry_store
    app.state.summary_store = summary_store
    app.state.ai_router = ai_router
    app.state.summary_service = summary_service

    if ai_router.available:
        logger.info("AI providers configured: %s", ", ".join(ai_router.providers))
    else:
        logger.info("No AI provider keys configured; prompts fall back to local questions")

    logger.info("Starting DayNote %s locale=%s", settings.version, settings.locale)

    try:
        yield
    finally:
        await engine.dispose()


app = FastAPI(title="DayNote", version=get_settings().version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(v1_router)


@app.get("/healthz")
async def healthz(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {"status": "ok", "version": settings.version}


@app.get("/readyz")
async def readyz(request: Request) -> dict[str, Any]:
    storage: StorageService = request.app.state.storage_service
    ai_router: AIRouter = request.app.state.ai_router

    db_ok = True
    db_detail = "ok"
    try:
        await storage.healthcheck()
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.exception("Database readiness check failed")
        db_ok = False
        db_detail = str(exc)

    return {
        "ready": db_ok,
        "db": {"ok": db_ok, "detail": db_detail},
        "ai": {"available": ai_router.available, "providers": ai_router.providers},
    }


@app.get("/metrics")
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
