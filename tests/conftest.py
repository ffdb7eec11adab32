from __future__ import annotations

import asyncio
from collections.abc import Callable, Generator
from pathlib import Path
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from daynote.app.core import config
from daynote.app.schemas.entries import JournalEntry
from daynote.db import create_engine, create_session_factory, init_db


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def entry_factory() -> Callable[..., JournalEntry]:
    def _make(day: str, *, mood: int | None = None, words: int = 0, text: str = "") -> JournalEntry:
        return JournalEntry(
            id=uuid4().hex,
            date=day,
            created_at=f"{day}T09:00:00.000Z",
            mood=mood,
            word_count=words,
            text=text,
        )

    return _make


@pytest.fixture()
def test_client(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Generator[TestClient, None, None]:
    monkeypatch.delenv("MINIMAX_API_KEY", raising=False)
    monkeypatch.delenv("KIMI_API_KEY", raising=False)
    monkeypatch.setenv("VERSION", "0.1.0-test")
    monkeypatch.setenv("DAYNOTE_LOCALE", "tr")
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "daynote.log"))

    db_path = tmp_path / f"test_{uuid4().hex}.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    config.get_settings.cache_clear()

    from daynote.app.main import app

    try:
        with TestClient(app) as client:
            yield client
    finally:
        config.get_settings.cache_clear()


@pytest.fixture()
def temp_session_factory(tmp_path: Path):
    db_path = tmp_path / f"unit_{uuid4().hex}.db"
    database_url = f"sqlite+aiosqlite:///{db_path}"
    engine = create_engine(database_url)
    session_factory = create_session_factory(engine)

    async def _prepare() -> None:
        await init_db(engine, session_factory, "test")
        # connections are reopened on the loop of the test itself
        await engine.dispose()

    asyncio.run(_prepare())
    try:
        yield session_factory
    finally:
        asyncio.run(engine.dispose())
