"""Engine, session factory and schema bootstrap for the document store."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from daynote.app.db.models import Base, SettingEntry

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_URL = "sqlite:///./data/daynote.db"
SCHEMA_VERSION_KEY = "schema_version"

# The export/import scripts may hold the SQLite file while the service writes
SQLITE_BUSY_TIMEOUT_MS = 5000

# Sync URL prefixes mapped onto the async drivers the service runs on
_ASYNC_DRIVERS = (
    ("postgres://", "postgresql+asyncpg://"),
    ("postgresql://", "postgresql+asyncpg://"),
    ("sqlite://", "sqlite+aiosqlite://"),
)


def sqlite_file(url: str) -> Path | None:
    """Database file behind a SQLite URL, ``None`` for in-memory or other URLs."""

    if not url.startswith("sqlite") or "///" not in url:
        return None
    location = url.split("///", maxsplit=1)[1].split("?", maxsplit=1)[0]
    if location in {"", ":memory:"}:
        return None
    return Path(location)


def normalize_database_url(raw_url: str | None) -> str:
    url = str(raw_url or DEFAULT_SQLITE_URL)
    for prefix, replacement in _ASYNC_DRIVERS:
        if url.startswith(prefix):
            url = replacement + url[len(prefix):]
            break

    database_file = sqlite_file(url)
    if database_file is not None:
        database_file.parent.mkdir(parents=True, exist_ok=True)
    return url


def _install_sqlite_pragmas(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover - event hook
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
        cursor.close()


def create_engine(database_url: str | None, *, echo: bool = False) -> AsyncEngine:
    url = normalize_database_url(database_url)
    engine = create_async_engine(url, echo=echo)
    if url.startswith("sqlite"):
        _install_sqlite_pragmas(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def _record_schema_version(session: AsyncSession, version: str) -> None:
    result = await session.execute(
        select(SettingEntry).where(SettingEntry.key == SCHEMA_VERSION_KEY)
    )
    setting = result.scalar_one_or_none()
    if setting is None:
        session.add(SettingEntry(key=SCHEMA_VERSION_KEY, value=version))
    elif setting.value != version:
        logger.info("schema version %s -> %s", setting.value, version)
        setting.value = version


async def init_db(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
    version: str,
) -> None:
    """Create missing tables and stamp the running version."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        await _record_schema_version(session, version)
        await session.commit()


__all__ = [
    "DEFAULT_SQLITE_URL",
    "create_engine",
    "create_session_factory",
    "init_db",
    "normalize_database_url",
    "sqlite_file",
]
