from __future__ import annotations

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..db.models import StorageBlob


class StorageError(Exception):
    """Base class for persistence failures."""


class StorageReadError(StorageError):
    """A stored document could not be read or decoded."""


class StorageWriteError(StorageError):
    """A document could not be persisted."""


class StorageService:
    """Persist opaque JSON documents keyed by name."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def healthcheck(self) -> None:
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))

    async def get_blob(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(StorageBlob.value).where(StorageBlob.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageReadError(f"failed to read {key!r}") from exc

    async def set_blob(self, key: str, value: str) -> None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(StorageBlob).where(StorageBlob.key == key)
                )
                entry = result.scalar_one_or_none()
                if entry is None:
                    session.add(StorageBlob(key=key, value=value))
                else:
                    entry.value = value
                await session.commit()
        except SQLAlchemyError as exc:
            raise StorageWriteError(f"failed to write {key!r}") from exc

    async def delete_all(self) -> int:
        """Wipe every stored document."""

        try:
            async with self._session_factory() as session:
                result = await session.execute(delete(StorageBlob))
                await session.commit()
                return int(result.rowcount or 0)
        except SQLAlchemyError as exc:
            raise StorageWriteError("failed to wipe storage") from exc


__all__ = [
    "StorageError",
    "StorageReadError",
    "StorageService",
    "StorageWriteError",
]
