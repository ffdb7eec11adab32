from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from daynote.app.services.storage import StorageReadError, StorageService, StorageWriteError


class _BrokenSession:
    async def __aenter__(self):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    async def __aexit__(self, *exc_info) -> bool:
        return False


def _broken_factory() -> _BrokenSession:
    return _BrokenSession()


@pytest.mark.anyio
async def test_blob_roundtrip_and_overwrite(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    await storage.healthcheck()

    assert await storage.get_blob("@daynote/entries") is None

    await storage.set_blob("@daynote/entries", "[]")
    await storage.set_blob("@daynote/entries", '[{"id": "1"}]')

    assert await storage.get_blob("@daynote/entries") == '[{"id": "1"}]'


@pytest.mark.anyio
async def test_delete_all_wipes_every_document(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    await storage.set_blob("@daynote/entries", "[]")
    await storage.set_blob("@daynote/weekly_summaries", "[]")

    removed = await storage.delete_all()

    assert removed == 2
    assert await storage.get_blob("@daynote/entries") is None


@pytest.mark.anyio
async def test_database_errors_are_wrapped() -> None:
    storage = StorageService(_broken_factory)  # type: ignore[arg-type]

    with pytest.raises(StorageReadError):
        await storage.get_blob("@daynote/entries")
    with pytest.raises(StorageWriteError):
        await storage.set_blob("@daynote/entries", "[]")
