from __future__ import annotations

from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from ..metrics import STORAGE_FAILURES
from ..schemas.entries import JournalEntry
from .storage import StorageReadError, StorageService, StorageWriteError

_ENTRIES = TypeAdapter(list[JournalEntry])


class EntriesNotFound(StorageReadError):
    """No entry document has been written yet."""


class EntryStore:
    """Reads and writes the JSON array holding every journal entry.

    Read failures are raised to the caller, which decides whether a missing
    document means "no entries" or an error.
    """

    def __init__(self, storage: StorageService, *, key: str) -> None:
        self._storage = storage
        self._key = key

    async def load_entries(self) -> list[JournalEntry]:
        try:
            raw = await self._storage.get_blob(self._key)
        except StorageReadError:
            STORAGE_FAILURES.labels(document="entries", operation="read").inc()
            raise
        if raw is None:
            raise EntriesNotFound(f"no entries stored under {self._key!r}")
        try:
            return _ENTRIES.validate_json(raw)
        except ValidationError as exc:
            STORAGE_FAILURES.labels(document="entries", operation="read").inc()
            raise StorageReadError(f"malformed entries under {self._key!r}") from exc

    async def save_entries(self, entries: Iterable[JournalEntry]) -> None:
        payload = _ENTRIES.dump_json(list(entries), by_alias=True, exclude_none=True)
        try:
            await self._storage.set_blob(self._key, payload.decode("utf-8"))
        except StorageWriteError:
            STORAGE_FAILURES.labels(document="entries", operation="write").inc()
            raise


__all__ = ["EntriesNotFound", "EntryStore"]
