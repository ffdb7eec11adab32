"""Persistence-backed collaborators of the analytics engine."""

from .entries import EntriesNotFound, EntryStore
from .storage import StorageError, StorageReadError, StorageService, StorageWriteError
from .summaries import (
    NoEntriesForWeek,
    SummaryGeneration,
    WeeklySummaryService,
    WeeklySummaryStore,
)

__all__ = [
    "EntriesNotFound",
    "EntryStore",
    "NoEntriesForWeek",
    "StorageError",
    "StorageReadError",
    "StorageService",
    "StorageWriteError",
    "SummaryGeneration",
    "WeeklySummaryService",
    "WeeklySummaryStore",
]
