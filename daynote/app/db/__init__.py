"""Database utilities for DayNote."""

from .models import Base, SettingEntry, StorageBlob

__all__ = [
    "Base",
    "SettingEntry",
    "StorageBlob",
]
