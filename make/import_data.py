from __future__ import annotations

import argparse
import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from sqlalchemy import DateTime, bindparam, create_engine, text

from daynote.app.schemas.entries import JournalEntry
from make.export_data import DEFAULT_ENTRIES_KEY, DEFAULT_SQLITE_URL, sync_database_url

_ENTRIES = TypeAdapter(list[JournalEntry])


def read_export(input_path: Path) -> list[JournalEntry]:
    """Accept either an export document or a bare array of entries."""

    payload: Any = json.loads(input_path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("entries", [])
    return _ENTRIES.validate_python(payload)


def import_entries(database_url: str, input_path: Path, *, key: str = DEFAULT_ENTRIES_KEY) -> int:
    entries = read_export(input_path)
    value = _ENTRIES.dump_json(entries, by_alias=True, exclude_none=True).decode("utf-8")

    engine = create_engine(sync_database_url(database_url))
    try:
        with engine.begin() as connection:
            connection.execute(
                text(
                    """
                    INSERT INTO storage_blobs (key, value, updated_at)
                    VALUES (:key, :value, :updated_at)
                    ON CONFLICT (key) DO UPDATE
                    SET value = excluded.value, updated_at = excluded.updated_at
                    """
                ).bindparams(bindparam("updated_at", type_=DateTime())),
                {"key": key, "value": value, "updated_at": datetime.now(UTC)},
            )
    finally:
        engine.dispose()
    return len(entries)


def main() -> None:
    parser = argparse.ArgumentParser(description="Import DayNote journal entries from JSON")
    parser.add_argument(
        "--input",
        default=Path("data/daynote_export.json"),
        type=Path,
        help="Path to JSON file produced by export_data.py",
    )
    parser.add_argument("--database-url", default=DEFAULT_SQLITE_URL, help="Target DATABASE_URL")
    parser.add_argument("--key", default=DEFAULT_ENTRIES_KEY, help="Entries storage key")
    args = parser.parse_args()

    count = import_entries(args.database_url, args.input, key=args.key)
    print(f"imported {count} entries from {args.input}")


if __name__ == "__main__":
    main()
