from __future__ import annotations

import argparse
import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, text

DEFAULT_SQLITE_URL = "sqlite:///./data/daynote.db"
DEFAULT_ENTRIES_KEY = "@daynote/entries"
APP_NAME = "DayNote"


def sync_database_url(url: str) -> str:
    """Map the async URLs used by the service onto sync drivers."""

    if url.startswith("sqlite+aiosqlite://"):
        return url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    if url.startswith("postgresql+asyncpg://"):
        return url.replace("postgresql+asyncpg://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://") and "+" not in url.split("://", 1)[0]:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def build_export(entries: list[Any], exported_at: datetime | None = None) -> dict[str, Any]:
    moment = exported_at or datetime.now(UTC)
    return {
        "appName": APP_NAME,
        "exportDate": moment.isoformat(),
        "entryCount": len(entries),
        "entries": entries,
    }


def export_entries(database_url: str, output_path: Path, *, key: str = DEFAULT_ENTRIES_KEY) -> int:
    engine = create_engine(sync_database_url(database_url))
    try:
        with engine.begin() as connection:
            raw = connection.execute(
                text("SELECT value FROM storage_blobs WHERE key = :key"),
                {"key": key},
            ).scalar_one_or_none()
    finally:
        engine.dispose()

    entries = json.loads(raw) if raw else []
    payload = build_export(entries)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return len(entries)


def main() -> None:
    parser = argparse.ArgumentParser(description="Export DayNote journal entries to JSON")
    parser.add_argument("--database-url", default=DEFAULT_SQLITE_URL, help="DATABASE_URL")
    parser.add_argument("--key", default=DEFAULT_ENTRIES_KEY, help="Entries storage key")
    parser.add_argument(
        "--output",
        default="data/daynote_export.json",
        type=Path,
        help="Path to export JSON file",
    )
    args = parser.parse_args()

    count = export_entries(args.database_url, args.output, key=args.key)
    print(f"exported {count} entries to {args.output}")


if __name__ == "__main__":
    main()
