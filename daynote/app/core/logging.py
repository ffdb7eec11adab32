from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Any

from .config import Settings, get_settings

# Set by the request middleware so that service-level records carry the id too
request_id_var: ContextVar[str | None] = ContextVar("daynote_request_id", default=None)

_RECORD_FIELDS = (
    "request_id",
    "path",
    "method",
    "status",
    "duration_ms",
    "storage_key",
)

# Loggers that report every outgoing AI call at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai")

_HANDLER_NAMES = ("daynote.file", "daynote.console")


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def __init__(self, *, version: str | None = None) -> None:
        super().__init__()
        self._version = version

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self._version:
            payload["version"] = self._version

        for field in _RECORD_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if "request_id" not in payload:
            request_id = request_id_var.get()
            if request_id:
                payload["request_id"] = request_id

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            payload.update(extra_fields)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(settings: Settings | None = None) -> None:
    """Attach JSON file and console handlers to the root logger once."""

    settings = settings or get_settings()
    root_logger = logging.getLogger()
    if any(handler.get_name() in _HANDLER_NAMES for handler in root_logger.handlers):
        return

    formatter = JsonFormatter(version=settings.version)

    file_handler = RotatingFileHandler(
        settings.log_file,
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler()
    for name, handler in zip(_HANDLER_NAMES, (file_handler, console_handler), strict=True):
        handler.set_name(name)
        handler.setFormatter(formatter)

    root_logger.setLevel(settings.log_level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["JsonFormatter", "configure_logging", "request_id_var"]
