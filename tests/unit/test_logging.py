from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from daynote.app.core import config
from daynote.app.core.logging import JsonFormatter, configure_logging, request_id_var


@pytest.fixture(autouse=True)
def reset_settings_cache() -> None:
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_configure_logging_creates_handlers(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    log_file = tmp_path / "app.log"
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.chdir(tmp_path)

    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    try:
        configure_logging()
        handlers = [
            handler
            for handler in root_logger.handlers
            if isinstance(handler, RotatingFileHandler)
        ]
        assert handlers
        assert Path(handlers[0].baseFilename) == log_file

        handler_count = len(root_logger.handlers)
        configure_logging()
        assert len(root_logger.handlers) == handler_count
    finally:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        for handler in original_handlers:
            root_logger.addHandler(handler)


def test_json_formatter_outputs_keys() -> None:
    record = _record()
    record.request_id = "req-1"
    record.storage_key = "@daynote/entries"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["request_id"] == "req-1"
    assert payload["storage_key"] == "@daynote/entries"
    assert payload["level"] == "INFO"


def test_json_formatter_merges_extra_fields() -> None:
    record = _record("weekly summary saved")
    record.extra_fields = {"week_start": "2024-03-04", "provider": "kimi"}

    payload = json.loads(JsonFormatter().format(record))

    assert payload["week_start"] == "2024-03-04"
    assert payload["provider"] == "kimi"


def test_json_formatter_uses_request_context() -> None:
    token = request_id_var.set("ctx-42")
    try:
        payload = json.loads(JsonFormatter(version="1.0.0").format(_record()))
    finally:
        request_id_var.reset(token)

    assert payload["request_id"] == "ctx-42"
    assert payload["version"] == "1.0.0"
