from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from daynote.db import normalize_database_url

SUPPORTED_LOCALES = {"tr", "en"}
SUPPORTED_AI_MODELS = {"minimax", "kimi"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/daynote.db",
        alias="DATABASE_URL",
    )
    log_file: Path = Field(default=Path("logs/daynote.log"), alias="LOG_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    locale: str = Field(default="tr", alias="DAYNOTE_LOCALE")

    # Opaque keys of the two persisted JSON arrays
    entries_storage_key: str = Field(
        default="@daynote/entries",
        alias="ENTRIES_STORAGE_KEY",
    )
    summaries_storage_key: str = Field(
        default="@daynote/weekly_summaries",
        alias="SUMMARIES_STORAGE_KEY",
    )

    # AI provider configuration
    ai_model: str = Field(default="minimax", alias="AI_MODEL")
    minimax_api_key: str | None = Field(default=None, alias="MINIMAX_API_KEY")
    minimax_base_url: str = Field(
        default="https://api.minimaxi.chat/v1",
        alias="MINIMAX_BASE_URL",
    )
    minimax_model: str = Field(default="MiniMax-M2.5", alias="MINIMAX_MODEL")
    kimi_api_key: str | None = Field(default=None, alias="KIMI_API_KEY")
    kimi_base_url: str = Field(default="https://api.moonshot.cn/v1", alias="KIMI_BASE_URL")
    kimi_model: str = Field(default="kimi-latest", alias="KIMI_MODEL")
    ai_temperature: float = Field(default=0.7, alias="AI_TEMPERATURE")
    ai_max_tokens: int = Field(default=500, alias="AI_MAX_TOKENS")
    request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")
    retry_attempts: int = Field(default=2, alias="RETRY_ATTEMPTS")

    version: str = Field(default_factory=lambda: Settings._load_version())

    @staticmethod
    def _load_version() -> str:
        version_env = os.getenv("VERSION")
        if version_env:
            return version_env
        version_file = Path("VERSION")
        if version_file.exists():
            return version_file.read_text(encoding="utf-8").strip()
        return "0.0.0"

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Path | str) -> Path:
        path = Path(value)
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str:
        if not value:
            return "INFO"
        return str(value).upper()

    @field_validator("locale", mode="before")
    @classmethod
    def _validate_locale(cls, value: str | None) -> str:
        if not value:
            return "tr"
        normalized = str(value).lower()
        if normalized not in SUPPORTED_LOCALES:
            return "tr"
        return normalized

    @field_validator("ai_model", mode="before")
    @classmethod
    def _validate_ai_model(cls, value: str | None) -> str:
        if not value:
            return "minimax"
        normalized = str(value).lower()
        if normalized not in SUPPORTED_AI_MODELS:
            return "minimax"
        return normalized

    @field_validator("retry_attempts", mode="before")
    @classmethod
    def _validate_retry_attempts(cls, value: int | str | None) -> int:
        if value is None:
            return 2
        return max(int(value), 1)

    @field_validator("database_url", mode="before")
    @classmethod
    def _validate_database_url(cls, value: str | None) -> str:
        return normalize_database_url(value)


@lru_cache
def get_settings() -> Settings:
    """Cached settings accessor."""

    return Settings()
