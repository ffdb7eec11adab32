from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PromptResponse(BaseModel):
    text: str
    source: Literal["ai", "local"]
    provider: str | None = None


class ReflectionRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=8000)
    locale: str | None = None


class ReflectionResponse(BaseModel):
    ok: bool
    text: str | None = None
    provider: str | None = None
    error: str | None = None
