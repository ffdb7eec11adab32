from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.config import Settings
from ..metrics import AI_REQUESTS
from ..schemas.entries import JournalEntry
from .client import AIProviderError, ProviderClient
from .prompts import (
    MISSING_KEYS_MESSAGE,
    PROMPT_GENERATION,
    SYSTEM_PROMPTS,
    build_reflection_prompt,
    build_weekly_summary_prompt,
    normalize_locale,
)
from .providers import provider_chain

logger = logging.getLogger(__name__)


@dataclass
class AIResult:
    success: bool
    text: str | None = None
    error: str | None = None
    provider: str | None = None


class AIRouter:
    """Sends generation requests to the preferred provider, then the fallback."""

    def __init__(self, clients: Sequence[ProviderClient], *, locale: str = "tr") -> None:
        self._clients = list(clients)
        self._locale = normalize_locale(locale)

    @classmethod
    def from_settings(cls, settings: Settings) -> AIRouter:
        clients = [ProviderClient(config) for config in provider_chain(settings)]
        return cls(clients, locale=settings.locale)

    @property
    def available(self) -> bool:
        return bool(self._clients)

    @property
    def providers(self) -> list[str]:
        return [client.name for client in self._clients]

    async def generate_prompt(self, locale: str | None = None) -> AIResult:
        locale_norm = normalize_locale(locale or self._locale)
        return await self._ask(
            kind="prompt",
            prompt=PROMPT_GENERATION[locale_norm],
            system_prompt=None,
            locale=locale_norm,
        )

    async def generate_reflection(self, entry_text: str, locale: str | None = None) -> AIResult:
        locale_norm = normalize_locale(locale or self._locale)
        return await self._ask(
            kind="reflection",
            prompt=build_reflection_prompt(entry_text, locale_norm),
            system_prompt=SYSTEM_PROMPTS[locale_norm],
            locale=locale_norm,
        )

    async def generate_weekly_summary(
        self,
        entries: Sequence[JournalEntry],
        locale: str | None = None,
    ) -> AIResult:
        locale_norm = normalize_locale(locale or self._locale)
        return await self._ask(
            kind="weekly_summary",
            prompt=build_weekly_summary_prompt(entries, locale_norm),
            system_prompt=SYSTEM_PROMPTS[locale_norm],
            locale=locale_norm,
        )

    async def _ask(
        self,
        *,
        kind: str,
        prompt: str,
        system_prompt: str | None,
        locale: str,
    ) -> AIResult:
        if not self._clients:
            return AIResult(success=False, error=MISSING_KEYS_MESSAGE[locale])

        last_error: str | None = None
        for client in self._clients:
            try:
                text = await client.complete(prompt, system_prompt=system_prompt)
            except AIProviderError as exc:
                AI_REQUESTS.labels(provider=client.name, kind=kind, result="error").inc()
                logger.warning(
                    "ai provider failed, trying next",
                    extra={"extra_fields": {"provider": client.name, "kind": kind}},
                    exc_info=True,
                )
                last_error = str(exc)
                continue
            AI_REQUESTS.labels(provider=client.name, kind=kind, result="ok").inc()
            return AIResult(success=True, text=text, provider=client.name)

        return AIResult(success=False, error=last_error)
