from __future__ import annotations

from dataclasses import dataclass

from ..core.config import Settings


@dataclass(frozen=True)
class ProviderConfig:
    """Everything a client needs to talk to one text-generation provider."""

    name: str
    api_key: str
    base_url: str
    model: str
    temperature: float = 0.7
    max_tokens: int = 500
    timeout: float = 30.0
    retries: int = 1


def provider_chain(settings: Settings) -> list[ProviderConfig]:
    """Configured providers, preferred model first, then the fallback.

    Providers without an API key are left out.
    """

    candidates = {
        "minimax": (settings.minimax_api_key, settings.minimax_base_url, settings.minimax_model),
        "kimi": (settings.kimi_api_key, settings.kimi_base_url, settings.kimi_model),
    }
    order = [settings.ai_model, *(name for name in candidates if name != settings.ai_model)]

    chain: list[ProviderConfig] = []
    for name in order:
        api_key, base_url, model = candidates[name]
        if not api_key:
            continue
        chain.append(
            ProviderConfig(
                name=name,
                api_key=api_key,
                base_url=base_url,
                model=model,
                temperature=settings.ai_temperature,
                max_tokens=settings.ai_max_tokens,
                timeout=settings.request_timeout_seconds,
                retries=settings.retry_attempts,
            )
        )
    return chain
