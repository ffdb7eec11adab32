"""Text generation for journal prompts, reflections and weekly summaries."""

from __future__ import annotations

from .client import AIProviderError, ProviderClient
from .prompts import contextual_prompt
from .providers import ProviderConfig, provider_chain
from .router import AIResult, AIRouter

__all__ = [
    "AIProviderError",
    "AIResult",
    "AIRouter",
    "ProviderClient",
    "ProviderConfig",
    "contextual_prompt",
    "provider_chain",
]
