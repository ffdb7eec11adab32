from __future__ import annotations

from openai import AsyncOpenAI, OpenAIError

from ..utils.timeouts import retry_async
from .providers import ProviderConfig


class AIProviderError(Exception):
    """A provider could not produce a usable completion."""


class ProviderClient:
    """Thin wrapper above the OpenAI-compatible async SDK for one provider."""

    def __init__(self, config: ProviderConfig, client: AsyncOpenAI | None = None) -> None:
        self._config = config
        self._client = client or AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(self, prompt: str, *, system_prompt: str | None = None) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        async def _request():
            return await self._client.chat.completions.create(
                model=self._config.model,
                messages=messages,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )

        try:
            completion = await retry_async(
                _request,
                attempts=self._config.retries,
                delay=0.5,
                retry_on=(OpenAIError,),
            )
        except OpenAIError as exc:
            raise AIProviderError(f"{self.name} request failed: {exc}") from exc

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise AIProviderError(f"{self.name} returned an empty response")
        return content.strip()
