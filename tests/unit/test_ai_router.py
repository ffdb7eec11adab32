from __future__ import annotations

from types import SimpleNamespace

import pytest

from daynote.app.ai.client import AIProviderError
from daynote.app.ai.prompts import MISSING_KEYS_MESSAGE
from daynote.app.ai.providers import provider_chain
from daynote.app.ai.router import AIRouter


def _settings(**overrides) -> SimpleNamespace:
    values = {
        "ai_model": "minimax",
        "locale": "tr",
        "minimax_api_key": None,
        "minimax_base_url": "https://api.minimaxi.chat/v1",
        "minimax_model": "MiniMax-M2.5",
        "kimi_api_key": None,
        "kimi_base_url": "https://api.moonshot.cn/v1",
        "kimi_model": "kimi-latest",
        "ai_temperature": 0.7,
        "ai_max_tokens": 500,
        "request_timeout_seconds": 30.0,
        "retry_attempts": 2,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class _FakeProvider:
    def __init__(self, name: str, reply: str | None = None, error: str | None = None) -> None:
        self.name = name
        self._reply = reply
        self._error = error
        self.prompts: list[tuple[str, str | None]] = []

    async def complete(self, prompt: str, *, system_prompt: str | None = None) -> str:
        self.prompts.append((prompt, system_prompt))
        if self._error:
            raise AIProviderError(self._error)
        return self._reply or ""


def test_provider_chain_prefers_selected_model() -> None:
    chain = provider_chain(_settings(ai_model="kimi", minimax_api_key="m", kimi_api_key="k"))
    assert [config.name for config in chain] == ["kimi", "minimax"]
    assert chain[0].base_url == "https://api.moonshot.cn/v1"
    assert chain[0].retries == 2


def test_provider_chain_skips_missing_keys() -> None:
    chain = provider_chain(_settings(ai_model="minimax", kimi_api_key="k"))
    assert [config.name for config in chain] == ["kimi"]
    assert provider_chain(_settings()) == []


def test_router_from_settings_without_keys_is_unavailable() -> None:
    router = AIRouter.from_settings(_settings())
    assert router.available is False
    assert router.providers == []


@pytest.mark.anyio
async def test_router_without_providers_reports_missing_keys() -> None:
    router = AIRouter([], locale="en")

    result = await router.generate_prompt()

    assert result.success is False
    assert result.error == MISSING_KEYS_MESSAGE["en"]


@pytest.mark.anyio
async def test_router_falls_back_to_next_provider() -> None:
    primary = _FakeProvider("minimax", error="minimax request failed")
    fallback = _FakeProvider("kimi", reply="Bugün neye minnettarsın?")
    router = AIRouter([primary, fallback])  # type: ignore[list-item]

    result = await router.generate_prompt()

    assert result.success is True
    assert result.provider == "kimi"
    assert result.text == "Bugün neye minnettarsın?"
    assert primary.prompts and fallback.prompts


@pytest.mark.anyio
async def test_router_returns_last_error_when_all_fail() -> None:
    router = AIRouter(
        [
            _FakeProvider("minimax", error="minimax request failed"),
            _FakeProvider("kimi", error="kimi returned an empty response"),
        ]  # type: ignore[list-item]
    )

    result = await router.generate_reflection("Yorgun bir gündü")

    assert result.success is False
    assert result.error == "kimi returned an empty response"


@pytest.mark.anyio
async def test_weekly_summary_prompt_carries_entries(entry_factory) -> None:
    provider = _FakeProvider("minimax", reply="Sakin bir hafta.")
    router = AIRouter([provider])  # type: ignore[list-item]
    entries = [entry_factory("2024-03-05", mood=4, text="Parkta yürüdüm")]

    result = await router.generate_weekly_summary(entries, "tr")

    assert result.text == "Sakin bir hafta."
    prompt, system_prompt = provider.prompts[0]
    assert "2024-03-05" in prompt
    assert "Parkta yürüdüm" in prompt
    assert system_prompt
