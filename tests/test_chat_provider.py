"""
Tests for the OpenAI-compatible chat-completions provider.
"""

import json

import httpx
import pytest

from studypilot.providers import ChatCompletionsProvider, PRESETS
from studypilot.providers.base import RESULT_KEYS

MESSAGES = [
    {"role": "system", "content": "You are a helpful study advisor."},
    {"role": "user", "content": "Plan please"},
]


def provider_with(handler, api_key: str = "key-1") -> ChatCompletionsProvider:
    return ChatCompletionsProvider.from_preset("lovable", api_key=api_key, transport=httpx.MockTransport(handler))


class TestChatCompletionsProvider:

    @pytest.mark.unit
    def test_presets_fill_endpoint_and_model(self):
        provider = ChatCompletionsProvider.from_preset("groq", api_key="k")
        assert provider.endpoint == PRESETS["groq"][0]
        assert provider.default_model == PRESETS["groq"][1]
        assert provider.name == "groq"

    @pytest.mark.unit
    def test_custom_endpoint_for_unknown_name(self):
        provider = ChatCompletionsProvider.from_preset(
            "local", api_key="k", model="llama3", endpoint="http://localhost:11434/v1/chat/completions"
        )
        assert provider.endpoint.startswith("http://localhost")
        assert provider.default_model == "llama3"

    @pytest.mark.asyncio
    async def test_unknown_name_without_endpoint_fails_at_call_time(self):
        provider = ChatCompletionsProvider.from_preset("nowhere", api_key="k")
        assert provider.endpoint is None

        result = await provider.chat(MESSAGES)
        assert result["status"] == "failed"
        assert "No endpoint configured" in result["error"]

    @pytest.mark.asyncio
    async def test_success_returns_first_choice(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "model": "google/gemini-2.5-flash",
                "choices": [{"message": {"role": "assistant", "content": "# Plan"}}],
            })

        result = await provider_with(handler).chat(MESSAGES)

        assert result["status"] == "success"
        assert tuple(result) == RESULT_KEYS
        assert result["text"] == "# Plan"
        assert result["provider"] == "lovable"
        assert seen["auth"] == "Bearer key-1"
        assert seen["body"]["model"] == "google/gemini-2.5-flash"
        assert seen["body"]["messages"] == MESSAGES

    @pytest.mark.asyncio
    async def test_http_error_is_failed_result(self):
        def handler(request):
            return httpx.Response(429, text="rate limited")

        result = await provider_with(handler).chat(MESSAGES)
        assert result["status"] == "failed"
        assert tuple(result) == RESULT_KEYS
        assert "429" in result["error"]
        assert result["text"] is None

    @pytest.mark.asyncio
    async def test_timeout_is_failed_result(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        result = await provider_with(handler).chat(MESSAGES)
        assert result["status"] == "failed"
        assert result["error"] == "Timeout"

    @pytest.mark.asyncio
    async def test_missing_key_fails_without_calling(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={})

        result = await provider_with(handler, api_key="").chat(MESSAGES)
        assert result["status"] == "failed"
        assert "API key" in result["error"]
        assert calls == []

    @pytest.mark.asyncio
    async def test_malformed_body_is_failed_result(self):
        def handler(request):
            return httpx.Response(200, json={"choices": [{"nope": {}}]})

        result = await provider_with(handler).chat(MESSAGES)
        assert result["status"] == "failed"
