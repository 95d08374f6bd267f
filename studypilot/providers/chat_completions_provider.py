import logging

import httpx

from studypilot.providers.base import BaseProvider

logger = logging.getLogger(__name__)


# OpenAI-compatible endpoints we know about: name -> (endpoint, default model)
PRESETS = {
    "lovable": ("https://ai.gateway.lovable.dev/v1/chat/completions", "google/gemini-2.5-flash"),
    "groq": ("https://api.groq.com/openai/v1/chat/completions", "llama-3.3-70b-versatile"),
    "openrouter": ("https://openrouter.ai/api/v1/chat/completions", "meta-llama/llama-3-8b-instruct:free"),
}


class ChatCompletionsProvider(BaseProvider):
    """Provider for any OpenAI-style /chat/completions endpoint using httpx."""

    def __init__(self, api_key: str, endpoint: str | None, default_model: str | None,
                 provider_name: str = "chat-completions", timeout: float = 60.0,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.endpoint = endpoint
        self.default_model = default_model
        self.timeout = timeout
        self._name = provider_name
        self._transport = transport

    @classmethod
    def from_preset(cls, preset: str, api_key: str, model: str | None = None,
                    endpoint: str | None = None, **kwargs) -> "ChatCompletionsProvider":
        """Provider for a named preset. An unknown name without an endpoint builds a
        provider whose calls fail, so a bad setting only affects generation."""
        if preset not in PRESETS and not endpoint:
            logger.error(f"Unknown provider '{preset}' and no LLM_BASE_URL set")
        preset_endpoint, preset_model = PRESETS.get(preset, (None, None))
        return cls(
            api_key=api_key,
            endpoint=endpoint or preset_endpoint,
            default_model=model or preset_model,
            provider_name=preset,
            **kwargs,
        )

    @property
    def name(self) -> str:
        return self._name

    def _failed(self, model: str, error: str) -> dict:
        return {
            "text": None,
            "provider": self.name,
            "model": model,
            "status": "failed",
            "error": error,
        }

    async def chat(self, messages: list[dict], model: str | None = None) -> dict:
        used_model = model or self.default_model
        if not self.endpoint:
            return self._failed(used_model, f"No endpoint configured for provider '{self.name}'")
        if not self.api_key:
            return self._failed(used_model, f"{self.name} API key is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {
            "model": used_model,
            "messages": messages,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, headers=headers, json=body)
                if response.status_code >= 400:
                    logger.error(f"AI API error: {response.status_code} {response.text}")
                    return self._failed(used_model, f"{response.status_code}: {response.text}")
                data = response.json()
                text = data["choices"][0]["message"]["content"] if data.get("choices") else None

            return {
                "text": text,
                "provider": self.name,
                "model": data.get("model", used_model),
                "status": "success",
                "error": None,
            }
        except httpx.TimeoutException:
            return self._failed(used_model, "Timeout")
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            return self._failed(used_model, str(e))
