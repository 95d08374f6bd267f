from studypilot.config import LLM_API_KEY, LLM_BASE_URL, LLM_MODEL, LLM_PROVIDER, LLM_TIMEOUT_SECONDS
from studypilot.providers.base import BaseProvider
from studypilot.providers.chat_completions_provider import ChatCompletionsProvider, PRESETS


def build_provider() -> BaseProvider:
    """Provider configured from LLM_* environment variables."""
    return ChatCompletionsProvider.from_preset(
        LLM_PROVIDER,
        api_key=LLM_API_KEY,
        model=LLM_MODEL or None,
        endpoint=LLM_BASE_URL or None,
        timeout=LLM_TIMEOUT_SECONDS,
    )


__all__ = [
    "BaseProvider",
    "ChatCompletionsProvider",
    "PRESETS",
    "build_provider",
]
