"""
base.py — Contract between the generation gateway and a text-generation backend.
"""

from abc import ABC, abstractmethod

RESULT_KEYS = ("text", "provider", "model", "status", "error")


class BaseProvider(ABC):
    """A single-shot chat completion backend.

    The gateway sends exactly two messages, a system persona and a user
    prompt, and expects one plain-text completion back. No streaming, no
    tools, no structured output. Upstream failures are returned as a
    result with status "failed", never raised; the gateway decides how to
    report them.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name shown in logs and errors (the configured preset, e.g. 'lovable')."""
        ...

    @abstractmethod
    async def chat(self, messages: list[dict], model: str | None = None) -> dict:
        """Return one completion for `messages` as a dict with RESULT_KEYS.

        `text` holds the completion verbatim when status is "success";
        `error` holds the upstream message (e.g. "402: ...") when "failed".
        """
        ...
