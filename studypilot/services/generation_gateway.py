"""
generation_gateway.py — Study plan and daily content generation
Assembles the prompts for a goal (and its plan) and forwards them to a
chat-completion provider. The returned text is stored as opaque markdown.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from studypilot.errors import GenerationError
from studypilot.providers.base import BaseProvider
from studypilot.schemas import Goal, Plan

logger = logging.getLogger(__name__)


PLAN_SYSTEM_PROMPT = "You are a helpful study advisor. Create personalized, actionable study plans."

DAILY_SYSTEM_PROMPT = (
    "You are an expert educational content creator. "
    "Generate detailed, engaging daily study content."
)


@dataclass(frozen=True)
class GeneratedText:
    """Model output, kept verbatim. Never parsed for structure."""

    text: str
    provider: str | None = None
    model: str | None = None

    def __str__(self) -> str:
        return self.text


def _priority(goal: Goal) -> str:
    return getattr(goal.priority, "value", goal.priority)


def build_plan_prompt(goal: Goal, related_file_names: Iterable[str]) -> str:
    names = [n for n in related_file_names if n]
    file_context = ", ".join(names) if names else "No files uploaded yet"
    return (
        "Create a detailed study plan for this goal:\n"
        f"Title: {goal.title}\n"
        f"Description: {goal.description or 'Not provided'}\n"
        f"Target Date: {goal.target_date or 'Not set'}\n"
        f"Priority: {_priority(goal)}\n"
        f"Available Materials: {file_context}\n"
        "\n"
        "Provide a structured plan with weekly milestones and daily tasks."
    )


def build_daily_prompt(plan: Plan, goal: Goal, day_number: int) -> str:
    return (
        f"Based on this study plan, create detailed study content for Day {day_number}:\n"
        "\n"
        f"Goal: {goal.title}\n"
        f"Study Plan: {plan.plan_content}\n"
        "\n"
        f"Generate comprehensive content for Day {day_number} including:\n"
        "1. **Learning Objectives**: What the student should accomplish today\n"
        "2. **Core Concepts**: Detailed explanations of key topics with examples\n"
        "3. **Step-by-Step Guide**: Clear instructions for what to study and in what order\n"
        "4. **Practice Exercises**: 3-5 questions or problems to reinforce learning\n"
        "5. **Key Takeaways**: Summary of the most important points\n"
        "6. **Real-World Applications**: How this knowledge applies in practice\n"
        "\n"
        "Make it detailed enough that the student can learn directly from this content "
        "without needing textbooks."
    )


class ContentGenerationGateway:
    """Stateless bridge between the workflow and a chat provider.

    One outbound call per request; failures surface as GenerationError with
    the upstream message and are never retried.
    """

    def __init__(self, provider: BaseProvider, model: str | None = None):
        self.provider = provider
        self.model = model

    async def _complete(self, system_prompt: str, user_prompt: str, what: str) -> GeneratedText:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            result = await self.provider.chat(messages, self.model)
        except Exception as e:
            logger.exception(f"{self.provider.name} raised while generating {what}")
            raise GenerationError(f"Failed to generate {what}: {e}", provider=self.provider.name) from e

        if result.get("status") != "success":
            error = result.get("error") or "unknown error"
            logger.error(f"{self.provider.name} failed to generate {what}: {error}")
            raise GenerationError(f"Failed to generate {what}: {error}", provider=self.provider.name)

        text = result.get("text")
        if not text or not text.strip():
            raise GenerationError(f"Failed to generate {what}: empty response", provider=self.provider.name)

        return GeneratedText(text=text, provider=result.get("provider"), model=result.get("model"))

    async def generate_plan(self, goal: Goal, related_file_names: Iterable[str] = ()) -> GeneratedText:
        prompt = build_plan_prompt(goal, related_file_names)
        return await self._complete(PLAN_SYSTEM_PROMPT, prompt, "plan")

    async def generate_daily_content(self, plan: Plan, goal: Goal, day_number: int) -> GeneratedText:
        prompt = build_daily_prompt(plan, goal, day_number)
        return await self._complete(DAILY_SYSTEM_PROMPT, prompt, "daily content")
