"""
Mock infrastructure for StudyPilot testing.
Provides deterministic stand-ins for the text-generation provider.
"""

from .llm_mocks import (
    MOCK_PLAN_TEXT,
    MOCK_DAY_TEXT,
    MockChatProvider,
)

__all__ = [
    "MOCK_PLAN_TEXT",
    "MOCK_DAY_TEXT",
    "MockChatProvider",
]
