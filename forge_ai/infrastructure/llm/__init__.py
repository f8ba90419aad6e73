"""LLM infrastructure.

Provides the OpenAI-backed prose coach client and its prompt templates.
"""

from forge_ai.infrastructure.llm.coach_client import CoachModelError, OpenAICoachClient
from forge_ai.infrastructure.llm.coaching_prompts import (
    COACH_CONSTRAINT,
    NEVER_REWRITE_REMINDER,
    build_craft_qa_prompt,
    build_passage_prompt,
)

__all__ = [
    "COACH_CONSTRAINT",
    "CoachModelError",
    "NEVER_REWRITE_REMINDER",
    "OpenAICoachClient",
    "build_craft_qa_prompt",
    "build_passage_prompt",
]
