"""
Prompt templates for Stage 3: Answer generation.

One system prompt for every intent; the user prompt combines the
question, the intent's directive and the retrieved context.
"""

from __future__ import annotations

from talkrag.prompts.constants import SYSTEM_PROMPT, build_behavioral_directives
from talkrag.schemas.intent import QueryIntent


def build_system_prompt() -> str:
    """Build the static system message (grounding constraint)."""
    return SYSTEM_PROMPT


def build_answer_prompt(question: str, intent: QueryIntent, context_text: str) -> str:
    """
    Build the full user-message prompt for answer generation.

    Structure:
      1. User question
      2. Intent-specific directives (ending with the fallback instruction)
      3. Context blocks
    """
    return (
        "User question:\n"
        f"{question}\n"
        "\n"
        "Follow these instructions:\n"
        f"{build_behavioral_directives(intent)}\n"
        "\n"
        "Use ONLY the following context:\n"
        f"{context_text}"
    )


def compose_prompts(question: str, intent: QueryIntent, context_text: str) -> tuple[str, str]:
    """Return ``(system_prompt, user_prompt)`` for one request."""
    return build_system_prompt(), build_answer_prompt(question, intent, context_text)
