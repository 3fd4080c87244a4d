"""
OpenAI client construction and the chat-completion generator.

The client is built once by the serving process (see container.py)
and handed to whoever needs it; nothing here is a module global.
"""

from __future__ import annotations

from typing import Any

from openai import OpenAI

from talkrag.core.config import Settings
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.services.llm")


def build_openai_client(settings: Settings) -> OpenAI:
    """
    Create an OpenAI client (optionally pointed at a compatible gateway).

    Raises RuntimeError when the API key is missing.
    """
    if not settings.openai_api_key:
        raise RuntimeError("OpenAI API key not configured (OPENAI_API_KEY).")

    kwargs: dict[str, Any] = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    client = OpenAI(**kwargs)
    logger.info("OpenAI client initialized (base_url=%s).", settings.openai_base_url or "default")
    return client


class ChatGenerator:
    """Stateless prompt → answer wrapper over chat completions."""

    def __init__(self, client: Any, model: str, temperature: float = 1.0):
        self.client = client
        self.model = model
        self.temperature = temperature

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            temperature=self.temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        if not response.choices or not response.choices[0].message.content:
            logger.warning("Answer LLM returned no content.")
            return ""
        return response.choices[0].message.content.strip()
