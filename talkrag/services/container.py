"""
Collaborator handles for the pipelines.

Built once by the process that owns them (the FastAPI startup hook or
an ingestion script) and passed in explicitly, so tests can swap any
of them for a double.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from talkrag.core.config import Settings
from talkrag.services.embedding import PROVIDER_OPENAI, build_embedder
from talkrag.services.llm import ChatGenerator, build_openai_client
from talkrag.services.vector_store import ChromaIndex


@dataclass
class Services:
    embedder: Any  # .embed(text) -> list[float]
    index: Any  # .upsert / .query / .delete_all / .describe
    generator: Any | None = None  # .complete(system, user) -> str; unused by ingestion


def build_services(settings: Settings, *, with_generator: bool = True) -> Services:
    """Construct the embedding, index and (optionally) generation handles."""
    openai_client = None
    if with_generator or settings.embedding_provider.lower() == PROVIDER_OPENAI:
        openai_client = build_openai_client(settings)

    generator = None
    if with_generator:
        generator = ChatGenerator(openai_client, settings.chat_model, settings.temperature)

    return Services(
        embedder=build_embedder(settings, openai_client),
        index=ChromaIndex.from_settings(settings),
        generator=generator,
    )
