"""
Pytest configuration and shared fixtures.

Provides in-memory doubles for the three collaborators (embedder,
vector index, generator) so the pipelines run without network access.
"""

from __future__ import annotations

from typing import Any

import pytest

from talkrag.core.config import Settings
from talkrag.schemas.retrieval import Match
from talkrag.services.container import Services


# ============================================================================
# Collaborator doubles
# ============================================================================


class FakeEmbedder:
    def __init__(self, dim: int = 3):
        self.dim = dim
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        return [float(len(text) % 7)] + [0.5] * (self.dim - 1)


class FakeIndex:
    """Dict-backed index; ``query`` returns the preset ``results``."""

    def __init__(self, results: list[Match] | None = None):
        self.results = results or []
        self.vectors: dict[str, tuple[list[float], dict[str, Any]]] = {}
        self.upsert_calls: list[str] = []
        self.query_calls: list[tuple[list[float], int]] = []

    def upsert(self, vector_id: str, vector: list[float], metadata: dict[str, Any]) -> None:
        self.upsert_calls.append(vector_id)
        self.vectors[vector_id] = (vector, metadata)

    def query(self, vector: list[float], top_k: int) -> list[Match]:
        self.query_calls.append((vector, top_k))
        return list(self.results[:top_k])

    def delete_all(self) -> None:
        self.vectors.clear()

    def describe(self) -> dict[str, Any]:
        return {"collection": "fake", "vector_count": len(self.vectors)}


class FakeGenerator:
    def __init__(self, answer: str = "The speaker is Jane Doe."):
        self.answer = answer
        self.calls: list[tuple[str, str]] = []

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.answer


def make_match(record_id: str, score: float, *, title: str | None = None,
               chunk_text: str | None = None, chunk_index: int = 0) -> Match:
    return Match(
        vector_id=f"{record_id}-{chunk_index}",
        score=score,
        metadata={
            "record_id": record_id,
            "title": title or f"Talk {record_id}",
            "chunk_text": chunk_text or f"Passage {chunk_index} of talk {record_id}.",
            "chunk_index": chunk_index,
        },
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        chunk_size=1024,
        overlap_ratio=0.2,
        top_k=5,
        ingest_workers=3,
        ingest_max_retries=2,
        ingest_retry_base_delay=0.0,
        ingest_progress_every=2,
    )


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def index() -> FakeIndex:
    return FakeIndex(
        results=[
            make_match("A", 0.9, chunk_index=0),
            make_match("B", 0.85, chunk_index=2),
            make_match("A", 0.8, chunk_index=1),
            make_match("C", 0.7, chunk_index=0),
        ]
    )


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def services(embedder, index, generator) -> Services:
    return Services(embedder=embedder, index=index, generator=generator)
