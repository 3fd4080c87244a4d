"""
Schemas for Stage 2 (Retrieval) output.

Match is what the vector index returns.  RetrievalContext is the
deduplicated, prompt-ready view of those matches that flows into
Stage 3.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

REQUIRED_METADATA_FIELDS = ("record_id", "title", "chunk_text")


class Match(BaseModel):
    """One nearest-neighbour hit from the index."""
    vector_id: str
    score: float = 0.0
    metadata: dict[str, Any] | None = None

    @property
    def is_valid(self) -> bool:
        """True when the metadata carries every field the prompt needs."""
        md = self.metadata
        if not md:
            return False
        return all(isinstance(md.get(f), str) for f in REQUIRED_METADATA_FIELDS)

    @property
    def record_id(self) -> str:
        return self.metadata["record_id"] if self.is_valid else ""

    @property
    def title(self) -> str:
        return self.metadata["title"] if self.is_valid else ""

    @property
    def chunk_text(self) -> str:
        return self.metadata["chunk_text"] if self.is_valid else ""


class UniqueTalk(BaseModel):
    """First (best-scoring) appearance of a talk in the results."""
    record_id: str
    title: str
    chunk_text: str
    score: float = 0.0


class RetrievalContext(BaseModel):
    """
    Complete output of Stage 2.
    Flows into Stage 3 (prompt composition + generation).
    """
    matches: list[Match] = Field(default_factory=list)  # valid only, retrieval order
    unique_talks: list[UniqueTalk] = Field(default_factory=list)
    context_text: str = ""
    raw_match_count: int = 0  # includes matches dropped for bad metadata

    @property
    def is_empty(self) -> bool:
        return not self.matches
