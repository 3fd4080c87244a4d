"""
Schemas for Stage 3 (Response Synthesis) output and API layer.

FinalResponse is the pipeline-internal result.
AskResponse is the external API contract.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from talkrag.schemas.intent import QueryIntent
from talkrag.schemas.retrieval import UniqueTalk


class ContextItem(BaseModel):
    """One retrieved passage as exposed to the caller."""
    record_id: str
    title: str
    chunk: str
    score: float = 0.0


class AugmentedPrompt(BaseModel):
    """The exact prompts sent to the generator (empty when none was sent)."""
    system: str = ""
    user: str = ""


# ── Pipeline-internal response ──────────────────────────────────────
class FinalResponse(BaseModel):
    """
    Complete pipeline output.  Guaranteed shape regardless of which
    code path (empty-retrieval short-circuit or full RAG) produced it.
    """
    answer: str
    intent: QueryIntent
    context: list[ContextItem] = Field(default_factory=list)
    talks: list[UniqueTalk] = Field(default_factory=list)
    augmented_prompt: AugmentedPrompt = Field(default_factory=AugmentedPrompt)
    is_fallback: bool = False
    raw_match_count: int = 0
    processing_time_seconds: float = 0.0
    stage_timings: dict[str, float] = Field(default_factory=dict)  # seconds per stage


# ── External API schemas ────────────────────────────────────────────
class AskRequest(BaseModel):
    # Optional so a missing field is reported as our own 400, not a 422
    question: str | None = None


class AskResponse(BaseModel):
    response: str
    context: list[ContextItem] = Field(default_factory=list)
    talks: list[UniqueTalk] = Field(default_factory=list)
    augmented_prompt: AugmentedPrompt = Field(default_factory=AugmentedPrompt)
    intent: QueryIntent
    is_fallback: bool = False


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class StatsResponse(BaseModel):
    """Static retrieval configuration, for observability."""
    chunk_size: int
    overlap_ratio: float
    top_k: int
