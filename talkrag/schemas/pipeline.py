"""
PipelineContext carries request-scoped state between the pipeline stages.

A fresh instance is created per question; nothing in it is shared
between concurrent requests.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from talkrag.schemas.intent import QueryIntent
from talkrag.schemas.response import FinalResponse
from talkrag.schemas.retrieval import RetrievalContext


class PipelineContext(BaseModel):
    """
    Shared context object threaded through all pipeline stages.

    Created once at the start of the pipeline run and progressively
    enriched by each stage.
    """

    # ── Inputs ───────────────────────────────────────────────────────
    raw_question: str
    top_k: int = 5

    # ── Stage outputs (populated progressively) ─────────────────────
    intent: QueryIntent | None = None
    retrieval: RetrievalContext | None = None
    system_prompt: str = ""
    user_prompt: str = ""
    answer: str | None = None
    final_response: FinalResponse | None = None

    # ── Timing ──────────────────────────────────────────────────────
    start_time: float = Field(default_factory=time.time)
    stage_timings: dict[str, float] = Field(default_factory=dict)

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time
