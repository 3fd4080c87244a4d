"""
Pipeline Orchestrator: top-level entry point.

Calls Stage 1 → Stage 2 → Stage 3 in sequence, with a short-circuit
exit when retrieval yields nothing usable.  At most three outbound calls
per question (embed → query → generate); collaborator exceptions
propagate unchanged so the request fails as a whole.
"""

from __future__ import annotations

from talkrag.core.config import Settings
from talkrag.core.errors import MISSING_QUESTION, InvalidQuestionError
from talkrag.pipeline.deduplicator import deduplicate
from talkrag.pipeline.intent import classify_intent
from talkrag.pipeline.response_generator import (
    assemble_response,
    fallback_response,
    generate_answer,
)
from talkrag.pipeline.retrieval import retrieve_matches
from talkrag.prompts.answer_generator import compose_prompts
from talkrag.schemas.pipeline import PipelineContext
from talkrag.schemas.response import AskResponse, FinalResponse
from talkrag.services.container import Services
from talkrag.utils.logging import get_logger
from talkrag.utils.timing import Timer

logger = get_logger("talkrag.pipeline.orchestrator")


async def run_pipeline(
    question: str | None,
    services: Services,
    settings: Settings,
) -> FinalResponse:
    """
    Execute the full query pipeline for one question.

    Stages:
      1. Query understanding (rule-based intent)
      2. Retrieval (embed + nearest-neighbour query + dedup)
      3. Response synthesis (prompt composition + generation + assembly)

    Raises:
        InvalidQuestionError: missing or blank question (no calls made).
    """
    if not question or not question.strip():
        raise InvalidQuestionError(MISSING_QUESTION)

    ctx = PipelineContext(raw_question=question.strip(), top_k=settings.top_k)
    logger.info("[PIPELINE] Started | question: %s", ctx.raw_question[:80])

    # ── Stage 1: Query Understanding ────────────────────────────────
    with Timer("stage_1", ctx.stage_timings):
        ctx.intent = classify_intent(ctx.raw_question)

    # ── Stage 2: Retrieval ──────────────────────────────────────────
    with Timer("stage_2", ctx.stage_timings) as t2:
        matches = await retrieve_matches(ctx.raw_question, services, ctx.top_k)
        ctx.retrieval = deduplicate(matches)
    logger.info(
        "[PIPELINE] Stage 2 done (%.2fs) | matches=%d, valid=%d, talks=%d",
        t2.elapsed_s,
        ctx.retrieval.raw_match_count,
        len(ctx.retrieval.matches),
        len(ctx.retrieval.unique_talks),
    )

    if ctx.retrieval.is_empty:
        logger.info("[PIPELINE] Short-circuit: no usable context (generator not called)")
        ctx.final_response = fallback_response(ctx.intent, ctx.retrieval)
        ctx.final_response.processing_time_seconds = ctx.elapsed_seconds
        ctx.final_response.stage_timings = dict(ctx.stage_timings)
        return ctx.final_response

    # ── Stage 3: Response Synthesis ─────────────────────────────────
    with Timer("stage_3", ctx.stage_timings) as t3:
        ctx.system_prompt, ctx.user_prompt = compose_prompts(
            ctx.raw_question, ctx.intent, ctx.retrieval.context_text
        )
        ctx.answer = await generate_answer(services, ctx.system_prompt, ctx.user_prompt)
        ctx.final_response = assemble_response(
            ctx.answer,
            ctx.intent,
            ctx.retrieval,
            ctx.system_prompt,
            ctx.user_prompt,
        )
    logger.info(
        "[PIPELINE] Stage 3 done (%.2fs) | intent=%s | fallback=%s",
        t3.elapsed_s,
        ctx.intent.value,
        ctx.final_response.is_fallback,
    )

    ctx.final_response.processing_time_seconds = ctx.elapsed_seconds
    ctx.final_response.stage_timings = dict(ctx.stage_timings)
    return ctx.final_response


def pipeline_response_to_ask_response(response: FinalResponse) -> AskResponse:
    """Convert the internal FinalResponse to the external AskResponse."""
    return AskResponse(
        response=response.answer,
        context=response.context,
        talks=response.talks,
        augmented_prompt=response.augmented_prompt,
        intent=response.intent,
        is_fallback=response.is_fallback,
    )
