"""
Pipeline Stage 3: Response Synthesis.

1. Generate the answer (one LLM call)
2. Assemble the FinalResponse from the answer, the retrieval context
   and the exact prompts that were sent
"""

from __future__ import annotations

import asyncio

from talkrag.prompts.constants import FALLBACK_SENTENCE, is_fallback_answer
from talkrag.schemas.intent import QueryIntent
from talkrag.schemas.response import AugmentedPrompt, ContextItem, FinalResponse
from talkrag.schemas.retrieval import RetrievalContext
from talkrag.services.container import Services
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.pipeline.response_generator")


async def generate_answer(services: Services, system_prompt: str, user_prompt: str) -> str:
    """Call the generator; an empty completion is treated as a refusal."""
    loop = asyncio.get_running_loop()
    answer = await loop.run_in_executor(
        None, services.generator.complete, system_prompt, user_prompt
    )
    answer = (answer or "").strip()
    if not answer:
        logger.warning("[GENERATE] Empty completion; using fallback sentence.")
        return FALLBACK_SENTENCE
    return answer


def assemble_response(
    answer: str,
    intent: QueryIntent,
    retrieval: RetrievalContext,
    system_prompt: str = "",
    user_prompt: str = "",
) -> FinalResponse:
    """Shape the caller-facing result; inputs are only read."""
    context = [
        ContextItem(
            record_id=m.record_id,
            title=m.title,
            chunk=m.chunk_text,
            score=m.score,
        )
        for m in retrieval.matches
    ]
    return FinalResponse(
        answer=answer,
        intent=intent,
        context=context,
        talks=[t.model_copy() for t in retrieval.unique_talks],
        augmented_prompt=AugmentedPrompt(system=system_prompt, user=user_prompt),
        is_fallback=is_fallback_answer(answer),
        raw_match_count=retrieval.raw_match_count,
    )


def fallback_response(intent: QueryIntent, retrieval: RetrievalContext) -> FinalResponse:
    """Short-circuit result when there is nothing to ground an answer on."""
    return FinalResponse(
        answer=FALLBACK_SENTENCE,
        intent=intent,
        is_fallback=True,
        raw_match_count=retrieval.raw_match_count,
    )
