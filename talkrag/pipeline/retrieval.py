"""
Pipeline Stage 2a: Retrieval.

1. Embed the question (one embedding call)
2. Nearest-neighbour query against the index (one query call)

Both calls are blocking client calls and run in the default executor.
An empty result is a normal outcome, not an error.
"""

from __future__ import annotations

import asyncio

from talkrag.schemas.retrieval import Match
from talkrag.services.container import Services
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.pipeline.retrieval")


async def retrieve_matches(question: str, services: Services, top_k: int) -> list[Match]:
    """Return up to ``top_k`` matches for the question, best first."""
    loop = asyncio.get_running_loop()

    vector = await loop.run_in_executor(None, services.embedder.embed, question)
    matches = await loop.run_in_executor(None, services.index.query, vector, top_k)

    logger.info("[RETRIEVAL] top_k=%d → %d match(es)", top_k, len(matches))
    return list(matches)
