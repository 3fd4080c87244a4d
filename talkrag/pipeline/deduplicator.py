"""
Pipeline Stage 2b: turn raw index matches into a RetrievalContext.

Single pass in retrieval order, no re-sorting.  Matches without the
required metadata are dropped here (never raised on) but still counted
in ``raw_match_count``.
"""

from __future__ import annotations

from typing import Sequence

from talkrag.schemas.retrieval import Match, RetrievalContext, UniqueTalk
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.pipeline.deduplicator")

CONTEXT_DELIMITER = "---"


def format_context_block(match: Match) -> str:
    """Label one passage with its talk id and title."""
    return f'[Talk {match.record_id}] "{match.title}"\n{match.chunk_text}\n{CONTEXT_DELIMITER}\n'


def deduplicate(matches: Sequence[Match]) -> RetrievalContext:
    """
    Build the prompt context and the unique-talk list.

    The first match seen for a talk wins, so with score-descending input
    ``unique_talks`` is in descending relevance order.
    """
    valid: list[Match] = []
    unique: dict[str, UniqueTalk] = {}
    blocks: list[str] = []

    for match in matches:
        if not match.is_valid:
            continue
        valid.append(match)
        blocks.append(format_context_block(match))
        if match.record_id not in unique:
            unique[match.record_id] = UniqueTalk(
                record_id=match.record_id,
                title=match.title,
                chunk_text=match.chunk_text,
                score=match.score,
            )

    dropped = len(matches) - len(valid)
    if dropped:
        logger.warning("[DEDUP] Dropped %d match(es) with incomplete metadata", dropped)

    return RetrievalContext(
        matches=valid,
        unique_talks=list(unique.values()),
        context_text="".join(blocks),
        raw_match_count=len(matches),
    )
