"""
Word-window chunking shared by ingestion and the stats endpoint.

Windows start every ``step = window_size - floor(window_size * overlap_ratio)``
words.  Chunking stops once a window reaches the last word; a tail that
is shorter than the overlap is folded into the window before it instead
of becoming a chunk made almost entirely of repeated words.
"""

from __future__ import annotations

import math
from typing import List

from talkrag.core.errors import ChunkingConfigError
from talkrag.schemas.corpus import Chunk, CorpusRecord

DEFAULT_WINDOW_SIZE = 1024
DEFAULT_OVERLAP_RATIO = 0.2


def chunk_step(window_size: int, overlap_ratio: float) -> tuple[int, int]:
    """
    Validate chunk settings and return ``(overlap, step)``.

    Raises:
        ChunkingConfigError: if the settings cannot advance (step < 1).
    """
    if window_size < 1:
        raise ChunkingConfigError(f"window_size must be >= 1, got {window_size}")
    if not 0 <= overlap_ratio < 1:
        raise ChunkingConfigError(
            f"overlap_ratio must be in [0, 1), got {overlap_ratio}"
        )
    overlap = math.floor(window_size * overlap_ratio)
    return overlap, window_size - overlap


def chunk_text(
    text: str,
    window_size: int = DEFAULT_WINDOW_SIZE,
    overlap_ratio: float = DEFAULT_OVERLAP_RATIO,
) -> List[str]:
    """
    Split text into overlapping word windows.

    Args:
        text: Free text; split on any whitespace.
        window_size: Words per window.
        overlap_ratio: Fraction of the window repeated in the next one.

    Returns:
        Ordered list of space-joined chunks (empty for blank text).
    """
    overlap, step = chunk_step(window_size, overlap_ratio)
    words = text.split()
    total = len(words)

    chunks: List[str] = []
    start = 0
    while start < total:
        end = min(start + window_size, total)
        if total - end < overlap:
            end = total
        chunks.append(" ".join(words[start:end]))
        if end == total:
            break
        start += step
    return chunks


def chunk_record(
    record: CorpusRecord,
    window_size: int = DEFAULT_WINDOW_SIZE,
    overlap_ratio: float = DEFAULT_OVERLAP_RATIO,
) -> List[Chunk]:
    """Chunk a talk's concatenated fields, numbering chunks from 0."""
    texts = chunk_text(record.content(), window_size, overlap_ratio)
    return [
        Chunk(
            record_id=record.record_id,
            chunk_index=idx,
            text=text,
            title=record.title,
            speaker=record.speaker or None,
        )
        for idx, text in enumerate(texts)
    ]
