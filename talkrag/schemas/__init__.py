"""
Pydantic schemas for every pipeline boundary.
Each module covers one pipeline stage or cross-cutting concern.
"""

from talkrag.schemas.intent import QueryIntent
from talkrag.schemas.corpus import CorpusRecord, Chunk, ChunkMetadata
from talkrag.schemas.retrieval import Match, UniqueTalk, RetrievalContext
from talkrag.schemas.response import (
    FinalResponse,
    AskRequest,
    AskResponse,
    AugmentedPrompt,
    ContextItem,
    ErrorResponse,
    StatsResponse,
)
from talkrag.schemas.pipeline import PipelineContext

__all__ = [
    # Intent
    "QueryIntent",
    # Corpus / ingestion
    "CorpusRecord",
    "Chunk",
    "ChunkMetadata",
    # Retrieval
    "Match",
    "UniqueTalk",
    "RetrievalContext",
    # Response
    "FinalResponse",
    "AskRequest",
    "AskResponse",
    "AugmentedPrompt",
    "ContextItem",
    "ErrorResponse",
    "StatsResponse",
    # Pipeline
    "PipelineContext",
]
