"""
Exception types raised by the pipeline and ingestion code.

Collaborator failures (embedding, ChromaDB, OpenAI) are deliberately
NOT wrapped here: they propagate unchanged to the API boundary, which
turns them into the uniform internal-error response.
"""

from __future__ import annotations


class TalkRagError(Exception):
    """Base class for errors raised by talkrag itself."""


class InvalidQuestionError(TalkRagError):
    """Raised when a query arrives without a usable question."""


class ChunkingConfigError(TalkRagError, ValueError):
    """Raised for window/overlap settings that cannot produce a forward step."""


class CorpusNotFoundError(TalkRagError, FileNotFoundError):
    """Raised when the corpus CSV path does not exist."""


MISSING_QUESTION = 'Missing "question"'
