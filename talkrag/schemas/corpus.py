"""
Schemas for the ingestion side: source talks, chunks, and the
metadata stored next to each vector in the index.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CorpusRecord(BaseModel):
    """One talk read from the corpus CSV."""
    model_config = ConfigDict(frozen=True)

    record_id: str
    title: str = ""
    speaker: str = ""
    description: str = ""
    transcript: str = ""

    def content(self) -> str:
        """Concatenated textual fields, the text that gets chunked."""
        return (
            f"Title: {self.title}\n"
            f"Speaker: {self.speaker}\n"
            f"Description: {self.description}\n"
            f"Transcript: {self.transcript}\n"
        )


class Chunk(BaseModel):
    """A word window of a record; identity is (record_id, chunk_index)."""
    model_config = ConfigDict(frozen=True)

    record_id: str
    chunk_index: int
    text: str
    title: str = ""
    speaker: str | None = None

    @property
    def vector_id(self) -> str:
        return f"{self.record_id}-{self.chunk_index}"

    def metadata(self) -> "ChunkMetadata":
        return ChunkMetadata(
            record_id=self.record_id,
            title=self.title,
            speaker=self.speaker,
            chunk_text=self.text,
            chunk_index=self.chunk_index,
        )


class ChunkMetadata(BaseModel):
    """Metadata persisted with every indexed vector."""
    record_id: str
    title: str
    speaker: str | None = None
    chunk_text: str
    chunk_index: int
