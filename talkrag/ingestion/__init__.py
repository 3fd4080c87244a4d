"""
Ingestion pipeline: CSV corpus → word-window chunks → embeddings → index.

Modules:
  corpus    : reads the talks CSV into CorpusRecord objects
  chunking  : word-window chunker shared with the query side's settings
  processor : bounded-concurrency embed + upsert runner
"""

from talkrag.ingestion.chunking import chunk_record, chunk_text
from talkrag.ingestion.corpus import read_corpus
from talkrag.ingestion.processor import IngestionReport, IngestionRunner

__all__ = [
    "chunk_record",
    "chunk_text",
    "read_corpus",
    "IngestionReport",
    "IngestionRunner",
]
