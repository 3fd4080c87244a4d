"""
ChromaDB-backed vector index.

One persistent collection in cosine space holds every chunk vector,
keyed by ``<record_id>-<chunk_index>`` so re-ingesting a talk overwrites
its vectors instead of duplicating them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import chromadb

from talkrag.core.config import Settings
from talkrag.schemas.retrieval import Match
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.services.vector_store")


def _get_persist_directory(persist_directory: str | None = None) -> str:
    """
    Resolve the directory where ChromaDB data is stored.
    Defaults to talkrag/vector_db/chroma_db.
    """
    if persist_directory:
        return persist_directory
    base_dir = Path(__file__).resolve().parents[1]
    return str(base_dir / "vector_db" / "chroma_db")


def build_chroma_client(persist_directory: str | None = None) -> chromadb.ClientAPI:
    path = _get_persist_directory(persist_directory)
    return chromadb.PersistentClient(
        path=path,
        settings=chromadb.Settings(
            anonymized_telemetry=False,
            allow_reset=True,
        ),
    )


class ChromaIndex:
    """upsert / query / delete_all over a single Chroma collection."""

    def __init__(
        self,
        client: chromadb.ClientAPI,
        collection_name: str = "talk_chunks",
        relevance_threshold_distance: float | None = None,
        persist_directory: str | None = None,
    ):
        self.client = client
        self.collection_name = collection_name
        self.relevance_threshold_distance = relevance_threshold_distance
        self.persist_directory = persist_directory
        self.collection = self._ensure_collection()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChromaIndex":
        path = _get_persist_directory(settings.chromadb_persist_directory)
        return cls(
            build_chroma_client(path),
            collection_name=settings.chroma_collection,
            relevance_threshold_distance=settings.relevance_threshold_distance,
            persist_directory=path,
        )

    def _ensure_collection(self):
        return self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={
                "description": "Talk transcript chunks",
                "hnsw:space": "cosine",
            },
        )

    def upsert(self, vector_id: str, vector: List[float], metadata: Dict[str, Any]) -> None:
        # Chroma rejects None metadata values (e.g. a missing speaker)
        clean = {k: v for k, v in metadata.items() if v is not None}
        self.collection.upsert(
            ids=[vector_id],
            embeddings=[vector],
            documents=[clean.get("chunk_text", "")],
            metadatas=[clean],
        )

    def query(self, vector: List[float], top_k: int) -> List[Match]:
        """Nearest neighbours, best first; hits past the distance threshold are dropped."""
        if self.collection.count() == 0:
            return []

        results = self.collection.query(
            query_embeddings=[vector],
            n_results=top_k,
            include=["metadatas", "distances"],
        )

        ids = results["ids"][0] if results.get("ids") else []
        metadatas = results["metadatas"][0] if results.get("metadatas") else []
        distances = results["distances"][0] if results.get("distances") else []

        matches: List[Match] = []
        for idx, vector_id in enumerate(ids):
            distance = float(distances[idx]) if idx < len(distances) else 0.0
            threshold = self.relevance_threshold_distance
            if threshold is not None and distance > threshold:
                continue
            metadata = metadatas[idx] if idx < len(metadatas) else None
            matches.append(
                Match(
                    vector_id=str(vector_id),
                    score=1.0 - distance,
                    metadata=dict(metadata) if metadata else None,
                )
            )
        return matches

    def delete_all(self) -> None:
        """Drop every vector by recreating the collection."""
        self.client.delete_collection(name=self.collection_name)
        self.collection = self._ensure_collection()
        logger.info("Cleared collection '%s'", self.collection_name)

    def describe(self) -> Dict[str, Any]:
        return {
            "collection": self.collection_name,
            "vector_count": self.collection.count(),
            "persist_directory": self.persist_directory,
            "relevance_threshold_distance": self.relevance_threshold_distance,
        }
