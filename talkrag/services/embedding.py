"""
Embedding backends.

Both expose ``embed(text) -> list[float]``:
  - SentenceTransformerEmbedder: local model, no network calls
  - OpenAIEmbedder: OpenAI (or compatible) embeddings endpoint
"""

from __future__ import annotations

import threading
from typing import Any

from talkrag.core.config import Settings
from talkrag.core.errors import ChunkingConfigError
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.services.embedding")

PROVIDER_SENTENCE_TRANSFORMERS = "sentence-transformers"
PROVIDER_OPENAI = "openai"

# Word-piece tokens per English word, rounded up
TOKENS_PER_WORD = 1.3


class SentenceTransformerEmbedder:
    """Lazily loads the SentenceTransformer model on first use."""

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model: Any | None = None
        self._lock = threading.Lock()

    def _get_model(self) -> Any:
        if self._model is not None:
            return self._model
        with self._lock:
            if self._model is None:
                from sentence_transformers import SentenceTransformer

                self._model = SentenceTransformer(self.model_name)
                logger.info("SentenceTransformer model loaded: %s", self.model_name)
        return self._model

    def max_words(self) -> int:
        """Approximate words the model reads before silently truncating."""
        return int(self._get_model().max_seq_length / TOKENS_PER_WORD)

    def embed(self, text: str) -> list[float]:
        # show_progress_bar=False keeps tqdm off sys.stderr (OSError 22 on Windows)
        return self._get_model().encode(text, show_progress_bar=False).tolist()


class OpenAIEmbedder:
    def __init__(self, client: Any, model: str = "text-embedding-3-small"):
        self.client = client
        self.model = model

    def embed(self, text: str) -> list[float]:
        result = self.client.embeddings.create(model=self.model, input=text)
        return list(result.data[0].embedding)


def check_window_fits(embedder: Any, window_size: int) -> None:
    """
    Refuse chunk windows longer than the embedder can read.

    Embedders without ``max_words`` (the OpenAI endpoint) are not checked.

    Raises:
        ChunkingConfigError: if ``window_size`` words would be truncated.
    """
    max_words = getattr(embedder, "max_words", None)
    if max_words is None:
        return
    limit = max_words()
    if window_size > limit:
        raise ChunkingConfigError(
            f"chunk_size={window_size} words exceeds what the embedding model reads "
            f"(~{limit} words); lower CHUNK_SIZE or use EMBEDDING_PROVIDER=openai"
        )


def build_embedder(settings: Settings, openai_client: Any | None = None):
    """Pick the embedding backend configured by ``EMBEDDING_PROVIDER``."""
    provider = settings.embedding_provider.lower()
    if provider == PROVIDER_SENTENCE_TRANSFORMERS:
        return SentenceTransformerEmbedder(settings.sentence_transformer_model)
    if provider == PROVIDER_OPENAI:
        if openai_client is None:
            from talkrag.services.llm import build_openai_client

            openai_client = build_openai_client(settings)
        return OpenAIEmbedder(openai_client, settings.openai_embedding_model)
    raise ValueError(
        f"Unknown embedding_provider '{settings.embedding_provider}' "
        f"(expected '{PROVIDER_SENTENCE_TRANSFORMERS}' or '{PROVIDER_OPENAI}')"
    )
