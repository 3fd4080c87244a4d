from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "TalkRAG Backend"
    environment: str = "development"
    host: str = "127.0.0.1"
    port: int = 8000

    # OpenAI-compatible endpoint (chat + optional embeddings)
    openai_api_key: str | None = None
    openai_base_url: str | None = None  # e.g. a proxy/gateway in front of OpenAI
    chat_model: str = "gpt-4o-mini"
    temperature: float = 1.0

    # Embeddings: "openai" (8k-token input) or "sentence-transformers" (local;
    # its short input limit needs a much smaller chunk_size)
    embedding_provider: str = "openai"
    sentence_transformer_model: str = "all-MiniLM-L6-v2"
    openai_embedding_model: str = "text-embedding-3-small"

    # ChromaDB settings
    chromadb_persist_directory: str | None = None  # Auto-detected if None
    chroma_collection: str = "talk_chunks"
    # Cosine distance cut-off; hits farther than this are dropped (0 = identical, 2 = opposite)
    relevance_threshold_distance: float = 1.1

    # Chunking / retrieval (shared by ingestion and the stats endpoint)
    chunk_size: int = 1024  # words per window
    overlap_ratio: float = 0.2
    top_k: int = 5

    # Ingestion
    corpus_csv_path: str = "data/ted_talks_en.csv"
    ingest_workers: int = 4  # Keep under the embedding provider's rate limit
    ingest_max_retries: int = 3
    ingest_retry_base_delay: float = 1.0  # seconds, doubled per attempt
    ingest_progress_every: int = 20  # chunks between progress log lines

    class Config:
        env_file = ".env"
        extra = "ignore"  # Ignore extra environment variables that aren't in the Settings class

    @field_validator("chunk_size")
    @classmethod
    def _chunk_size_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("chunk_size must be >= 1")
        return v

    @field_validator("overlap_ratio")
    @classmethod
    def _overlap_below_one(cls, v: float) -> float:
        # overlap_ratio >= 1 would make the chunk step non-positive
        if not 0 <= v < 1:
            raise ValueError("overlap_ratio must be in [0, 1)")
        return v

    @field_validator("ingest_workers", "top_k")
    @classmethod
    def _at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
