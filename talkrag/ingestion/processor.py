"""
Ingestion runner: corpus records → chunks → embeddings → index upserts.

Chunks are fed through an asyncio queue to a fixed number of worker
coroutines, so at most ``ingest_workers`` embed/upsert round trips are
in flight at once (size it to the embedding provider's rate limit).
Each chunk is retried independently with exponential backoff.  Upserts
are keyed by chunk identity, so an interrupted run can simply be
started again.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Iterable, List

from talkrag.core.config import Settings
from talkrag.ingestion.chunking import chunk_record
from talkrag.schemas.corpus import Chunk, CorpusRecord
from talkrag.services.container import Services
from talkrag.services.embedding import check_window_fits
from talkrag.utils.logging import get_logger
from talkrag.utils.timing import timed

logger = get_logger("talkrag.ingestion.processor")


@dataclass
class IngestionReport:
    total_chunks: int = 0
    upserted: int = 0
    failed: List[str] = field(default_factory=list)  # vector ids
    interrupted: bool = False
    elapsed_seconds: float = 0.0

    @property
    def pending(self) -> int:
        return self.total_chunks - self.upserted - len(self.failed)


class IngestionRunner:
    """
    Embeds and upserts every chunk of a batch of records.

    Usage:
        runner = IngestionRunner(services, settings)
        report = await runner.run(records)
    """

    def __init__(self, services: Services, settings: Settings, workers: int | None = None):
        self.services = services
        self.settings = settings
        self.workers = max(1, workers or settings.ingest_workers)
        self._stop = asyncio.Event()
        self._completed = 0

    def plan(self, records: Iterable[CorpusRecord]) -> List[Chunk]:
        """Chunk every record up front so the total is known before any network call."""
        chunks: List[Chunk] = []
        for record in records:
            chunks.extend(
                chunk_record(record, self.settings.chunk_size, self.settings.overlap_ratio)
            )
        logger.info("[INGEST] Total chunks across all talks: %d", len(chunks))
        return chunks

    def request_stop(self) -> None:
        """Let in-flight chunks finish, then stop taking new ones."""
        if not self._stop.is_set():
            logger.warning("[INGEST] Stop requested; finishing in-flight chunks...")
        self._stop.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop.is_set()

    @timed("ingestion_run")
    async def run(self, records: Iterable[CorpusRecord]) -> IngestionReport:
        start = time.perf_counter()
        # Loads a local model on first use, so keep it off the event loop
        await asyncio.get_running_loop().run_in_executor(
            None, check_window_fits, self.services.embedder, self.settings.chunk_size
        )
        chunks = self.plan(records)
        report = IngestionReport(total_chunks=len(chunks))
        self._completed = 0

        queue: asyncio.Queue[Chunk] = asyncio.Queue()
        for chunk in chunks:
            queue.put_nowait(chunk)

        workers = [
            asyncio.create_task(self._worker(f"worker-{i}", queue, report))
            for i in range(min(self.workers, len(chunks)) or 1)
        ]
        await asyncio.gather(*workers)

        report.interrupted = self.stop_requested and report.pending > 0
        report.elapsed_seconds = time.perf_counter() - start
        logger.info(
            "[INGEST] Done: %d/%d upserted, %d failed%s (%.1fs)",
            report.upserted,
            report.total_chunks,
            len(report.failed),
            ", interrupted" if report.interrupted else "",
            report.elapsed_seconds,
        )
        return report

    async def _worker(self, name: str, queue: "asyncio.Queue[Chunk]", report: IngestionReport) -> None:
        while not self._stop.is_set():
            try:
                chunk = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                await self._ingest_chunk(chunk)
                report.upserted += 1
            except Exception as e:
                logger.error("[INGEST] %s gave up on %s: %s", name, chunk.vector_id, e)
                report.failed.append(chunk.vector_id)
            finally:
                queue.task_done()
                self._record_progress(report)

    async def _ingest_chunk(self, chunk: Chunk) -> None:
        """Embed + upsert one chunk, retrying with exponential backoff."""
        loop = asyncio.get_running_loop()
        attempts = self.settings.ingest_max_retries + 1
        for attempt in range(attempts):
            try:
                vector = await loop.run_in_executor(None, self.services.embedder.embed, chunk.text)
                metadata = chunk.metadata().model_dump()
                await loop.run_in_executor(
                    None, self.services.index.upsert, chunk.vector_id, vector, metadata
                )
                return
            except Exception as e:
                if attempt + 1 >= attempts:
                    raise
                delay = self.settings.ingest_retry_base_delay * (2 ** attempt)
                logger.warning(
                    "[INGEST] %s failed (attempt %d/%d): %s; retrying in %.1fs",
                    chunk.vector_id, attempt + 1, attempts, e, delay,
                )
                await asyncio.sleep(delay)

    def _record_progress(self, report: IngestionReport) -> None:
        self._completed += 1
        every = self.settings.ingest_progress_every
        if every > 0 and self._completed % every == 0:
            logger.info(
                "[INGEST] Inserted %d/%d chunks (%d failed)",
                report.upserted, report.total_chunks, len(report.failed),
            )
