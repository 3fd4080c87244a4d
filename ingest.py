"""
Embed the talks CSV into the vector index.

    python ingest.py --csv data/ted_talks_en.csv
    python ingest.py --limit 40 --workers 2      # quick trial run

Ctrl+C stops after the in-flight chunks; re-running picks up safely
because every vector is keyed by (talk_id, chunk_index).
"""
import argparse
import asyncio
import signal
import sys

from talkrag.core.config import settings
from talkrag.core.errors import ChunkingConfigError, CorpusNotFoundError
from talkrag.ingestion import IngestionRunner, read_corpus
from talkrag.services.container import build_services


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Chunk, embed and index the talk corpus.")
    parser.add_argument("--csv", default=settings.corpus_csv_path, help="Path to the talks CSV")
    parser.add_argument("--limit", type=int, default=None, help="Only ingest the first N talks")
    parser.add_argument("--workers", type=int, default=settings.ingest_workers,
                        help="Concurrent embed/upsert workers")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)

    print(f"Reading CSV from: {args.csv}")
    try:
        records = read_corpus(args.csv, limit=args.limit)
    except CorpusNotFoundError as e:
        print(f"ERROR: {e}")
        return 1
    print(f"Loaded {len(records)} rows.")

    services = build_services(settings, with_generator=False)
    runner = IngestionRunner(services, settings, workers=args.workers)

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, runner.request_stop)
    except NotImplementedError:
        # Windows event loops have no signal handlers; Ctrl+C aborts instead
        pass

    try:
        report = await runner.run(records)
    except ChunkingConfigError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Upserted {report.upserted}/{report.total_chunks} chunks.")
    if report.failed:
        print(f"Failed chunks ({len(report.failed)}): {', '.join(report.failed[:20])}")
    if report.interrupted:
        print("Interrupted; run again to finish the remaining chunks.")
        return 130
    print("DONE embedding and uploading to the index!")
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
