"""
Corpus reader: turns the talks CSV into CorpusRecord objects.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator, List, Optional

from talkrag.core.errors import CorpusNotFoundError
from talkrag.schemas.corpus import CorpusRecord
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.ingestion.corpus")

# CSV column → CorpusRecord field
COLUMN_MAP = {
    "talk_id": "record_id",
    "title": "title",
    "speaker_1": "speaker",
    "description": "description",
    "transcript": "transcript",
}


def iter_corpus(csv_path: str | Path) -> Iterator[CorpusRecord]:
    """Yield one record per CSV row, skipping rows without a talk id."""
    path = Path(csv_path)
    if not path.exists():
        raise CorpusNotFoundError(f"Corpus CSV does not exist: {path}")

    # Long transcripts exceed the csv module's default 128 KiB field limit
    csv.field_size_limit(max(csv.field_size_limit(), 16 * 1024 * 1024))

    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            fields = {
                target: (row.get(column) or "").strip()
                for column, target in COLUMN_MAP.items()
            }
            if not fields["record_id"]:
                logger.warning("[CORPUS] Skipping line %d: missing talk_id", line_no)
                continue
            yield CorpusRecord(**fields)


def read_corpus(csv_path: str | Path, limit: Optional[int] = None) -> List[CorpusRecord]:
    """
    Load the corpus into memory.

    Args:
        csv_path: Path to the talks CSV.
        limit: Optional cap on the number of records (handy for trial runs).

    Returns:
        Records in file order.
    """
    records: List[CorpusRecord] = []
    for record in iter_corpus(csv_path):
        if limit is not None and len(records) >= limit:
            break
        records.append(record)
    logger.info("[CORPUS] Loaded %d records from %s", len(records), csv_path)
    return records
