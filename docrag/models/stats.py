"""Ingestion summary data model."""

from dataclasses import dataclass


@dataclass
class BuildStats:
    """Counts reported after the index is built."""

    documents_loaded: int = 0
    documents_skipped: int = 0
    chunks_total: int = 0
    chunks_indexed: int = 0
    chunks_excluded: int = 0
    dimension: int | None = None
