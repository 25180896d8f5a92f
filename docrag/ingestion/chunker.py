"""Sentence-aware sliding-window chunker with résumé tagging."""

import re
from pathlib import PurePath

from docrag.models.chunk import Chunk
from docrag.models.document import Document

RESUME_START = "[RESUME START]"
RESUME_END = "[RESUME END]"

SENTENCE_BOUNDARIES = ".\n"

RESUME_FILENAME_PATTERN = re.compile(r"(^|[^a-z])(resume|résumé|cv|curriculum)([^a-z]|$)")
RESUME_SECTION_KEYWORDS = [
    "experience",
    "education",
    "skills",
    "employment",
    "certifications",
    "projects",
    "objective",
]


def chunk_text(
    text: str,
    size: int = 1000,
    overlap: int = 200,
    lookahead: int = 100,
) -> list[str]:
    """Split text into overlapping windows of roughly ``size`` characters.

    A window that would end mid-sentence is extended to the first period
    or newline within ``lookahead`` characters; if none is found it ends
    at the raw offset. Each window starts ``size - overlap`` characters
    after the previous one, so every chunk is an exact substring and
    adjacent chunks always share text.
    """
    if size <= 0:
        raise ValueError("size must be > 0")
    if overlap < 0 or overlap >= size:
        raise ValueError("overlap must be >= 0 and smaller than size")
    if not text:
        return []

    step = size - overlap
    chunks = []
    start = 0

    while start < len(text):
        end = min(start + size, len(text))
        if end < len(text) and text[end - 1] not in SENTENCE_BOUNDARIES:
            end = _extend_to_boundary(text, end, lookahead)
        chunks.append(text[start:end])
        if end >= len(text):
            break
        start += step

    return chunks


def _extend_to_boundary(text: str, end: int, lookahead: int) -> int:
    window = text[end:end + lookahead]
    for offset, char in enumerate(window):
        if char in SENTENCE_BOUNDARIES:
            return end + offset + 1
    return end


def is_resume_document(source_name: str, text: str) -> bool:
    """Recognize a résumé/CV by its filename or its section vocabulary."""
    stem = PurePath(source_name).stem.lower()
    if RESUME_FILENAME_PATTERN.search(stem):
        return True
    lowered = text.lower()
    hits = sum(1 for keyword in RESUME_SECTION_KEYWORDS if keyword in lowered)
    return hits >= 2


def tag_resume(text: str) -> str:
    """Wrap résumé text in sentinel markers for downstream heuristics."""
    return f"{RESUME_START}\n{text}\n{RESUME_END}"


def is_resume_text(text: str) -> bool:
    return RESUME_START in text or RESUME_END in text


def chunk_document(
    document: Document,
    size: int = 1000,
    overlap: int = 200,
) -> list[Chunk]:
    """Chunk an already-normalized document, tagging résumés first."""
    text = document.text
    resume = is_resume_document(document.source_name, text)
    if resume:
        text = tag_resume(text)

    return [
        Chunk(
            source_name=document.source_name,
            text=piece,
            chunk_index=idx,
            is_resume=resume,
        )
        for idx, piece in enumerate(chunk_text(text, size=size, overlap=overlap))
    ]
