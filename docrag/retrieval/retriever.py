"""Nearest-neighbor retrieval with length-penalized re-scoring.

Raw L2 distance over-rewards degenerate chunks (a three-word fragment or
a wall of text can sit close to many queries), so candidates are
re-ranked by ``quality = distance + penalty`` and the best one must clear
a relevance threshold before its context is used.
"""

import logging

from docrag.models.chunk import Chunk
from docrag.models.retrieval import RetrievedChunk, RetrievedContext
from docrag.vectorstore.faiss_store import FlatL2Index

logger = logging.getLogger(__name__)

STRICT_THRESHOLD = 1.0
LENIENT_THRESHOLD = 2.5
LENGTH_PENALTY = 0.5
MIN_WORDS = 5
MAX_WORDS = 200


def quality_score(
    distance: float,
    word_count: int,
    penalty: float = LENGTH_PENALTY,
    min_words: int = MIN_WORDS,
    max_words: int = MAX_WORDS,
) -> float:
    """Distance plus a penalty when ``word_count`` is outside [min, max]."""
    if word_count < min_words or word_count > max_words:
        return distance + penalty
    return distance


def relevance_threshold(
    lenient: bool,
    strict: float = STRICT_THRESHOLD,
    lenient_value: float = LENIENT_THRESHOLD,
) -> float:
    return lenient_value if lenient else strict


class Retriever:
    """Searches the index and gates results on quality score."""

    def __init__(
        self,
        index: FlatL2Index,
        chunks: list[Chunk],
        strict_threshold: float = STRICT_THRESHOLD,
        lenient_threshold: float = LENIENT_THRESHOLD,
        length_penalty: float = LENGTH_PENALTY,
        min_words: int = MIN_WORDS,
        max_words: int = MAX_WORDS,
    ):
        if index.ntotal != len(chunks):
            raise ValueError("index and chunk list must have the same length")
        self._index = index
        self._chunks = chunks
        self.strict_threshold = strict_threshold
        self.lenient_threshold = lenient_threshold
        self.length_penalty = length_penalty
        self.min_words = min_words
        self.max_words = max_words

    def score(self, distance: float, chunk: Chunk) -> float:
        return quality_score(
            distance,
            chunk.word_count,
            penalty=self.length_penalty,
            min_words=self.min_words,
            max_words=self.max_words,
        )

    def retrieve(self, query_vector: list[float], k: int, lenient: bool = False) -> RetrievedContext:
        """Over-fetch 2k candidates, re-rank by quality, keep the top k.

        The context is accepted only if the best quality score is within
        the strict (or, for ``lenient``, the lenient) threshold.
        """
        threshold = relevance_threshold(lenient, self.strict_threshold, self.lenient_threshold)
        fetch_k = min(2 * k, self._index.ntotal)
        labels, distances = self._index.search(query_vector, fetch_k)

        candidates = [
            RetrievedChunk(
                chunk=self._chunks[label],
                distance=distance,
                quality=self.score(distance, self._chunks[label]),
            )
            for label, distance in zip(labels, distances)
        ]
        # sort() is stable: equal quality keeps distance order
        candidates.sort(key=lambda c: c.quality)
        selected = candidates[:k]

        context = RetrievedContext(chunks=selected, threshold=threshold)
        context.accepted = bool(selected) and selected[0].quality <= threshold
        logger.debug(
            "Retrieved %d candidates, best quality %s, threshold %.2f, accepted=%s",
            len(selected), context.best_quality, threshold, context.accepted,
        )
        return context

    def top_unique(self, query_vector: list[float], k: int) -> list[str]:
        """Texts of the k nearest chunks, exact duplicates removed."""
        labels, _ = self._index.search(query_vector, k)
        seen = set()
        texts = []
        for label in labels:
            text = self._chunks[label].text
            if text not in seen:
                seen.add(text)
                texts.append(text)
        return texts
