"""Flat L2 vector index over FAISS."""

import logging

import faiss
import numpy as np

logger = logging.getLogger(__name__)


class FlatL2Index:
    """Brute-force k-NN index by squared L2 distance.

    Built once from all vectors; labels are insertion positions. FAISS CPU
    indexes support concurrent searches, and nothing mutates the index
    after ``build``.
    """

    def __init__(self, index: faiss.Index):
        self._index = index

    @classmethod
    def build(cls, vectors: list[list[float]]) -> "FlatL2Index":
        """Create an index holding ``vectors`` in order.

        Raises:
            ValueError: If vectors is empty or dimensions disagree.
        """
        if not vectors:
            raise ValueError("vectors must not be empty")
        dim = len(vectors[0])
        if dim == 0 or any(len(v) != dim for v in vectors):
            raise ValueError("all vectors must share one non-zero dimension")

        matrix = np.asarray(vectors, dtype=np.float32)
        index = faiss.IndexFlatL2(dim)
        index.add(matrix)
        logger.info("Built flat L2 index: %d vectors, dimension %d", index.ntotal, dim)
        return cls(index)

    @property
    def ntotal(self) -> int:
        return self._index.ntotal

    @property
    def dimension(self) -> int:
        return self._index.d

    def search(self, query_vector: list[float], k: int) -> tuple[list[int], list[float]]:
        """Return (labels, distances) of the ``min(k, ntotal)`` nearest vectors.

        Distances ascend; equal distances keep insertion order.
        """
        n = min(k, self.ntotal)
        if n <= 0:
            return [], []
        if len(query_vector) != self.dimension:
            raise ValueError(
                f"query has dimension {len(query_vector)}, index has {self.dimension}"
            )

        query = np.asarray([query_vector], dtype=np.float32)
        # Rank every vector so ties can be ordered by label before cutting to n
        distances, labels = self._index.search(query, self.ntotal)
        distances, labels = distances[0], labels[0]
        order = np.lexsort((labels, distances))[:n]
        return labels[order].tolist(), distances[order].tolist()
