"""Per-query retrieval results."""

from dataclasses import dataclass, field

from docrag.models.chunk import Chunk


@dataclass(frozen=True)
class RetrievedChunk:
    """A k-NN candidate with its raw distance and penalized quality score."""

    chunk: Chunk
    distance: float
    quality: float

    @property
    def text(self) -> str:
        return self.chunk.text


@dataclass
class RetrievedContext:
    """Chunks selected for one query, best (lowest quality score) first."""

    chunks: list[RetrievedChunk] = field(default_factory=list)
    threshold: float = 0.0
    accepted: bool = False

    @property
    def best_quality(self) -> float | None:
        if not self.chunks:
            return None
        return self.chunks[0].quality

    @property
    def texts(self) -> list[str]:
        return [c.text for c in self.chunks]
