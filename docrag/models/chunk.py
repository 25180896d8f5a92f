"""Chunk data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Chunk:
    """A bounded, overlap-adjacent segment of a normalized document."""

    source_name: str
    text: str
    chunk_index: int
    is_resume: bool = False

    def __post_init__(self):
        if not self.text:
            raise ValueError("text must not be empty")
        if self.chunk_index < 0:
            raise ValueError("chunk_index must be >= 0")

    @property
    def word_count(self) -> int:
        return len(self.text.split())


@dataclass
class IndexedChunk:
    """A chunk paired with the embedding that occupies its index slot."""

    chunk: Chunk
    embedding: list[float] = field(default_factory=list)
