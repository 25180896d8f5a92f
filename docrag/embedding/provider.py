"""Abstract embedding provider interface."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Interface for text embedding generation.

    Implementations must not raise from ``embed``: a provider that cannot
    reach its model substitutes a deterministic vector instead.
    """

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Generate the embedding for a single text.

        Returns:
            A list of floats with length ``dimension``.
        """
        ...

    def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Embed texts sequentially. Default delegates to embed()."""
        return [self.embed(text) for text in texts]

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the current embedding dimension (e.g., 384)."""
        ...
