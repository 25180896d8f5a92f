"""Ollama embedding provider with deterministic offline fallback."""

import logging
import threading

from docrag.clients.ollama_client import OllamaClient
from docrag.embedding.fallback import fallback_embedding
from docrag.embedding.provider import EmbeddingProvider
from docrag.errors import MalformedResponse, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_MODEL = "all-minilm"


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embeds text through Ollama's ``/embeddings`` endpoint.

    The first vector the provider returns fixes ``dimension``; until then
    the configured default is used. Any provider failure, including a
    vector of the wrong length, yields ``fallback_embedding(text, dimension)``.
    """

    def __init__(
        self,
        client: OllamaClient,
        model_name: str = DEFAULT_EMBEDDING_MODEL,
        default_dimension: int = 384,
        timeout: float = 30.0,
    ):
        self._client = client
        self._model_name = model_name
        self._timeout = timeout
        self._default_dimension = default_dimension
        self._dimension: int | None = None
        self._lock = threading.Lock()

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def dimension(self) -> int:
        return self._dimension or self._default_dimension

    def embed(self, text: str) -> list[float]:
        try:
            vector = self._client.embeddings(self._model_name, text, timeout=self._timeout)
            self._check_dimension(vector)
            return vector
        except ProviderError as e:
            logger.warning("Embedding provider failed, using fallback: %s", e)
            return fallback_embedding(text, self.dimension)

    def _check_dimension(self, vector: list[float]) -> None:
        with self._lock:
            if self._dimension is None:
                self._dimension = len(vector)
                logger.info("Embedding dimension fixed at %d", self._dimension)
                return
        if len(vector) != self._dimension:
            raise MalformedResponse(
                f"embedding has {len(vector)} values, expected {self._dimension}"
            )
