"""Shared fixtures: offline embedders, settings and a mocked Ollama client."""

import re
from unittest.mock import MagicMock

import pytest

from config.settings import Settings
from docrag.clients.ollama_client import OllamaClient
from docrag.embedding.fallback import fallback_embedding
from docrag.embedding.provider import EmbeddingProvider
from docrag.llm.generator import AnswerGenerator


class HashEmbedder(EmbeddingProvider):
    """Offline embedder returning the deterministic fallback vectors."""

    def __init__(self, dim: int = 16):
        self._dim = dim

    def embed(self, text: str) -> list[float]:
        return fallback_embedding(text, self._dim)

    @property
    def dimension(self) -> int:
        return self._dim


class KeywordEmbedder(EmbeddingProvider):
    """Unit-length bag-of-words vectors over a fixed vocabulary.

    Text with no vocabulary word maps onto a dedicated "unknown" axis, so it
    sits at squared distance 2.0 from every document vector.
    """

    def __init__(self, vocabulary: list[str]):
        self.vocabulary = vocabulary

    def embed(self, text: str) -> list[float]:
        tokens = re.findall(r"[a-z]+", text.lower())
        counts = [float(tokens.count(word)) for word in self.vocabulary] + [0.0]
        if not any(counts):
            counts[-1] = 1.0
        norm = sum(c * c for c in counts) ** 0.5
        return [c / norm for c in counts]

    @property
    def dimension(self) -> int:
        return len(self.vocabulary) + 1


@pytest.fixture
def hash_embedder():
    return HashEmbedder(dim=16)


@pytest.fixture
def keyword_embedder():
    """Factory: keyword_embedder(["office", "berlin"])."""
    return KeywordEmbedder


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def mock_client():
    return MagicMock(spec=OllamaClient)


@pytest.fixture
def generator(mock_client):
    return AnswerGenerator(mock_client, model="test-model", timeout=1.0, context_chars=800)
