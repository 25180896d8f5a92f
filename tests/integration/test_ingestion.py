"""Integration tests for building the engine from a data directory.

Embeddings come from an offline fake provider; no model server is needed.
"""

import pytest

from docrag.embedding.provider import EmbeddingProvider
from docrag.engine import RAGEngine
from docrag.errors import EmptyIndex, IndexBuildError, NotInitialized
from docrag.ingestion.chunker import RESUME_START
from docrag.models.document import Document


class EmptyVectorEmbedder(EmbeddingProvider):
    """A broken provider that yields unusable vectors."""

    def embed(self, text: str) -> list[float]:
        return []

    @property
    def dimension(self) -> int:
        return 0


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "alice_resume.txt").write_text(
        "Name: Alice Example\n• Skills: Go, Rust, Python\nPage 1\n", encoding="utf-8"
    )
    (tmp_path / "handbook.txt").write_text(
        "Company handbook.\n" + "The office opens at nine. " * 120, encoding="utf-8"
    )
    (tmp_path / "blank.txt").write_text("Page 2\n\n17\n", encoding="utf-8")
    (tmp_path / ".hidden").write_text("secret", encoding="utf-8")
    return tmp_path


@pytest.fixture
def engine(hash_embedder, generator, settings):
    return RAGEngine(hash_embedder, generator, settings=settings)


class TestBuildFromDirectory:
    def test_build_stats(self, engine, data_dir):
        stats = engine.build_from_directory(data_dir)
        assert stats.documents_loaded == 3
        assert stats.documents_skipped == 1
        assert stats.chunks_total > 2
        assert stats.chunks_indexed == stats.chunks_total
        assert stats.chunks_excluded == 0
        assert stats.dimension == 16
        assert engine.is_ready

    def test_documents_are_normalized(self, engine, data_dir):
        engine.build_from_directory(data_dir)
        resume = next(d for d in engine.documents if d.source_name == "alice_resume.txt")
        assert resume.text == "Name: Alice Example\n- Skills: Go, Rust, Python"

    def test_resume_chunks_are_tagged(self, engine, data_dir):
        engine.build_from_directory(data_dir)
        resume_chunks = [c for c in engine.chunks if c.source_name == "alice_resume.txt"]
        assert len(resume_chunks) == 1
        assert resume_chunks[0].is_resume
        assert resume_chunks[0].text.startswith(RESUME_START)

    def test_long_document_is_chunked_with_overlap(self, engine, data_dir):
        engine.build_from_directory(data_dir)
        handbook = [c for c in engine.chunks if c.source_name == "handbook.txt"]
        assert len(handbook) >= 3
        assert [c.chunk_index for c in handbook] == list(range(len(handbook)))
        assert handbook[0].text[800:900] == handbook[1].text[:100]

    def test_build_only_once(self, engine, data_dir):
        engine.build_from_directory(data_dir)
        with pytest.raises(RuntimeError):
            engine.build_from_directory(data_dir)


class TestEmptyCorpus:
    def test_empty_directory_builds_but_query_raises(self, engine, tmp_path):
        stats = engine.build_from_directory(tmp_path)
        assert stats.chunks_total == 0
        assert not engine.is_ready
        with pytest.raises(EmptyIndex):
            engine.query("Anything?")

    def test_empty_index_is_a_not_initialized_condition(self, engine, tmp_path):
        engine.build_from_directory(tmp_path)
        with pytest.raises(NotInitialized):
            engine.query("Anything?")

    def test_query_before_build(self, engine):
        with pytest.raises(NotInitialized) as exc_info:
            engine.query("Anything?")
        assert not isinstance(exc_info.value, EmptyIndex)

    def test_seeded_sample_makes_engine_ready(self, engine, tmp_path):
        engine.build_from_directory(tmp_path, seed_sample=True)
        assert engine.is_ready


class TestBuildFailure:
    def test_no_valid_embeddings_is_fatal(self, generator, settings):
        engine = RAGEngine(EmptyVectorEmbedder(), generator, settings=settings)
        with pytest.raises(IndexBuildError):
            engine.build([Document(source_name="a.txt", text="Some real content here.")])
        assert not engine.is_built
