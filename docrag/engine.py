"""Retrieval-augmented question answering over a local document collection.

``RAGEngine`` owns the state built at startup (normalized documents, the
chunk list and the vector index) and answers questions against it. Build
it once, then share it between callers; queries only read that state.
"""

import logging
from pathlib import Path

from config.settings import Settings, get_settings
from docrag.clients.ollama_client import OllamaClient
from docrag.embedding.fallback import fallback_embedding
from docrag.embedding.ollama import OllamaEmbeddingProvider
from docrag.embedding.provider import EmbeddingProvider
from docrag.errors import EmptyIndex, IndexBuildError, NotInitialized
from docrag.ingestion.chunker import is_resume_document
from docrag.ingestion.loader import load_documents
from docrag.ingestion.pipeline import run_ingestion_pipeline
from docrag.llm.generator import AnswerGenerator
from docrag.models.chunk import Chunk
from docrag.models.document import Document
from docrag.models.enums import QueryStage
from docrag.models.stats import BuildStats
from docrag.retrieval.classifier import QueryClassifier
from docrag.retrieval.context import truncate_middle
from docrag.retrieval.retriever import Retriever
from docrag.vectorstore.faiss_store import FlatL2Index

logger = logging.getLogger(__name__)

SKILLS_QUERY = "technical skills and technologies"
SKILLS_TOP_K = 5

EMPTY_QUESTION_MESSAGE = "Please ask a question."
ERROR_MESSAGE = "I encountered an error while processing your request."


class RAGEngine:
    """Service object holding the index and answering questions."""

    def __init__(
        self,
        embedder: EmbeddingProvider,
        generator: AnswerGenerator,
        classifier: QueryClassifier | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.embedder = embedder
        self.generator = generator
        self.classifier = classifier or QueryClassifier()
        self.documents: list[Document] = []
        self.chunks: list[Chunk] = []
        self.stats: BuildStats | None = None
        self._retriever: Retriever | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RAGEngine":
        """Wire Ollama-backed collaborators from configuration."""
        settings = settings or get_settings()
        client = OllamaClient(settings.ollama_base_url)
        embedder = OllamaEmbeddingProvider(
            client,
            model_name=settings.docrag_embedding_model,
            default_dimension=settings.docrag_embedding_dim,
            timeout=settings.docrag_embedding_timeout,
        )
        generator = AnswerGenerator(
            client,
            model=settings.ollama_model,
            timeout=settings.docrag_generation_timeout,
            context_chars=settings.docrag_context_chars,
        )
        classifier_kwargs = {}
        if settings.docrag_skill_keywords is not None:
            classifier_kwargs["skill_keywords"] = settings.docrag_skill_keywords
        if settings.docrag_resume_keywords is not None:
            classifier_kwargs["resume_keywords"] = settings.docrag_resume_keywords
        return cls(embedder, generator, QueryClassifier(**classifier_kwargs), settings)

    @property
    def is_built(self) -> bool:
        return self.stats is not None

    @property
    def is_ready(self) -> bool:
        return self._retriever is not None

    def build(self, documents: list[Document]) -> BuildStats:
        """Ingest ``documents`` and construct the index exactly once.

        A corpus with no content leaves the engine empty; queries then raise
        EmptyIndex.

        Raises:
            RuntimeError: If the engine was already built.
            IndexBuildError: If chunks were produced but none could be embedded.
        """
        if self.is_built:
            raise RuntimeError("RAGEngine.build() may only be called once")

        s = self.settings
        normalized, indexed, stats = run_ingestion_pipeline(
            documents,
            self.embedder,
            chunk_size=s.docrag_chunk_size,
            chunk_overlap=s.docrag_chunk_overlap,
            batch_size=s.docrag_embed_batch_size,
        )

        if stats.chunks_total and not indexed:
            raise IndexBuildError(
                f"No valid embeddings were generated for {stats.chunks_total} chunks"
            )

        self.documents = normalized
        self.chunks = [item.chunk for item in indexed]
        if indexed:
            index = FlatL2Index.build([item.embedding for item in indexed])
            self._retriever = Retriever(
                index,
                self.chunks,
                strict_threshold=s.docrag_strict_threshold,
                lenient_threshold=s.docrag_lenient_threshold,
                length_penalty=s.docrag_length_penalty,
                min_words=s.docrag_min_words,
                max_words=s.docrag_max_words,
            )
        else:
            logger.warning("No documents with content; the index is empty")

        self.stats = stats
        logger.info(
            "Index built: %d/%d chunks from %d documents",
            stats.chunks_indexed, stats.chunks_total, len(normalized),
        )
        return stats

    def build_from_directory(
        self,
        data_dir: Path | None = None,
        seed_sample: bool | None = None,
    ) -> BuildStats:
        """Load every document in ``data_dir`` and build the index."""
        data_dir = Path(data_dir) if data_dir is not None else self.settings.data_path
        if seed_sample is None:
            seed_sample = self.settings.docrag_seed_sample
        return self.build(load_documents(data_dir, seed_sample=seed_sample))

    def query(self, question: str) -> str:
        """Answer ``question`` with plain text.

        Raises:
            NotInitialized: If build() has not completed.
            EmptyIndex: If the build produced no indexed chunks.
        """
        retriever = self._require_retriever()
        question = question.strip()
        if not question:
            return EMPTY_QUESTION_MESSAGE

        logger.debug("Query stage: %s: %r", QueryStage.IDLE.value, question)
        try:
            return self._answer(retriever, question)
        except Exception:
            logger.exception("Unexpected error while answering %r", question)
            return ERROR_MESSAGE

    def _require_retriever(self) -> Retriever:
        if not self.is_built:
            raise NotInitialized("RAG engine not initialized. Call build() first.")
        if self._retriever is None:
            raise EmptyIndex("RAG engine has no indexed chunks to search.")
        return self._retriever

    def _answer(self, retriever: Retriever, question: str) -> str:
        if self.classifier.is_skills_question(question):
            answer = self._answer_skills(retriever)
            if answer is not None:
                return answer
            logger.info("Skills extraction produced nothing, using standard retrieval")

        resume_question = self.classifier.is_resume_question(question)

        logger.debug("Query stage: %s", QueryStage.EMBEDDING.value)
        query_vector = self._embed_query(question)

        logger.debug("Query stage: %s", QueryStage.RETRIEVING.value)
        context = retriever.retrieve(query_vector, self.settings.docrag_top_k, lenient=resume_question)

        if context.accepted:
            logger.debug("Query stage: %s", QueryStage.CONTEXT_ACCEPTED.value)
            resume = any(c.chunk.is_resume for c in context.chunks)
            return self.generator.generate(question, context.texts, resume=resume)

        logger.debug(
            "Query stage: %s (best quality %s > %.2f)",
            QueryStage.CONTEXT_REJECTED.value, context.best_quality, context.threshold,
        )
        if resume_question:
            return self.generator.generate(question, [self._resume_context()], resume=True)
        return self.generator.generate(question)

    def _answer_skills(self, retriever: Retriever) -> str | None:
        texts = retriever.top_unique(self._embed_query(SKILLS_QUERY), SKILLS_TOP_K)
        if not texts:
            return None
        return self.generator.extract_skills("\n\n".join(texts))

    def _embed_query(self, text: str) -> list[float]:
        """Embed a query, guaranteeing the index dimension."""
        vector = self.embedder.embed(text)
        dim = self.stats.dimension
        if len(vector) != dim:
            logger.warning(
                "Query embedding has dimension %d, index has %d; using fallback",
                len(vector), dim,
            )
            return fallback_embedding(text, dim)
        return vector

    def _resume_context(self) -> str:
        """Truncated concatenation of all documents, résumés first."""
        ordered = sorted(
            self.documents,
            key=lambda d: not is_resume_document(d.source_name, d.text),
        )
        joined = "\n\n".join(d.text for d in ordered)
        return truncate_middle(joined, self.settings.docrag_context_chars)
