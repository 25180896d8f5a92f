"""Ingestion pipeline: normalize, chunk and embed documents.

Wires together: normalizer -> chunker -> embedding provider. Embedding runs
in bounded batches; calls within a batch run concurrently and the batch is
awaited as a whole before the next one starts.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from docrag.embedding.fallback import fallback_embedding
from docrag.embedding.provider import EmbeddingProvider
from docrag.ingestion.chunker import chunk_document
from docrag.ingestion.normalizer import normalize_text
from docrag.models.chunk import Chunk, IndexedChunk
from docrag.models.document import Document
from docrag.models.stats import BuildStats

logger = logging.getLogger(__name__)


def prepare_documents(documents: list[Document]) -> tuple[list[Document], int]:
    """Normalize documents, dropping those with no content left.

    Returns (normalized documents, number skipped).
    """
    normalized = []
    skipped = 0
    for doc in documents:
        text = normalize_text(doc.text)
        if not text:
            logger.warning("Document %s is empty after normalization, skipping", doc.source_name)
            skipped += 1
            continue
        normalized.append(Document(source_name=doc.source_name, text=text))
    return normalized, skipped


def embed_in_batches(
    provider: EmbeddingProvider,
    texts: list[str],
    batch_size: int = 10,
) -> list[list[float] | None]:
    """Embed texts in sequential batches of concurrent calls.

    Results keep input order. An item whose provider call raised is None.
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be > 0")

    results: list[list[float] | None] = []
    with ThreadPoolExecutor(max_workers=batch_size, thread_name_prefix="embed") as pool:
        for batch_start in range(0, len(texts), batch_size):
            batch = texts[batch_start:batch_start + batch_size]
            logger.info(
                "Embedding chunks %d-%d of %d",
                batch_start + 1, batch_start + len(batch), len(texts),
            )
            futures = [pool.submit(provider.embed, text) for text in batch]
            for offset, future in enumerate(futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error("Embedding failed for chunk %d: %s", batch_start + offset, e)
                    results.append(None)
    return results


def select_valid(
    chunks: list[Chunk],
    embeddings: list[list[float] | None],
    dimension: int | None = None,
) -> tuple[list[IndexedChunk], int | None]:
    """Pair chunks with usable embeddings at one shared dimension.

    ``dimension`` is normally the provider's, fixed by its first successful
    vector. Without it, the first non-empty embedding in chunk order fixes
    the dimension. A chunk whose embedding has another length gets the
    fallback vector at that dimension; a chunk with no embedding at all is
    excluded. Returns (valid pairs, dimension).
    """
    if not dimension:
        dimension = next((len(e) for e in embeddings if e), None)
    valid = []
    for chunk, emb in zip(chunks, embeddings):
        if not emb:
            logger.warning(
                "Excluding chunk %d of %s: no valid embedding",
                chunk.chunk_index, chunk.source_name,
            )
            continue
        if len(emb) != dimension:
            logger.warning(
                "Chunk %d of %s has a %d-value embedding, expected %d; using fallback",
                chunk.chunk_index, chunk.source_name, len(emb), dimension,
            )
            emb = fallback_embedding(chunk.text, dimension)
        valid.append(IndexedChunk(chunk=chunk, embedding=emb))
    return valid, dimension


def run_ingestion_pipeline(
    documents: list[Document],
    provider: EmbeddingProvider,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
    batch_size: int = 10,
) -> tuple[list[Document], list[IndexedChunk], BuildStats]:
    """Run normalization, chunking and embedding for all documents.

    Returns the normalized documents, the valid (chunk, embedding) pairs
    and a summary of the run.
    """
    normalized, skipped = prepare_documents(documents)

    chunks: list[Chunk] = []
    for doc in normalized:
        doc_chunks = chunk_document(doc, size=chunk_size, overlap=chunk_overlap)
        logger.info("Chunked %s: %d chunks", doc.source_name, len(doc_chunks))
        chunks.extend(doc_chunks)

    embeddings = embed_in_batches(provider, [c.text for c in chunks], batch_size=batch_size)
    valid, dimension = select_valid(chunks, embeddings, provider.dimension)

    stats = BuildStats(
        documents_loaded=len(documents),
        documents_skipped=skipped,
        chunks_total=len(chunks),
        chunks_indexed=len(valid),
        chunks_excluded=len(chunks) - len(valid),
        dimension=dimension,
    )
    return normalized, valid, stats
