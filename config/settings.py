"""Application configuration management."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """DocRAG application settings loaded from environment variables."""

    # Providers (embedding and generation share one Ollama server)
    ollama_base_url: str = "http://localhost:11434/api"
    ollama_model: str = "phi3:mini"

    # Embedding
    docrag_embedding_model: str = "all-minilm"
    docrag_embedding_dim: int = 384
    docrag_embedding_timeout: float = 30.0
    docrag_embed_batch_size: int = 10

    # Generation
    docrag_generation_timeout: float = 30.0

    # Documents
    docrag_data_dir: str = "./data"
    docrag_seed_sample: bool = False

    # Ingestion
    docrag_chunk_size: int = 1000
    docrag_chunk_overlap: int = 200

    # Retrieval
    docrag_top_k: int = 3
    docrag_context_chars: int = 800
    # Empirical values; retune for other embedding models or chunk sizes
    docrag_strict_threshold: float = 1.0
    docrag_lenient_threshold: float = 2.5
    docrag_length_penalty: float = 0.5
    docrag_min_words: int = 5
    docrag_max_words: int = 200

    # Query classification (None keeps the built-in keyword sets)
    docrag_skill_keywords: list[str] | None = None
    docrag_resume_keywords: list[str] | None = None

    @property
    def data_path(self) -> Path:
        return Path(self.docrag_data_dir)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
