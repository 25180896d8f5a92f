"""Response schemas for the Ollama HTTP API."""

from pydantic import BaseModel, Field


class EmbeddingResponse(BaseModel):
    """Body of a successful ``POST /embeddings``."""

    embedding: list[float] = Field(min_length=1)


class GenerationResponse(BaseModel):
    """Body of a successful non-streaming ``POST /generate``."""

    response: str = Field(min_length=1)
    model: str | None = None
    done: bool | None = None
    total_duration: int | None = None
