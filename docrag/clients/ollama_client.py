"""HTTP client for the Ollama embedding and generation endpoints.

Every failure is mapped onto the provider error taxonomy so that callers
can decide between fallback, retry and apology without inspecting
``requests`` exceptions.
"""

import logging
import time

import requests
from pydantic import BaseModel, ValidationError

from docrag.clients.schemas import EmbeddingResponse, GenerationResponse
from docrag.errors import MalformedResponse, ProviderTimeout, ProviderUnavailable

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434/api"
CONNECT_TIMEOUT = 5.0


def split_deadline(timeout: float) -> tuple[float, float]:
    """Split a deadline into a (connect, read) timeout pair summing to it.

    requests applies each part separately, so a bare number would allow up
    to twice the deadline.
    """
    connect = min(CONNECT_TIMEOUT, timeout / 2)
    return connect, timeout - connect


class OllamaClient:
    """Thin wrapper over ``/embeddings`` and ``/generate``."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url.rstrip("/")

    def embeddings(self, model: str, prompt: str, timeout: float) -> list[float]:
        """Return the embedding vector for ``prompt``.

        Raises:
            ProviderTimeout, ProviderUnavailable, MalformedResponse
        """
        body = {"model": model, "prompt": prompt}
        parsed = self._post("embeddings", body, timeout, EmbeddingResponse)
        return parsed.embedding

    def generate(
        self,
        model: str,
        prompt: str,
        options: dict,
        timeout: float,
    ) -> str:
        """Run a non-streaming completion and return the response text.

        The request is aborted once ``timeout`` elapses without a response.
        Ollama sends the non-streaming body only when generation finishes,
        so connect plus read time bounds the whole call.

        Raises:
            ProviderTimeout, ProviderUnavailable, MalformedResponse
        """
        body = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": options,
        }
        logger.debug("Sending generation request (model=%s, prompt length=%d)", model, len(prompt))
        start = time.perf_counter()
        parsed = self._post("generate", body, timeout, GenerationResponse)
        logger.debug("Generation response received in %.2fs", time.perf_counter() - start)
        return parsed.response

    def _post(self, endpoint: str, body: dict, timeout: float, schema: type[BaseModel]):
        url = f"{self.base_url}/{endpoint}"
        try:
            response = requests.post(url, json=body, timeout=split_deadline(timeout))
        except requests.Timeout as e:
            raise ProviderTimeout(f"{endpoint} timed out after {timeout}s") from e
        except requests.RequestException as e:
            raise ProviderUnavailable(f"{endpoint} request failed: {e}") from e

        if not response.ok:
            raise ProviderUnavailable(
                f"Ollama API error ({response.status_code}): {response.reason}",
                status_code=response.status_code,
            )

        try:
            return schema.model_validate(response.json())
        except ValueError as e:
            # ValidationError is a ValueError; so is a JSON decode failure
            detail = e.json() if isinstance(e, ValidationError) else str(e)
            raise MalformedResponse(f"Unexpected {endpoint} response body", detail=detail) from e
