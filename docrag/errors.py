"""Exception types for DocRAG.

Provider errors are raised by the HTTP client and absorbed by the
embedder (deterministic fallback) and the answer generator (retry, then
apology). Only the build and initialization errors reach callers.
"""


class DocRAGError(Exception):
    """Base class for all DocRAG errors."""


class ProviderError(DocRAGError):
    """A call to the embedding or generation provider failed."""


class ProviderUnavailable(ProviderError):
    """Transport failure or non-2xx status from a provider."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderTimeout(ProviderError):
    """A provider call exceeded its deadline and was aborted."""


class MalformedResponse(ProviderError):
    """A provider answered with a body that does not match its schema."""

    def __init__(self, message: str, detail: str = ""):
        super().__init__(message)
        self.detail = detail


class NotInitialized(DocRAGError):
    """A query was issued before the engine finished building its index."""


class EmptyIndex(NotInitialized):
    """The engine was built but the corpus produced no indexed chunks."""


class IndexBuildError(DocRAGError):
    """Chunks were produced but none received a valid embedding."""
