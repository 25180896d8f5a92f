"""Outcome of a single generation call."""

from dataclasses import dataclass

from docrag.models.enums import GenerationStatus


@dataclass(frozen=True)
class GenerationResult:
    """Succeeded(text) | TimedOut | Failed(reason).

    Returned instead of raising so the fallback chain can branch on
    ``status`` alone.
    """

    status: GenerationStatus
    text: str = ""
    reason: str = ""

    @classmethod
    def succeeded(cls, text: str) -> "GenerationResult":
        return cls(GenerationStatus.SUCCEEDED, text=text)

    @classmethod
    def timed_out(cls, reason: str = "") -> "GenerationResult":
        return cls(GenerationStatus.TIMED_OUT, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "GenerationResult":
        return cls(GenerationStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == GenerationStatus.SUCCEEDED
