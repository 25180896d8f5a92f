"""Answer synthesis with a bounded timeout/fallback chain.

Every call to the generation provider produces a ``GenerationResult``.
``AnswerGenerator.generate`` walks the chain

    Generating -> Succeeded
               -> TimedOut -> (retry with best chunk) -> Succeeded | Failed
               -> Failed

and turns a terminal failure into ``APOLOGY_MESSAGE``; it never raises.
"""

import logging
from dataclasses import dataclass

from docrag.clients.ollama_client import OllamaClient
from docrag.errors import MalformedResponse, ProviderError, ProviderTimeout
from docrag.llm.prompts import (
    CONTEXT_OPTIONS,
    GENERAL_OPTIONS,
    SKILLS_OPTIONS,
    build_context_prompt,
    build_general_prompt,
    build_skills_prompt,
    clean_list_response,
)
from docrag.models.enums import GenerationStatus, QueryStage
from docrag.models.generation import GenerationResult
from docrag.retrieval.context import assemble_context

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = "I'm having trouble generating a response right now. Please try again later."
DEFAULT_MODEL = "phi3:mini"


@dataclass(frozen=True)
class RetryPolicy:
    """When to retry a failed generation.

    Only timeouts are retried, at most ``max_retries`` times, and only when
    more than one context chunk was available (the retry uses the single
    best-ranked chunk to shrink the prompt).
    """

    max_retries: int = 1

    def should_retry(self, result: GenerationResult, attempt: int, num_chunks: int) -> bool:
        return (
            result.status == GenerationStatus.TIMED_OUT
            and attempt < self.max_retries
            and num_chunks > 1
        )


class AnswerGenerator:
    """Builds prompts and calls the generation provider under a deadline."""

    def __init__(
        self,
        client: OllamaClient,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        context_chars: int = 800,
        retry_policy: RetryPolicy | None = None,
    ):
        self._client = client
        self.model = model
        self.timeout = timeout
        self.context_chars = context_chars
        self.retry_policy = retry_policy or RetryPolicy()

    def complete(self, prompt: str, options: dict) -> GenerationResult:
        """Run one generation call and classify its outcome."""
        try:
            text = self._client.generate(self.model, prompt, options, timeout=self.timeout)
        except ProviderTimeout as e:
            logger.warning("Generation timed out: %s", e)
            return GenerationResult.timed_out(str(e))
        except MalformedResponse as e:
            logger.warning("Malformed generation response: %s %s", e, e.detail)
            return GenerationResult.failed(str(e))
        except ProviderError as e:
            logger.warning("Generation provider error: %s", e)
            return GenerationResult.failed(str(e))

        text = text.strip()
        if not text:
            return GenerationResult.failed("empty response")
        return GenerationResult.succeeded(text)

    def generate(
        self,
        question: str,
        chunks: list[str] | None = None,
        resume: bool = False,
    ) -> str:
        """Answer ``question``, grounded in ``chunks`` when given.

        ``chunks`` are ordered best first. Returns the answer text or
        ``APOLOGY_MESSAGE``.
        """
        chunks = [c for c in (chunks or []) if c]
        candidates = chunks
        attempt = 0

        while True:
            logger.debug("Query stage: %s (attempt %d)", QueryStage.GENERATING.value, attempt)
            result = self._generate_once(question, candidates, resume)
            if result.ok:
                logger.debug("Query stage: %s", QueryStage.SUCCEEDED.value)
                return result.text
            if not self.retry_policy.should_retry(result, attempt, len(candidates)):
                break
            logger.info("Generation timed out with %d chunks, retrying with the best chunk", len(candidates))
            logger.debug("Query stage: %s", QueryStage.TIMED_OUT_RETRYING.value)
            candidates = candidates[:1]
            attempt += 1

        logger.debug("Query stage: %s (%s)", QueryStage.FAILED.value, result.reason)
        return APOLOGY_MESSAGE

    def _generate_once(self, question: str, chunks: list[str], resume: bool) -> GenerationResult:
        if chunks:
            context = assemble_context(chunks, budget=self.context_chars, resume=resume)
            return self.complete(build_context_prompt(context, question), CONTEXT_OPTIONS)
        return self.complete(build_general_prompt(question), GENERAL_OPTIONS)

    def extract_skills(self, context: str) -> str | None:
        """List the technologies mentioned in ``context``.

        Returns the cleaned list, or None if generation failed or produced
        nothing usable.
        """
        result = self.complete(build_skills_prompt(context), SKILLS_OPTIONS)
        if not result.ok:
            return None
        cleaned = clean_list_response(result.text)
        return cleaned or None
